"""
Error types raised by resolvers and repositories.

Every ``GraphError`` carries a message that is safe to return to clients.
Anything else that escapes a resolver is masked by the schema.
"""


class GraphError(Exception):
    """Base exception for errors surfaced to GraphQL clients."""

    pass


class NotFoundError(GraphError):
    """A referenced entity or subscription link does not exist."""

    def __init__(self, entity: str, key: object):
        self.entity = entity
        self.key = key
        super().__init__(f"{entity} not found: {key}")


class ConflictError(GraphError):
    """A write would break a uniqueness rule of the store."""

    pass


class ScalarCoercionError(GraphError):
    """A scalar value could not be parsed or serialized."""

    pass


class RepositoryFault(GraphError):
    """The backing store failed or returned inconsistent data."""

    def __init__(self, message: str = "Repository operation failed"):
        super().__init__(message)

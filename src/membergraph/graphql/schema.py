"""
Main GraphQL schema definition using Strawberry

The schema is assembled once at import time and shared read-only by every
request.
"""

from typing import Any

import strawberry
from graphql import GraphQLError, get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from strawberry.extensions import MaskErrors

from ..errors import GraphError
from ..logging import get_logger
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)


def should_mask_error(error: GraphQLError) -> bool:
    """Hide messages of exceptions that were not raised deliberately."""
    original = error.original_error
    if original is None:
        return False
    return not isinstance(original, (GraphError, GraphQLError))


class MaskUnexpectedErrors(MaskErrors):
    """MaskErrors bound to ``should_mask_error``; instantiated once per operation."""

    def __init__(self, *, execution_context: Any = None):
        _ = execution_context
        super().__init__(should_mask_error=should_mask_error, error_message="Internal server error")


schema = strawberry.Schema(
    query=Query,
    mutation=Mutation,
    extensions=[MaskUnexpectedErrors],
)


def validate_schema() -> None:
    """Validate the GraphQL schema at startup.

    Fails fast when a lazy type reference cannot be resolved.

    Raises:
        RuntimeError: If the schema is invalid or introspection fails
    """
    graphql_schema = schema._schema

    errors = gql_validate_schema(graphql_schema)
    if errors:
        error_messages = [str(e) for e in errors]
        logger.error("GraphQL schema validation failed", errors=error_messages)
        raise RuntimeError(f"GraphQL schema validation failed: {'; '.join(error_messages)}")

    result = graphql_sync(graphql_schema, get_introspection_query())
    if result.errors:
        error_messages = [str(e) for e in result.errors]
        logger.error("GraphQL introspection failed", errors=error_messages)
        raise RuntimeError(f"GraphQL introspection failed: {'; '.join(error_messages)}")

    logger.info("GraphQL schema validation successful")

"""Repository collaborators used by the GraphQL resolvers."""

from .base import (
    DEFAULT_MEMBER_TYPES,
    MemberTypeRecord,
    PostRecord,
    ProfileRecord,
    ReadRepository,
    Repositories,
    Repository,
    SubscriptionRecord,
    SubscriptionRepository,
    UserRecord,
)

__all__ = [
    "DEFAULT_MEMBER_TYPES",
    "MemberTypeRecord",
    "PostRecord",
    "ProfileRecord",
    "ReadRepository",
    "Repositories",
    "Repository",
    "SubscriptionRecord",
    "SubscriptionRepository",
    "UserRecord",
    "create_repositories",
]


def create_repositories(backend: str | None = None) -> Repositories:
    """Build the repository bundle for the configured backend."""
    from ..config import settings

    backend = backend or settings.repository_backend
    if backend == "memory":
        from .memory import create_memory_repositories

        return create_memory_repositories(seed_member_types=settings.seed_member_types)
    if backend == "sqlalchemy":
        from .relational import create_sqlalchemy_repositories

        return create_sqlalchemy_repositories()
    raise ValueError(f"Unknown repository backend: {backend}")

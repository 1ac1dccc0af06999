"""
Per-request GraphQL context
"""

from typing import Any

import strawberry

from ..repositories.base import Repositories


def build_context(repositories: Repositories, request: Any = None) -> dict[str, Any]:
    """Build the context handed to every resolver of one operation."""
    return {
        "request": request,
        "repositories": repositories,
    }


def get_repositories(info: strawberry.Info) -> Repositories:
    """Extract the repository bundle from a resolver's info object."""
    repositories = info.context.get("repositories")
    if repositories is None:
        raise RuntimeError("Repositories not found in GraphQL context")
    return repositories

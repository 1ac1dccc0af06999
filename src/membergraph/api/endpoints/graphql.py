"""GraphQL endpoint."""

from typing import Any

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict

from ...graphql.pipeline import execute_query
from ...repositories.base import Repositories

router = APIRouter()


class GraphQLRequestBody(BaseModel):
    """Request body; any field besides ``query`` and ``variables`` is rejected."""

    model_config = ConfigDict(extra="forbid")

    query: str
    variables: dict[str, Any] | None = None


def get_repositories(request: Request) -> Repositories:
    """FastAPI dependency returning the repositories bound at startup."""
    repositories = getattr(request.app.state, "repositories", None)
    if repositories is None:
        raise RuntimeError("Repositories not initialized")
    return repositories


@router.post("")
async def graphql_endpoint(
    body: GraphQLRequestBody,
    request: Request,
    repositories: Repositories = Depends(get_repositories),
) -> dict[str, Any]:
    """Execute a GraphQL document and return the ``{data, errors}`` envelope."""
    return await execute_query(
        body.query,
        body.variables,
        repositories=repositories,
        request=request,
    )

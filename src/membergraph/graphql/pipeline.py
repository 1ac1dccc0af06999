"""
Query pipeline: parse, depth check, execute, shape the response envelope.

Each stage is terminal on failure. A document that does not parse or nests
too deeply never reaches the resolvers, so no repository call is made.

The guard parses the document itself; ``schema.execute`` takes query text and
parses it a second time before validating and running it.
"""

from collections.abc import Sequence
from typing import Any

import strawberry
from graphql import GraphQLError, parse

from ..config import settings
from ..logging import get_logger
from ..repositories.base import Repositories
from .context import build_context
from .depth import validate_query_depth
from .schema import schema as default_schema

logger = get_logger(__name__)


def shape_envelope(data: Any, errors: Sequence[GraphQLError] | None = None) -> dict[str, Any]:
    """Build the ``{data, errors}`` response body; ``errors`` is omitted on success."""
    envelope: dict[str, Any] = {"data": data}
    if errors:
        envelope["errors"] = [error.formatted for error in errors]
    return envelope


async def execute_query(
    query: str,
    variables: dict[str, Any] | None = None,
    *,
    repositories: Repositories,
    operation_name: str | None = None,
    request: Any = None,
    schema: strawberry.Schema | None = None,
    max_depth: int | None = None,
) -> dict[str, Any]:
    """
    Run one GraphQL request against the shared schema.

    Args:
        query: GraphQL document text
        variables: Variable values keyed by name
        repositories: Store access handed to resolvers through the context
        operation_name: Operation to run when the document holds several
        request: Transport request object, exposed to resolvers as context
        schema: Schema override (defaults to the assembled application schema)
        max_depth: Depth limit override (defaults to settings.max_query_depth)

    Returns:
        The response envelope
    """
    schema = schema or default_schema
    max_depth = settings.max_query_depth if max_depth is None else max_depth

    try:
        document = parse(query)
    except GraphQLError as error:
        logger.info("GraphQL syntax error", error=error.message)
        return shape_envelope(None, [error])

    depth_errors = validate_query_depth(document, max_depth)
    if depth_errors:
        logger.warning(
            "GraphQL query rejected by depth limit",
            max_depth=max_depth,
            operation_name=operation_name,
        )
        return shape_envelope(None, depth_errors)

    result = await schema.execute(
        query,
        variable_values=variables,
        context_value=build_context(repositories, request),
        operation_name=operation_name,
    )

    if result.errors:
        logger.info(
            "GraphQL operation completed with errors",
            operation_name=operation_name,
            errors=[error.message for error in result.errors],
        )
    else:
        logger.debug("GraphQL operation completed", operation_name=operation_name)

    return shape_envelope(result.data, result.errors)

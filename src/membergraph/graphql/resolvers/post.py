from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ..context import get_repositories
from ..converters import input_to_fields, post_to_gql

if TYPE_CHECKING:
    from ..mutations.root import ChangePostInput, CreatePostInput
    from ..types.post import Post
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_posts(info: strawberry.Info) -> list[Post]:
    repositories = get_repositories(info)
    return [post_to_gql(record) for record in await repositories.posts.find_many()]


async def resolve_post_by_id(info: strawberry.Info, id: str) -> Post | None:
    record = await get_repositories(info).posts.find_by_id(id)
    if record is None:
        logger.info("Post not found", post_id=id)
        return None
    return post_to_gql(record)


# Field resolvers
async def resolve_user_posts(user: User, info: strawberry.Info) -> list[Post]:
    """Resolve the posts authored by a user."""
    records = await get_repositories(info).posts.find_many(author_id=user.id)
    return [post_to_gql(record) for record in records]


# Mutation resolvers
async def create_post(info: strawberry.Info, dto: CreatePostInput) -> Post:
    """
    Create a post for an existing author.

    A dangling author id is rejected by the repository with NotFoundError.
    """
    record = await get_repositories(info).posts.create(input_to_fields(dto))
    logger.info("Post created", post_id=record.id, author_id=record.author_id)
    return post_to_gql(record)


async def change_post(info: strawberry.Info, id: str, dto: ChangePostInput) -> Post:
    fields = input_to_fields(dto)
    record = await get_repositories(info).posts.update(id, fields)
    logger.info("Post updated", post_id=id, fields=sorted(fields))
    return post_to_gql(record)


async def delete_post(info: strawberry.Info, id: str) -> bool:
    await get_repositories(info).posts.delete(id)
    logger.info("Post deleted", post_id=id)
    return True

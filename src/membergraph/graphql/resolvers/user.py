from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...errors import RepositoryFault
from ...logging import get_logger
from ..context import get_repositories
from ..converters import input_to_fields, profile_to_gql, user_to_gql

if TYPE_CHECKING:
    from ..mutations.root import ChangeUserInput, CreateUserInput
    from ..types.profile import Profile
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_users(info: strawberry.Info) -> list[User]:
    repositories = get_repositories(info)
    return [user_to_gql(record) for record in await repositories.users.find_many()]


async def resolve_user_by_id(info: strawberry.Info, id: str) -> User | None:
    """Resolve a user by ID; a missing user resolves to null."""
    record = await get_repositories(info).users.find_by_id(id)
    if record is None:
        logger.info("User not found", user_id=id)
        return None
    return user_to_gql(record)


# Field resolvers
async def resolve_user_profile(user: User, info: strawberry.Info) -> Profile | None:
    """
    Resolve the profile owned by a user.

    Profiles are unique per user, so more than one match means the store is
    inconsistent and is reported as a fault rather than picking one.
    """
    records = await get_repositories(info).profiles.find_many(user_id=user.id)
    if not records:
        return None
    if len(records) > 1:
        logger.error(
            "Multiple profiles found for user",
            user_id=user.id,
            profile_ids=[record.id for record in records],
        )
        raise RepositoryFault(f"Inconsistent profile data for user {user.id}")
    return profile_to_gql(records[0])


# Mutation resolvers
async def create_user(info: strawberry.Info, dto: CreateUserInput) -> User:
    record = await get_repositories(info).users.create(input_to_fields(dto))
    logger.info("User created", user_id=record.id)
    return user_to_gql(record)


async def change_user(info: strawberry.Info, id: str, dto: ChangeUserInput) -> User:
    fields = input_to_fields(dto)
    record = await get_repositories(info).users.update(id, fields)
    logger.info("User updated", user_id=id, fields=sorted(fields))
    return user_to_gql(record)


async def delete_user(info: strawberry.Info, id: str) -> bool:
    await get_repositories(info).users.delete(id)
    logger.info("User deleted", user_id=id)
    return True

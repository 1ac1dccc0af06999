from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ..context import get_repositories
from ..converters import input_to_fields, profile_to_gql, user_to_gql

if TYPE_CHECKING:
    from ..mutations.root import ChangeProfileInput, CreateProfileInput
    from ..types.profile import Profile
    from ..types.user import User

logger = get_logger(__name__)


# Query resolvers
async def resolve_profiles(info: strawberry.Info) -> list[Profile]:
    repositories = get_repositories(info)
    return [profile_to_gql(record) for record in await repositories.profiles.find_many()]


async def resolve_profile_by_id(info: strawberry.Info, id: str) -> Profile | None:
    record = await get_repositories(info).profiles.find_by_id(id)
    if record is None:
        logger.info("Profile not found", profile_id=id)
        return None
    return profile_to_gql(record)


# Field resolvers
async def resolve_profile_user(profile: Profile, info: strawberry.Info) -> User | None:
    """Resolve the owner of a profile; null when the user row is gone."""
    record = await get_repositories(info).users.find_by_id(profile.user_id)
    if record is None:
        logger.warning(
            "Profile owner not found", profile_id=profile.id, user_id=profile.user_id
        )
        return None
    return user_to_gql(record)


# Mutation resolvers
async def create_profile(info: strawberry.Info, dto: CreateProfileInput) -> Profile:
    """
    Create a profile.

    The repository rejects a missing user or member type (NotFoundError) and a
    second profile for the same user (ConflictError); both reach the client as
    errors on this field.
    """
    record = await get_repositories(info).profiles.create(input_to_fields(dto))
    logger.info("Profile created", profile_id=record.id, user_id=record.user_id)
    return profile_to_gql(record)


async def change_profile(info: strawberry.Info, id: str, dto: ChangeProfileInput) -> Profile:
    fields = input_to_fields(dto)
    record = await get_repositories(info).profiles.update(id, fields)
    logger.info("Profile updated", profile_id=id, fields=sorted(fields))
    return profile_to_gql(record)


async def delete_profile(info: strawberry.Info, id: str) -> bool:
    await get_repositories(info).profiles.delete(id)
    logger.info("Profile deleted", profile_id=id)
    return True

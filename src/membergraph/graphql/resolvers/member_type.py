from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...logging import get_logger
from ..context import get_repositories
from ..converters import member_type_to_gql

if TYPE_CHECKING:
    from ..types.member_type import MemberType, MemberTypeId
    from ..types.profile import Profile

logger = get_logger(__name__)


async def resolve_member_types(info: strawberry.Info) -> list[MemberType]:
    records = await get_repositories(info).member_types.find_many()
    return [member_type_to_gql(record) for record in records]


async def resolve_member_type_by_id(info: strawberry.Info, id: MemberTypeId) -> MemberType | None:
    record = await get_repositories(info).member_types.find_by_id(id.value)
    return member_type_to_gql(record) if record is not None else None


async def resolve_profile_member_type(profile: Profile, info: strawberry.Info) -> MemberType | None:
    """Resolve a profile's tier strictly through its own member_type_id."""
    record = await get_repositories(info).member_types.find_by_id(profile.member_type_id.value)
    if record is None:
        logger.warning(
            "Member type not found",
            profile_id=profile.id,
            member_type_id=profile.member_type_id.value,
        )
        return None
    return member_type_to_gql(record)

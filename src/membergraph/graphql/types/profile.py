"""
Profile GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

from ..scalars import UUID
from .member_type import MemberType, MemberTypeId

if TYPE_CHECKING:
    from .user import User


@strawberry.type(description="The profile representation in the database")
class Profile:
    id: UUID
    is_male: bool
    year_of_birth: int
    user_id: UUID
    member_type_id: MemberTypeId

    @strawberry.field
    async def user(self, info: strawberry.Info) -> Annotated["User", strawberry.lazy(".user")] | None:
        """The user owning this profile."""
        from ..resolvers.profile import resolve_profile_user

        return await resolve_profile_user(self, info)

    @strawberry.field
    async def member_type(self, info: strawberry.Info) -> MemberType | None:
        """The membership tier referenced by this profile."""
        from ..resolvers.member_type import resolve_profile_member_type

        return await resolve_profile_member_type(self, info)

"""
User GraphQL type definitions
"""

from typing import TYPE_CHECKING, Annotated

import strawberry

from ..scalars import UUID

if TYPE_CHECKING:
    from .post import Post
    from .profile import Profile


@strawberry.type(description="The user representation in the database")
class User:
    id: UUID
    name: str
    balance: float

    @strawberry.field
    async def profile(
        self, info: strawberry.Info
    ) -> Annotated["Profile", strawberry.lazy(".profile")] | None:
        """The profile owned by this user, if one exists."""
        from ..resolvers.user import resolve_user_profile

        return await resolve_user_profile(self, info)

    @strawberry.field
    async def posts(
        self, info: strawberry.Info
    ) -> list[Annotated["Post", strawberry.lazy(".post")]] | None:
        """Posts written by this user."""
        from ..resolvers.post import resolve_user_posts

        return await resolve_user_posts(self, info)

    @strawberry.field
    async def user_subscribed_to(self, info: strawberry.Info) -> list["User"] | None:
        """Users this user subscribes to."""
        from ..resolvers.subscription import resolve_user_subscribed_to

        return await resolve_user_subscribed_to(self, info)

    @strawberry.field
    async def subscribed_to_user(self, info: strawberry.Info) -> list["User"] | None:
        """Users subscribed to this user."""
        from ..resolvers.subscription import resolve_subscribed_to_user

        return await resolve_subscribed_to_user(self, info)

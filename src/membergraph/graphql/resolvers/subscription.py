"""
Resolvers for the self-referential user subscription relation.

A subscription is a (subscriber, author) join pair. ``userSubscribedTo``
walks it from the subscriber side, ``subscribedToUser`` from the author side.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import strawberry

from ...errors import NotFoundError
from ...logging import get_logger
from ..context import get_repositories
from ..converters import user_to_gql

if TYPE_CHECKING:
    from ..types.user import User

logger = get_logger(__name__)


# Field resolvers
async def resolve_user_subscribed_to(user: User, info: strawberry.Info) -> list[User]:
    """Users the given user subscribes to (the user is the subscriber)."""
    records = await get_repositories(info).subscriptions.find_authors(user.id)
    return [user_to_gql(record) for record in records]


async def resolve_subscribed_to_user(user: User, info: strawberry.Info) -> list[User]:
    """Users subscribed to the given user (the user is the author)."""
    records = await get_repositories(info).subscriptions.find_subscribers(user.id)
    return [user_to_gql(record) for record in records]


# Mutation resolvers
async def subscribe_to(info: strawberry.Info, user_id: str, author_id: str) -> User:
    """
    Create the join pair (user_id -> author_id) and return the subscriber.
    """
    repositories = get_repositories(info)
    await repositories.subscriptions.create_link(user_id, author_id)
    logger.info("Subscription created", subscriber_id=user_id, author_id=author_id)

    subscriber = await repositories.users.find_by_id(user_id)
    if subscriber is None:
        # Deleted between the link insert and this read
        raise NotFoundError("User", user_id)
    return user_to_gql(subscriber)


async def unsubscribe_from(info: strawberry.Info, user_id: str, author_id: str) -> bool:
    await get_repositories(info).subscriptions.delete_link(user_id, author_id)
    logger.info("Subscription removed", subscriber_id=user_id, author_id=author_id)
    return True

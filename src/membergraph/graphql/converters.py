"""
Converters between repository records and GraphQL types.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

from ..repositories.base import MemberTypeRecord, PostRecord, ProfileRecord, UserRecord
from .types.member_type import MemberType, MemberTypeId
from .types.post import Post
from .types.profile import Profile
from .types.user import User


def user_to_gql(record: UserRecord) -> User:
    return User(id=record.id, name=record.name, balance=record.balance)


def profile_to_gql(record: ProfileRecord) -> Profile:
    return Profile(
        id=record.id,
        is_male=record.is_male,
        year_of_birth=record.year_of_birth,
        user_id=record.user_id,
        member_type_id=MemberTypeId(record.member_type_id),
    )


def post_to_gql(record: PostRecord) -> Post:
    return Post(
        id=record.id,
        title=record.title,
        content=record.content,
        author_id=record.author_id,
    )


def member_type_to_gql(record: MemberTypeRecord) -> MemberType:
    return MemberType(
        id=MemberTypeId(record.id),
        discount=record.discount,
        posts_limit_per_month=record.posts_limit_per_month,
    )


def input_to_fields(dto: object) -> dict[str, Any]:
    """Turn a mutation input into repository fields, skipping null entries."""
    fields: dict[str, Any] = {}
    for field in dataclasses.fields(dto):
        value = getattr(dto, field.name)
        if value is None:
            continue
        fields[field.name] = value.value if isinstance(value, Enum) else value
    return fields

"""In-process repository implementation.

Keeps every table in a dict keyed by id. Enforces the same write rules as the
relational backend: foreign keys must resolve, ``profiles.user_id`` is unique
and a subscription pair exists at most once. Deletes never cascade.
"""

from __future__ import annotations

import dataclasses
import uuid
from typing import Any

from ..errors import ConflictError, NotFoundError
from ..logging import get_logger
from .base import (
    DEFAULT_MEMBER_TYPES,
    MemberTypeRecord,
    PostRecord,
    ProfileRecord,
    ReadRepository,
    RecordT,
    Repositories,
    Repository,
    SubscriptionRecord,
    SubscriptionRepository,
    UserRecord,
)

logger = get_logger(__name__)


class MemoryStore:
    """Shared tables for a set of in-memory repositories."""

    def __init__(self) -> None:
        self.tables: dict[str, dict[str, Any]] = {
            "users": {},
            "profiles": {},
            "posts": {},
            "member_types": {},
        }
        self.subscriptions: dict[tuple[str, str], SubscriptionRecord] = {}


class MemoryReadRepository(ReadRepository[RecordT]):
    def __init__(self, store: MemoryStore, table: str, entity: str):
        self._store = store
        self._table = table
        self._entity = entity

    @property
    def rows(self) -> dict[str, RecordT]:
        return self._store.tables[self._table]

    async def find_by_id(self, id: str) -> RecordT | None:
        return self.rows.get(id)

    async def find_many(self, **filters: Any) -> list[RecordT]:
        return [
            row
            for row in self.rows.values()
            if all(getattr(row, field) == value for field, value in filters.items())
        ]


class MemoryRepository(MemoryReadRepository[RecordT], Repository[RecordT]):
    def __init__(
        self,
        store: MemoryStore,
        table: str,
        entity: str,
        record_cls: type[RecordT],
        *,
        unique: tuple[str, ...] = (),
        references: dict[str, tuple[str, str]] | None = None,
    ):
        super().__init__(store, table, entity)
        self._record_cls = record_cls
        self._unique = unique
        # field -> (table, entity name) it must point into
        self._references = references or {}

    def _check_references(self, fields: dict[str, Any]) -> None:
        for field, (table, entity) in self._references.items():
            if field in fields and fields[field] not in self._store.tables[table]:
                raise NotFoundError(entity, fields[field])

    def _check_unique(self, record: RecordT) -> None:
        for field in self._unique:
            value = getattr(record, field)
            for row_id, row in self.rows.items():
                if row_id != record.id and getattr(row, field) == value:
                    raise ConflictError(f"{self._entity} with {field} {value} already exists")

    async def create(self, fields: dict[str, Any]) -> RecordT:
        self._check_references(fields)
        record = self._record_cls(id=str(uuid.uuid4()), **fields)
        self._check_unique(record)
        self.rows[record.id] = record
        logger.debug("Record inserted", entity=self._entity, id=record.id)
        return record

    async def update(self, id: str, fields: dict[str, Any]) -> RecordT:
        existing = self.rows.get(id)
        if existing is None:
            raise NotFoundError(self._entity, id)
        self._check_references(fields)
        record = dataclasses.replace(existing, **fields)
        self._check_unique(record)
        self.rows[id] = record
        return record

    async def delete(self, id: str) -> None:
        if self.rows.pop(id, None) is None:
            raise NotFoundError(self._entity, id)


class MemorySubscriptionRepository(SubscriptionRepository):
    def __init__(self, store: MemoryStore):
        self._store = store

    def _user(self, id: str) -> UserRecord | None:
        return self._store.tables["users"].get(id)

    async def create_link(self, subscriber_id: str, author_id: str) -> None:
        for user_id in (subscriber_id, author_id):
            if self._user(user_id) is None:
                raise NotFoundError("User", user_id)

        key = (subscriber_id, author_id)
        if key in self._store.subscriptions:
            raise ConflictError(f"User {subscriber_id} is already subscribed to {author_id}")
        self._store.subscriptions[key] = SubscriptionRecord(*key)

    async def delete_link(self, subscriber_id: str, author_id: str) -> None:
        if self._store.subscriptions.pop((subscriber_id, author_id), None) is None:
            raise NotFoundError("Subscription", f"{subscriber_id} -> {author_id}")

    async def find_authors(self, subscriber_id: str) -> list[UserRecord]:
        return [
            user
            for link in self._store.subscriptions.values()
            if link.subscriber_id == subscriber_id and (user := self._user(link.author_id))
        ]

    async def find_subscribers(self, author_id: str) -> list[UserRecord]:
        return [
            user
            for link in self._store.subscriptions.values()
            if link.author_id == author_id and (user := self._user(link.subscriber_id))
        ]


def create_memory_repositories(
    store: MemoryStore | None = None, *, seed_member_types: bool = True
) -> Repositories:
    """Build a repository bundle backed by ``store`` (a fresh one by default)."""
    store = store or MemoryStore()
    if seed_member_types:
        for member_type in DEFAULT_MEMBER_TYPES:
            store.tables["member_types"].setdefault(member_type.id, member_type)

    return Repositories(
        users=MemoryRepository(store, "users", "User", UserRecord),
        profiles=MemoryRepository(
            store,
            "profiles",
            "Profile",
            ProfileRecord,
            unique=("user_id",),
            references={
                "user_id": ("users", "User"),
                "member_type_id": ("member_types", "MemberType"),
            },
        ),
        posts=MemoryRepository(
            store,
            "posts",
            "Post",
            PostRecord,
            references={"author_id": ("users", "User")},
        ),
        member_types=MemoryReadRepository[MemberTypeRecord](store, "member_types", "MemberType"),
        subscriptions=MemorySubscriptionRepository(store),
    )

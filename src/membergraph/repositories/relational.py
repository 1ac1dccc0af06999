"""Relational repository implementation on the SQLAlchemy async ORM.

Each repository call runs in its own session, so one resolver issues one
transaction. Store failures never escape as SQLAlchemy exceptions: unique
violations become ``ConflictError`` and everything else ``RepositoryFault``
with the detail kept in the logs.
"""

from __future__ import annotations

import dataclasses
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..database.connection import get_async_session
from ..dbmodels import Base, MemberTypes, Posts, Profiles, SubscribersOnAuthors, Users
from ..errors import ConflictError, NotFoundError, RepositoryFault
from ..logging import get_logger
from .base import (
    MemberTypeRecord,
    PostRecord,
    ProfileRecord,
    ReadRepository,
    RecordT,
    Repositories,
    Repository,
    SubscriptionRepository,
    UserRecord,
)

logger = get_logger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]


@asynccontextmanager
async def _transaction(session_factory: SessionFactory, entity: str) -> AsyncIterator[AsyncSession]:
    try:
        async with session_factory() as session:
            yield session
    except IntegrityError as e:
        logger.warning("Integrity violation", entity=entity, error=str(e.orig))
        raise ConflictError(f"{entity} conflicts with an existing record") from e
    except (SQLAlchemyError, OSError) as e:
        logger.error("Repository operation failed", entity=entity, error=str(e))
        raise RepositoryFault() from e


def _to_record(row: Base, record_cls: type[RecordT]) -> RecordT:
    return record_cls(**{field.name: getattr(row, field.name) for field in dataclasses.fields(record_cls)})


class SqlReadRepository(ReadRepository[RecordT]):
    def __init__(
        self,
        model: type[Base],
        record_cls: type[RecordT],
        entity: str,
        session_factory: SessionFactory = get_async_session,
    ):
        self._model = model
        self._record_cls = record_cls
        self._entity = entity
        self._session_factory = session_factory

    def _transaction(self) -> AbstractAsyncContextManager[AsyncSession]:
        return _transaction(self._session_factory, self._entity)

    async def find_by_id(self, id: str) -> RecordT | None:
        async with self._transaction() as session:
            row = await session.get(self._model, id)
            return _to_record(row, self._record_cls) if row is not None else None

    async def find_many(self, **filters: Any) -> list[RecordT]:
        async with self._transaction() as session:
            result = await session.execute(select(self._model).filter_by(**filters))
            return [_to_record(row, self._record_cls) for row in result.scalars().all()]


class SqlRepository(SqlReadRepository[RecordT], Repository[RecordT]):
    def __init__(
        self,
        model: type[Base],
        record_cls: type[RecordT],
        entity: str,
        session_factory: SessionFactory = get_async_session,
        *,
        references: dict[str, tuple[type[Base], str]] | None = None,
    ):
        super().__init__(model, record_cls, entity, session_factory)
        # field -> (model, entity name) it must point into
        self._references = references or {}

    async def _check_references(self, session: AsyncSession, fields: dict[str, Any]) -> None:
        for field, (model, entity) in self._references.items():
            if field in fields and await session.get(model, fields[field]) is None:
                raise NotFoundError(entity, fields[field])

    async def create(self, fields: dict[str, Any]) -> RecordT:
        async with self._transaction() as session:
            await self._check_references(session, fields)
            row = self._model(**fields)
            session.add(row)
            await session.flush()
            logger.debug("Row inserted", entity=self._entity, id=row.id)
            return _to_record(row, self._record_cls)

    async def update(self, id: str, fields: dict[str, Any]) -> RecordT:
        async with self._transaction() as session:
            row = await session.get(self._model, id)
            if row is None:
                raise NotFoundError(self._entity, id)
            await self._check_references(session, fields)
            for field, value in fields.items():
                setattr(row, field, value)
            await session.flush()
            return _to_record(row, self._record_cls)

    async def delete(self, id: str) -> None:
        async with self._transaction() as session:
            row = await session.get(self._model, id)
            if row is None:
                raise NotFoundError(self._entity, id)
            await session.delete(row)


class SqlSubscriptionRepository(SubscriptionRepository):
    def __init__(self, session_factory: SessionFactory = get_async_session):
        self._session_factory = session_factory

    def _transaction(self) -> AbstractAsyncContextManager[AsyncSession]:
        return _transaction(self._session_factory, "Subscription")

    async def create_link(self, subscriber_id: str, author_id: str) -> None:
        async with self._transaction() as session:
            for user_id in (subscriber_id, author_id):
                if await session.get(Users, user_id) is None:
                    raise NotFoundError("User", user_id)

            if await session.get(SubscribersOnAuthors, (subscriber_id, author_id)) is not None:
                raise ConflictError(f"User {subscriber_id} is already subscribed to {author_id}")

            session.add(SubscribersOnAuthors(subscriber_id=subscriber_id, author_id=author_id))

    async def delete_link(self, subscriber_id: str, author_id: str) -> None:
        async with self._transaction() as session:
            link = await session.get(SubscribersOnAuthors, (subscriber_id, author_id))
            if link is None:
                raise NotFoundError("Subscription", f"{subscriber_id} -> {author_id}")
            await session.delete(link)

    async def find_authors(self, subscriber_id: str) -> list[UserRecord]:
        stmt = (
            select(Users)
            .join(SubscribersOnAuthors, SubscribersOnAuthors.author_id == Users.id)
            .where(SubscribersOnAuthors.subscriber_id == subscriber_id)
        )
        return await self._users(stmt)

    async def find_subscribers(self, author_id: str) -> list[UserRecord]:
        stmt = (
            select(Users)
            .join(SubscribersOnAuthors, SubscribersOnAuthors.subscriber_id == Users.id)
            .where(SubscribersOnAuthors.author_id == author_id)
        )
        return await self._users(stmt)

    async def _users(self, stmt) -> list[UserRecord]:
        async with self._transaction() as session:
            result = await session.execute(stmt)
            return [_to_record(row, UserRecord) for row in result.scalars().all()]


def create_sqlalchemy_repositories(
    session_factory: SessionFactory = get_async_session,
) -> Repositories:
    """Build a repository bundle that talks to the relational store."""
    return Repositories(
        users=SqlRepository(Users, UserRecord, "User", session_factory),
        profiles=SqlRepository(
            Profiles,
            ProfileRecord,
            "Profile",
            session_factory,
            references={"user_id": (Users, "User"), "member_type_id": (MemberTypes, "MemberType")},
        ),
        posts=SqlRepository(
            Posts,
            PostRecord,
            "Post",
            session_factory,
            references={"author_id": (Users, "User")},
        ),
        member_types=SqlReadRepository(MemberTypes, MemberTypeRecord, "MemberType", session_factory),
        subscriptions=SqlSubscriptionRepository(session_factory),
    )

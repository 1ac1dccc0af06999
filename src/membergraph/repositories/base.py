"""Core repository interfaces and entity records."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Generic, TypeVar


@dataclass(frozen=True)
class UserRecord:
    id: str
    name: str
    balance: float


@dataclass(frozen=True)
class ProfileRecord:
    id: str
    is_male: bool
    year_of_birth: int
    user_id: str
    member_type_id: str


@dataclass(frozen=True)
class PostRecord:
    id: str
    title: str
    content: str
    author_id: str


@dataclass(frozen=True)
class MemberTypeRecord:
    id: str
    discount: float
    posts_limit_per_month: int


@dataclass(frozen=True)
class SubscriptionRecord:
    """Join pair of the user-to-user subscription relation."""

    subscriber_id: str
    author_id: str


# Fixed membership tiers; seeded once, never written through the API
DEFAULT_MEMBER_TYPES: tuple[MemberTypeRecord, ...] = (
    MemberTypeRecord(id="basic", discount=2.3, posts_limit_per_month=20),
    MemberTypeRecord(id="business", discount=7.7, posts_limit_per_month=100),
)


RecordT = TypeVar("RecordT")


class ReadRepository(ABC, Generic[RecordT]):
    """Read access to one entity table."""

    @abstractmethod
    async def find_by_id(self, id: str) -> RecordT | None:
        """Return the record with this id, or None when absent."""
        pass

    @abstractmethod
    async def find_many(self, **filters: Any) -> list[RecordT]:
        """Return all records whose fields equal the given filter values."""
        pass


class Repository(ReadRepository[RecordT]):
    """Read and write access to one entity table."""

    @abstractmethod
    async def create(self, fields: dict[str, Any]) -> RecordT:
        """Insert a record and return it with its generated id.

        Raises:
            NotFoundError: A foreign key references a missing entity
            ConflictError: A uniqueness rule would be broken
        """
        pass

    @abstractmethod
    async def update(self, id: str, fields: dict[str, Any]) -> RecordT:
        """Merge ``fields`` into an existing record and return it.

        Raises:
            NotFoundError: No record has this id, or a foreign key is dangling
            ConflictError: A uniqueness rule would be broken
        """
        pass

    @abstractmethod
    async def delete(self, id: str) -> None:
        """Delete a record.

        Raises:
            NotFoundError: No record has this id
        """
        pass


class SubscriptionRepository(ABC):
    """Access to the subscriber/author join table."""

    @abstractmethod
    async def create_link(self, subscriber_id: str, author_id: str) -> None:
        """Raises NotFoundError for a missing user, ConflictError for an existing pair."""
        pass

    @abstractmethod
    async def delete_link(self, subscriber_id: str, author_id: str) -> None:
        """Raises NotFoundError when the pair does not exist."""
        pass

    @abstractmethod
    async def find_authors(self, subscriber_id: str) -> list[UserRecord]:
        """Users the given user subscribes to."""
        pass

    @abstractmethod
    async def find_subscribers(self, author_id: str) -> list[UserRecord]:
        """Users subscribed to the given user."""
        pass


@dataclass(frozen=True)
class Repositories:
    """Everything resolvers need from the store, passed through the GraphQL context."""

    users: Repository[UserRecord]
    profiles: Repository[ProfileRecord]
    posts: Repository[PostRecord]
    member_types: ReadRepository[MemberTypeRecord]
    subscriptions: SubscriptionRepository

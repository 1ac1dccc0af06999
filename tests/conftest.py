"""
Shared pytest fixtures and configuration for all tests.
"""

import os
from collections.abc import Generator
from typing import Any

import pytest

from membergraph.repositories.base import Repositories
from membergraph.repositories.memory import MemoryStore, create_memory_repositories


class CallCounter:
    """Proxy that counts every coroutine method called on a repository."""

    def __init__(self, target: Any, calls: list[str], name: str):
        self._target = target
        self._calls = calls
        self._name = name

    def __getattr__(self, attr: str) -> Any:
        value = getattr(self._target, attr)
        if not callable(value):
            return value

        async def counted(*args: Any, **kwargs: Any) -> Any:
            self._calls.append(f"{self._name}.{attr}")
            return await value(*args, **kwargs)

        return counted


def counting_repositories(repositories: Repositories) -> tuple[Repositories, list[str]]:
    """Wrap a repository bundle so every call is recorded."""
    calls: list[str] = []
    wrapped = Repositories(
        users=CallCounter(repositories.users, calls, "users"),
        profiles=CallCounter(repositories.profiles, calls, "profiles"),
        posts=CallCounter(repositories.posts, calls, "posts"),
        member_types=CallCounter(repositories.member_types, calls, "member_types"),
        subscriptions=CallCounter(repositories.subscriptions, calls, "subscriptions"),
    )
    return wrapped, calls


@pytest.fixture
def memory_store() -> MemoryStore:
    return MemoryStore()


@pytest.fixture
def repositories(memory_store: MemoryStore) -> Repositories:
    """In-memory repositories seeded with the fixed member types."""
    return create_memory_repositories(memory_store)


@pytest.fixture
def counted_repositories(repositories: Repositories) -> tuple[Repositories, list[str]]:
    return counting_repositories(repositories)


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)

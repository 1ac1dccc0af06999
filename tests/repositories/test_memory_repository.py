"""
Tests for the in-memory repositories
"""

import pytest

from membergraph.errors import ConflictError, NotFoundError
from membergraph.repositories import DEFAULT_MEMBER_TYPES
from membergraph.repositories.memory import MemoryStore, create_memory_repositories

MISSING_ID = "3f2504e0-4f89-41d3-9a0c-0305e82c3301"


class TestMemberTypes:
    @pytest.mark.asyncio
    async def test_seeded(self, repositories):
        records = await repositories.member_types.find_many()
        assert sorted(records, key=lambda r: r.id) == list(DEFAULT_MEMBER_TYPES)

    @pytest.mark.asyncio
    async def test_seeding_can_be_disabled(self):
        repositories = create_memory_repositories(MemoryStore(), seed_member_types=False)
        assert await repositories.member_types.find_many() == []


class TestEntityRepository:
    @pytest.mark.asyncio
    async def test_create_assigns_distinct_ids(self, repositories):
        first = await repositories.users.create({"name": "A", "balance": 1.0})
        second = await repositories.users.create({"name": "B", "balance": 2.0})

        assert first.id != second.id
        assert await repositories.users.find_by_id(first.id) == first

    @pytest.mark.asyncio
    async def test_find_many_filters(self, repositories):
        author = await repositories.users.create({"name": "A", "balance": 1.0})
        other = await repositories.users.create({"name": "B", "balance": 1.0})
        await repositories.posts.create({"title": "1", "content": "", "author_id": author.id})
        await repositories.posts.create({"title": "2", "content": "", "author_id": other.id})

        posts = await repositories.posts.find_many(author_id=author.id)

        assert [post.title for post in posts] == ["1"]

    @pytest.mark.asyncio
    async def test_update_merges_fields(self, repositories):
        user = await repositories.users.create({"name": "A", "balance": 1.0})

        updated = await repositories.users.update(user.id, {"balance": 5.0})

        assert updated.name == "A"
        assert updated.balance == 5.0

    @pytest.mark.asyncio
    async def test_update_missing(self, repositories):
        with pytest.raises(NotFoundError):
            await repositories.users.update(MISSING_ID, {"name": "x"})

    @pytest.mark.asyncio
    async def test_delete(self, repositories):
        user = await repositories.users.create({"name": "A", "balance": 1.0})

        await repositories.users.delete(user.id)

        assert await repositories.users.find_by_id(user.id) is None
        with pytest.raises(NotFoundError):
            await repositories.users.delete(user.id)

    @pytest.mark.asyncio
    async def test_dangling_foreign_key(self, repositories):
        with pytest.raises(NotFoundError, match="User not found"):
            await repositories.posts.create({"title": "t", "content": "", "author_id": MISSING_ID})

    @pytest.mark.asyncio
    async def test_profile_member_type_must_exist(self):
        repositories = create_memory_repositories(MemoryStore(), seed_member_types=False)
        user = await repositories.users.create({"name": "A", "balance": 1.0})

        with pytest.raises(NotFoundError, match="MemberType"):
            await repositories.profiles.create(
                {"is_male": True, "year_of_birth": 2000, "user_id": user.id, "member_type_id": "basic"}
            )

    @pytest.mark.asyncio
    async def test_profile_user_is_unique(self, repositories):
        user = await repositories.users.create({"name": "A", "balance": 1.0})
        fields = {"is_male": True, "year_of_birth": 2000, "user_id": user.id, "member_type_id": "basic"}
        profile = await repositories.profiles.create(fields)

        with pytest.raises(ConflictError):
            await repositories.profiles.create(fields)

        # Updating a profile in place does not conflict with itself
        updated = await repositories.profiles.update(profile.id, {"year_of_birth": 2001})
        assert updated.user_id == user.id


class TestSubscriptionRepository:
    @pytest.mark.asyncio
    async def test_link_lifecycle(self, repositories):
        a = await repositories.users.create({"name": "A", "balance": 1.0})
        b = await repositories.users.create({"name": "B", "balance": 1.0})

        await repositories.subscriptions.create_link(a.id, b.id)

        assert await repositories.subscriptions.find_authors(a.id) == [b]
        assert await repositories.subscriptions.find_subscribers(b.id) == [a]
        assert await repositories.subscriptions.find_authors(b.id) == []

        with pytest.raises(ConflictError):
            await repositories.subscriptions.create_link(a.id, b.id)

        await repositories.subscriptions.delete_link(a.id, b.id)
        with pytest.raises(NotFoundError):
            await repositories.subscriptions.delete_link(a.id, b.id)

    @pytest.mark.asyncio
    async def test_link_requires_both_users(self, repositories):
        a = await repositories.users.create({"name": "A", "balance": 1.0})

        with pytest.raises(NotFoundError):
            await repositories.subscriptions.create_link(a.id, MISSING_ID)
        with pytest.raises(NotFoundError):
            await repositories.subscriptions.create_link(MISSING_ID, a.id)

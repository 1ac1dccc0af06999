"""
Seed data for database initialization.

Member types are a fixed reference table; the API never writes to it, so the
rows are inserted here once per database.
"""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..dbmodels import MemberTypes
from ..logging import get_logger
from ..repositories.base import DEFAULT_MEMBER_TYPES

logger = get_logger(__name__)


async def ensure_member_types(db: AsyncSession) -> list[str]:
    """
    Insert any fixed member type that is missing.

    Existing rows are left untouched so hand-tuned discounts survive reseeding.

    Returns:
        Ids of the member types that were created
    """
    result = await db.execute(select(MemberTypes.id))
    existing = set(result.scalars().all())

    created = []
    for member_type in DEFAULT_MEMBER_TYPES:
        if member_type.id in existing:
            continue
        db.add(
            MemberTypes(
                id=member_type.id,
                discount=member_type.discount,
                posts_limit_per_month=member_type.posts_limit_per_month,
            )
        )
        created.append(member_type.id)

    if created:
        await db.flush()
        logger.info("Created member types", member_type_ids=created)
    else:
        logger.debug("Member types already present")

    return created


async def seed_initial_data(db: AsyncSession) -> None:
    """Seed all initial data required for the application."""
    logger.info("Starting database seeding")
    await ensure_member_types(db)
    logger.info("Database seeding completed")

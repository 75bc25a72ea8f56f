"""
Category repository.

Categories are free-standing tags linked to channels through the
``channel_categories`` join table.
"""

from __future__ import annotations

import uuid
from typing import List

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.db.models import Category as CategoryDB
from videoscripter.db.models import Channel as ChannelDB
from videoscripter.db.models import channel_categories
from videoscripter.models.category import CategoryCreate
from videoscripter.repositories.base import BaseSQLAlchemyRepository, active


class CategoryRepository(
    BaseSQLAlchemyRepository[
        CategoryDB,
        CategoryCreate,
        CategoryCreate,
    ]
):
    """Repository for channel categories."""

    def __init__(self) -> None:
        """Initialize repository with Category model."""
        super().__init__(CategoryDB)

    async def _is_linked(
        self, session: AsyncSession, category_id: uuid.UUID, channel_id: uuid.UUID
    ) -> bool:
        result = await session.execute(
            select(channel_categories.c.channel_id).where(
                channel_categories.c.category_id == category_id,
                channel_categories.c.channel_id == channel_id,
            )
        )
        return result.first() is not None

    async def add_channel(
        self, session: AsyncSession, category_id: uuid.UUID, channel_id: uuid.UUID
    ) -> bool:
        """
        Link a channel to a category.

        Returns
        -------
        bool
            True if a new link was created, False if it already existed
        """
        if await self._is_linked(session, category_id, channel_id):
            return False
        await session.execute(
            insert(channel_categories).values(
                category_id=category_id, channel_id=channel_id
            )
        )
        return True

    async def remove_channel(
        self, session: AsyncSession, category_id: uuid.UUID, channel_id: uuid.UUID
    ) -> bool:
        """Unlink a channel from a category; False if it was not linked."""
        result = await session.execute(
            delete(channel_categories).where(
                channel_categories.c.category_id == category_id,
                channel_categories.c.channel_id == channel_id,
            )
        )
        return bool(result.rowcount)

    async def get_channels(
        self, session: AsyncSession, category_id: uuid.UUID
    ) -> List[ChannelDB]:
        """Get the live channels in a category, ordered by title."""
        result = await session.execute(
            select(ChannelDB)
            .join(channel_categories, channel_categories.c.channel_id == ChannelDB.id)
            .where(channel_categories.c.category_id == category_id, active(ChannelDB))
            .order_by(ChannelDB.title)
        )
        return list(result.scalars().all())

    async def get_categories_for_channel(
        self, session: AsyncSession, channel_id: uuid.UUID
    ) -> List[CategoryDB]:
        """Get the live categories a channel belongs to."""
        result = await session.execute(
            select(CategoryDB)
            .join(
                channel_categories, channel_categories.c.category_id == CategoryDB.id
            )
            .where(channel_categories.c.channel_id == channel_id, active(CategoryDB))
            .order_by(CategoryDB.name)
        )
        return list(result.scalars().all())

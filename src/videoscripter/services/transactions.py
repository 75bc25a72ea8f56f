"""
Commit helper shared by the mutation services.
"""

from __future__ import annotations

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.exceptions import StoreError

logger = logging.getLogger(__name__)


async def commit_or_raise(
    session: AsyncSession, *, operation: str, entity_type: str
) -> None:
    """
    Commit the session, or roll it back and raise ``StoreError``.

    Parameters
    ----------
    session : AsyncSession
        Session holding the pending mutation
    operation : str
        Operation name recorded on the error (e.g. "delete")
    entity_type : str
        Entity recorded on the error (e.g. "Project")

    Raises
    ------
    StoreError
        If the commit fails. Nothing from the mutation is persisted.
    """
    try:
        await session.commit()
    except SQLAlchemyError as e:
        await session.rollback()
        logger.error(f"Failed to {operation} {entity_type}; rolled back", exc_info=True)
        raise StoreError(
            f"Failed to {operation} {entity_type.lower()}",
            operation=operation,
            entity_type=entity_type,
            original_error=e,
        ) from e

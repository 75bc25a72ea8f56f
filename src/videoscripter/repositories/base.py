"""
Base repository interface and implementation.

Provides common CRUD operations and the soft-delete filter shared by every
repository. Rows are never physically removed: ``soft_delete`` flags them and
every read path goes through ``active()``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, TypeVar, Union

from sqlalchemy import ColumnElement, Select, false, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from videoscripter.db.models import AuditMixin

# Type variables for generic repository
ModelType = TypeVar("ModelType", bound=AuditMixin)
CreateSchemaType = TypeVar("CreateSchemaType")
UpdateSchemaType = TypeVar("UpdateSchemaType")


def active(model: type[AuditMixin]) -> ColumnElement[bool]:
    """
    Predicate selecting non-deleted rows of ``model``.

    This is the single soft-delete filter; every read path applies it so
    deleted rows never surface and never count as duplicates.

    Examples
    --------
    >>> select(VideoDB).where(active(VideoDB), VideoDB.project_id == project_id)
    """
    return model.is_deleted == false()


def _as_dict(obj_in: Any, *, exclude_unset: bool = False) -> dict[str, Any]:
    """Normalize a Pydantic model or mapping into a plain dict."""
    if hasattr(obj_in, "model_dump"):
        # Pydantic model
        return dict(obj_in.model_dump(exclude_unset=exclude_unset))
    # Dictionary or other object
    return dict(obj_in) if isinstance(obj_in, dict) else dict(obj_in.__dict__)


class BaseRepository(ABC, Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Base repository interface defining common CRUD operations.

    This abstract base class provides a consistent interface for all repositories
    following the Repository pattern.
    """

    @abstractmethod
    async def create(
        self, session: AsyncSession, *, obj_in: CreateSchemaType, user_id: str
    ) -> ModelType:
        """Create a new entity."""
        pass

    @abstractmethod
    async def get(self, session: AsyncSession, id: Any) -> Optional[ModelType]:
        """Get a non-deleted entity by ID."""
        pass

    @abstractmethod
    async def get_multi(
        self, session: AsyncSession, *, skip: int = 0, limit: int = 100
    ) -> List[ModelType]:
        """Get multiple non-deleted entities with pagination."""
        pass

    @abstractmethod
    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, dict[str, Any]],
        user_id: str,
    ) -> ModelType:
        """Update an existing entity."""
        pass

    @abstractmethod
    async def soft_delete(
        self, session: AsyncSession, *, db_obj: ModelType, user_id: str
    ) -> ModelType:
        """Soft-delete an entity."""
        pass


class BaseSQLAlchemyRepository(
    BaseRepository[ModelType, CreateSchemaType, UpdateSchemaType]
):
    """
    Base SQLAlchemy repository implementation.

    Provides common SQLAlchemy-based implementations of CRUD operations
    that can be inherited by specific repository implementations. All reads
    exclude soft-deleted rows; all writes stamp the audit columns.
    """

    def __init__(self, model: type[ModelType]):
        self.model = model

    def select_active(self) -> Select[tuple[ModelType]]:
        """Base ``SELECT`` over the non-deleted rows of this repository's model."""
        return select(self.model).where(active(self.model))

    def build(self, obj_in: Any, *, user_id: str, **extra: Any) -> ModelType:
        """Construct an (unsaved) row with audit columns stamped."""
        obj_data = _as_dict(obj_in)
        obj_data.update(extra)
        return self.model(created_by=user_id, last_modified_by=user_id, **obj_data)

    async def create(
        self,
        session: AsyncSession,
        *,
        obj_in: CreateSchemaType,
        user_id: str,
        **extra: Any,
    ) -> ModelType:
        """Create a new entity in the database."""
        db_obj = self.build(obj_in, user_id=user_id, **extra)
        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def get(self, session: AsyncSession, id: Any) -> Optional[ModelType]:
        """Get non-deleted entity by primary key."""
        result = await session.execute(self.select_active().where(self.model.id == id))
        return result.scalar_one_or_none()

    async def get_multi(
        self, session: AsyncSession, *, skip: int = 0, limit: int = 100
    ) -> List[ModelType]:
        """Get multiple non-deleted entities with pagination."""
        result = await session.execute(
            self.select_active()
            .order_by(self.model.created_at)
            .offset(skip)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def update(
        self,
        session: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: Union[UpdateSchemaType, dict[str, Any]],
        user_id: str,
    ) -> ModelType:
        """Update an existing entity and stamp the modifier."""
        update_data = _as_dict(obj_in, exclude_unset=True)

        for field, value in update_data.items():
            if field != "id" and hasattr(db_obj, field):
                setattr(db_obj, field, value)
        db_obj.touch(user_id)

        session.add(db_obj)
        await session.flush()
        await session.refresh(db_obj)
        return db_obj

    async def soft_delete(
        self, session: AsyncSession, *, db_obj: ModelType, user_id: str
    ) -> ModelType:
        """Flag an entity as deleted; the row stays in the table."""
        db_obj.mark_deleted(user_id)
        session.add(db_obj)
        await session.flush()
        return db_obj

    async def exists(self, session: AsyncSession, id: Any) -> bool:
        """Check if a non-deleted entity exists by ID."""
        result = await session.execute(
            select(self.model.id).where(active(self.model), self.model.id == id)
        )
        return result.first() is not None

    async def count(self, session: AsyncSession) -> int:
        """Count non-deleted entities."""
        result = await session.execute(
            select(func.count()).select_from(self.model).where(active(self.model))
        )
        return result.scalar() or 0

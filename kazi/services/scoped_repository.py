"""
Owner-scoped persistence shared by every resource route.

A repository built with an ``owner_id`` only ever sees rows whose owner column
matches it; rows owned by someone else behave exactly like missing rows. A
repository built without one is unscoped and backs the admin panel.
"""
from typing import Any, Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import StaleDataError

from kazi.exceptions import BadRequestError, ConflictError, NotFoundError
from kazi.logging_config import get_logger
from kazi.utils.date_utils import Clock, utc_now

logger = get_logger(__name__)

ModelT = TypeVar("ModelT")


class ScopedRepository(Generic[ModelT]):
    """CRUD over one model, optionally restricted to a single owner."""

    def __init__(
        self,
        session: AsyncSession,
        model: Type[ModelT],
        owner_id: Optional[int] = None,
        owner_attr: str = "user_id",
        clock: Clock = utc_now,
        label: Optional[str] = None,
    ):
        self.session = session
        self.model = model
        self.owner_id = owner_id
        self.owner_attr = owner_attr
        self.clock = clock
        self.label = label or model.__name__

    @property
    def is_scoped(self) -> bool:
        return self.owner_id is not None

    def _owner_column(self):
        return getattr(self.model, self.owner_attr)

    def _select(self):
        stmt = select(self.model)
        if self.is_scoped:
            stmt = stmt.where(self._owner_column() == self.owner_id)
        return stmt

    async def list(self, *order_by) -> List[ModelT]:
        """All visible rows, by the given ordering or oldest first."""
        stmt = self._select().order_by(*(order_by or (self.model.id,)))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find(self, entity_id: int) -> Optional[ModelT]:
        result = await self.session.execute(
            self._select().where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none()

    async def get(self, entity_id: int) -> ModelT:
        entity = await self.find(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.label} not found")
        return entity

    async def exists(self, entity_id: int) -> bool:
        """Fresh existence check that bypasses the identity map."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == entity_id)
        )
        return result.scalar_one_or_none() is not None

    async def create(self, **fields: Any) -> ModelT:
        """
        Insert a row.

        When scoped, the owner column is always set to the repository's owner,
        whatever the caller passed.
        """
        if self.is_scoped:
            fields[self.owner_attr] = self.owner_id
        if hasattr(self.model, "created_at"):
            fields.setdefault("created_at", self.clock())

        entity = self.model(**fields)
        self.session.add(entity)

        try:
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Rejected {self.label} insert: {e.orig}")
            raise BadRequestError(f"Invalid reference for {self.label}")

        await self.session.refresh(entity)
        logger.info(f"Created {self.label} {entity.id}")
        return entity

    async def update(self, entity_id: int, **fields: Any) -> ModelT:
        """
        Overwrite mutable fields of a visible row.

        A write that loses a concurrent-update race is rolled back and the row
        re-read: NotFoundError if it is gone, ConflictError if it changed.
        """
        entity = await self.get(entity_id)
        for field, value in fields.items():
            setattr(entity, field, value)

        try:
            await self.session.commit()
        except StaleDataError:
            await self._raise_for_lost_race(entity_id)
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Rejected {self.label} {entity_id} update: {e.orig}")
            raise BadRequestError(f"Invalid reference for {self.label}")

        await self.session.refresh(entity)
        logger.info(f"Updated {self.label} {entity_id}")
        return entity

    async def delete(self, entity_id: int) -> None:
        """Remove a visible row; rows still referenced elsewhere are a conflict."""
        entity = await self.get(entity_id)
        await self.session.delete(entity)

        try:
            await self.session.commit()
        except StaleDataError:
            await self._raise_for_lost_race(entity_id)
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(f"Rejected {self.label} {entity_id} delete: {e.orig}")
            raise ConflictError(f"{self.label} is still referenced by other records")

        logger.info(f"Deleted {self.label} {entity_id}")

    async def _raise_for_lost_race(self, entity_id: int):
        await self.session.rollback()
        if not await self.exists(entity_id):
            raise NotFoundError(f"{self.label} not found")
        logger.warning(f"Concurrent modification of {self.label} {entity_id}")
        raise ConflictError(f"{self.label} was modified by another request, reload and retry")

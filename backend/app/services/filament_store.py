"""Filament spool record store.

One instance per request, wrapping that request's database session. All writes
stamp ``last_used`` so the list view always shows the most recently touched
spools first.
"""

import logging
from datetime import datetime, timezone

from fastapi import Depends
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from backend.app.core.database import get_db
from backend.app.core.exceptions import FilamentNotFoundError, StorageError
from backend.app.models.filament import Filament
from backend.app.schemas.filament import FilamentCreate, FilamentUpdate

logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    # SQLite DateTime columns round-trip naive values, so store naive UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class FilamentStore:
    """CRUD access to the filaments table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_all(self) -> list[Filament]:
        """All records, most recently written first."""
        try:
            result = await self.db.execute(select(Filament).order_by(Filament.last_used.desc(), Filament.id.desc()))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list filaments: {e}") from e
        return list(result.scalars().all())

    async def get(self, filament_id: int) -> Filament:
        try:
            result = await self.db.execute(select(Filament).where(Filament.id == filament_id))
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to load filament {filament_id}: {e}") from e
        filament = result.scalar_one_or_none()
        if filament is None:
            raise FilamentNotFoundError(filament_id)
        return filament

    async def create(self, data: FilamentCreate) -> Filament:
        filament = Filament(
            brand=data.brand,
            type=str(data.type),
            color_name=data.color_name,
            color_hex=data.color_hex,
            quantity=data.quantity,
            notes=data.notes,
            last_used=_utcnow(),
        )
        self.db.add(filament)
        await self._commit(f"create filament {data.brand} {data.color_name}")
        await self.db.refresh(filament)
        logger.info("Created filament %s (%s %s %s)", filament.id, filament.brand, filament.type, filament.color_name)
        return filament

    async def update(self, filament_id: int, data: FilamentUpdate) -> Filament:
        """Replace every writable field and refresh last_used.

        Raises FilamentNotFoundError for unknown ids instead of silently doing nothing.
        """
        filament = await self.get(filament_id)

        filament.brand = data.brand
        filament.type = str(data.type)
        filament.color_name = data.color_name
        filament.color_hex = data.color_hex
        filament.quantity = data.quantity
        filament.notes = data.notes
        # Never let last_used move backwards, even if the clock does
        now = _utcnow()
        if filament.last_used is not None and filament.last_used > now:
            now = filament.last_used
        filament.last_used = now

        await self._commit(f"update filament {filament_id}")
        await self.db.refresh(filament)
        logger.info("Updated filament %s (quantity=%s)", filament_id, filament.quantity)
        return filament

    async def delete(self, filament_id: int) -> bool:
        """Delete a record. Returns False when it did not exist; that is not an error."""
        try:
            filament = await self.get(filament_id)
        except FilamentNotFoundError:
            logger.debug("Delete of unknown filament %s ignored", filament_id)
            return False

        await self.db.delete(filament)
        await self._commit(f"delete filament {filament_id}")
        logger.info("Deleted filament %s", filament_id)
        return True

    async def _commit(self, action: str):
        try:
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Failed to %s: %s", action, e)
            raise StorageError(f"Failed to {action}") from e


async def get_filament_store(db: AsyncSession = Depends(get_db)) -> FilamentStore:
    return FilamentStore(db)

"""Unit tests for FilamentStore against an in-memory database."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch

import pytest
from sqlalchemy.exc import SQLAlchemyError

from backend.app.core.exceptions import FilamentNotFoundError, StorageError
from backend.app.schemas.filament import FilamentCreate, FilamentUpdate
from backend.app.services.filament_store import FilamentStore


def _create(**kwargs) -> FilamentCreate:
    data = {
        "brand": "Bambu Lab",
        "type": "PLA",
        "color_name": "Jade White",
        "color_hex": "#F5F5F5",
        "quantity": 1,
    }
    data.update(kwargs)
    return FilamentCreate(**data)


def _update(**kwargs) -> FilamentUpdate:
    return FilamentUpdate(**_create(**kwargs).model_dump())


class TestFilamentStore:
    @pytest.fixture
    def store(self, db_session):
        return FilamentStore(db_session)

    @pytest.mark.asyncio
    async def test_create_assigns_id_and_last_used(self, store):
        before = datetime.now(timezone.utc).replace(tzinfo=None)
        filament = await store.create(_create(notes="AMS slot 1"))

        assert filament.id is not None
        assert filament.type == "PLA"
        assert filament.notes == "AMS slot 1"
        assert filament.last_used >= before - timedelta(seconds=1)

    @pytest.mark.asyncio
    async def test_list_all_newest_first(self, store):
        first = await store.create(_create(color_name="First"))
        second = await store.create(_create(color_name="Second"))

        records = await store.list_all()
        assert [r.id for r in records] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_get_unknown_raises(self, store):
        with pytest.raises(FilamentNotFoundError) as exc_info:
            await store.get(42)
        assert exc_info.value.filament_id == 42

    @pytest.mark.asyncio
    async def test_update_replaces_fields(self, store):
        filament = await store.create(_create())

        updated = await store.update(filament.id, _update(brand="Sunlu", type="TPU", quantity=0.3, notes=None))
        assert updated.id == filament.id
        assert updated.brand == "Sunlu"
        assert updated.type == "TPU"
        assert updated.quantity == 0.3
        assert updated.notes is None

    @pytest.mark.asyncio
    async def test_update_unknown_raises_and_writes_nothing(self, store):
        with pytest.raises(FilamentNotFoundError):
            await store.update(999, _update())
        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_update_never_moves_last_used_backwards(self, store, filament_factory):
        future = datetime.now(timezone.utc).replace(tzinfo=None) + timedelta(days=1)
        filament = await filament_factory(last_used=future)

        updated = await store.update(filament.id, _update(quantity=2))
        assert updated.last_used == future

    @pytest.mark.asyncio
    async def test_update_refreshes_last_used(self, store, filament_factory):
        past = datetime.now(timezone.utc).replace(tzinfo=None) - timedelta(days=30)
        filament = await filament_factory(last_used=past)

        updated = await store.update(filament.id, _update())
        assert updated.last_used > past

    @pytest.mark.asyncio
    async def test_delete_is_idempotent(self, store):
        filament = await store.create(_create())

        assert await store.delete(filament.id) is True
        assert await store.delete(filament.id) is False
        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_commit_failure_raises_storage_error(self, store, db_session, capture_logs):
        with patch.object(db_session, "commit", AsyncMock(side_effect=SQLAlchemyError("disk I/O error"))):
            with pytest.raises(StorageError):
                await store.create(_create())

        assert capture_logs.get_errors()
        assert await store.list_all() == []

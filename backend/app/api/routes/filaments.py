import logging

from fastapi import APIRouter, Depends, HTTPException

from backend.app.core.exceptions import FilamentNotFoundError, StorageError
from backend.app.core.filament_presets import COLOR_PRESETS
from backend.app.schemas.filament import (
    ColorPresetResponse,
    FilamentCreate,
    FilamentResponse,
    FilamentUpdate,
)
from backend.app.services.filament_store import FilamentStore, get_filament_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/filaments", tags=["filaments"])


def _storage_failure(e: StorageError) -> HTTPException:
    logger.error("Storage error: %s", e)
    return HTTPException(500, "Storage error")


@router.get("/", response_model=list[FilamentResponse])
async def list_filaments(store: FilamentStore = Depends(get_filament_store)):
    """List all filament spools, most recently written first."""
    try:
        return await store.list_all()
    except StorageError as e:
        raise _storage_failure(e)


@router.post("/", response_model=FilamentResponse)
async def create_filament(
    filament_data: FilamentCreate,
    store: FilamentStore = Depends(get_filament_store),
):
    """Create a new filament spool entry."""
    try:
        return await store.create(filament_data)
    except StorageError as e:
        raise _storage_failure(e)


@router.get("/presets", response_model=dict[str, list[ColorPresetResponse]])
async def get_color_presets():
    """Color presets per filament type."""
    return {
        str(filament_type): [ColorPresetResponse(name=p.name, hex=p.hex) for p in presets]
        for filament_type, presets in COLOR_PRESETS.items()
    }


@router.get("/{filament_id}", response_model=FilamentResponse)
async def get_filament(
    filament_id: int,
    store: FilamentStore = Depends(get_filament_store),
):
    """Get a specific filament spool."""
    try:
        return await store.get(filament_id)
    except FilamentNotFoundError:
        raise HTTPException(404, "Filament not found")
    except StorageError as e:
        raise _storage_failure(e)


@router.put("/{filament_id}", response_model=FilamentResponse)
async def update_filament(
    filament_id: int,
    filament_data: FilamentUpdate,
    store: FilamentStore = Depends(get_filament_store),
):
    """Replace all writable fields of a filament spool."""
    try:
        return await store.update(filament_id, filament_data)
    except FilamentNotFoundError:
        raise HTTPException(404, "Filament not found")
    except StorageError as e:
        raise _storage_failure(e)


@router.delete("/{filament_id}")
async def delete_filament(
    filament_id: int,
    store: FilamentStore = Depends(get_filament_store),
):
    """Delete a filament spool. Deleting an unknown id also succeeds."""
    try:
        await store.delete(filament_id)
    except StorageError as e:
        raise _storage_failure(e)
    return {"success": True}

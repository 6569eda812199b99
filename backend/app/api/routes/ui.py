"""Browser UI for the filament inventory.

Pages are rendered on the server. Every mutation posts a form, goes through
the REST API via InventoryState, then redirects so the next page load refetches
the full list.
"""

import logging
from collections.abc import AsyncGenerator

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from backend.app.core.config import settings
from backend.app.services.inventory_client import InventoryClient, InventoryState
from backend.app.services.inventory_page import render_inventory_page
from backend.app.utils.filament_view import ALL_TYPES, FormDraft

logger = logging.getLogger(__name__)

router = APIRouter(tags=["ui"], include_in_schema=False)

# Host name is only used to build URLs when calling this app in-process
_IN_PROCESS_BASE_URL = "http://filament-tracker.internal"


async def get_inventory_state(request: Request) -> AsyncGenerator[InventoryState, None]:
    """InventoryState backed by the configured API, or this app when none is set."""
    if settings.ui_api_base_url:
        client = InventoryClient(
            settings.ui_api_base_url,
            api_prefix=settings.api_prefix,
            timeout=settings.ui_request_timeout,
        )
    else:
        client = InventoryClient(
            _IN_PROCESS_BASE_URL,
            api_prefix=settings.api_prefix,
            transport=httpx.ASGITransport(app=request.app),
            timeout=settings.ui_request_timeout,
        )
    async with client:
        yield InventoryState(client)


async def _render(
    state: InventoryState,
    draft: FormDraft | None = None,
    query: str = "",
    type_filter: str = ALL_TYPES,
    status_code: int = 200,
) -> HTMLResponse:
    await state.refresh()
    page = render_inventory_page(state.records, query, type_filter, draft, state.last_error)
    return HTMLResponse(page, status_code=status_code)


def _back_to_list() -> RedirectResponse:
    return RedirectResponse("/", status_code=303)


@router.get("/", response_class=HTMLResponse)
async def inventory_page(
    q: str = "",
    type: str = ALL_TYPES,
    edit: int | None = None,
    new: bool = False,
    state: InventoryState = Depends(get_inventory_state),
):
    """Inventory page, optionally with the create (?new=1) or edit (?edit=<id>) form open."""
    await state.refresh()
    draft = None
    status_code = 200
    if edit is not None:
        record = state.get(edit)
        if record is None:
            state.last_error = f"Filament {edit} not found"
            status_code = 404
        else:
            draft = FormDraft.from_record(record)
    elif new:
        draft = FormDraft.new()
    page = render_inventory_page(state.records, q, type, draft, state.last_error)
    return HTMLResponse(page, status_code=status_code)


@router.post("/ui/filaments/save", response_class=HTMLResponse)
async def save_filament(request: Request, state: InventoryState = Depends(get_inventory_state)):
    """Handle the create/edit form: apply a preset, refresh presets, or save."""
    form = await request.form()
    action = str(form.get("action") or "save")
    draft = FormDraft.from_form({k: str(v) for k, v in form.items()})

    if action.startswith("preset:"):
        draft.apply_preset(action.removeprefix("preset:"))
        return await _render(state, draft)
    if action == "refresh":
        return await _render(state, draft)

    missing = draft.missing_fields()
    if missing:
        draft.errors = missing
        return await _render(state, draft, status_code=422)

    payload = draft.to_payload()
    if draft.is_edit:
        ok = await state.update(draft.editing_id, payload)
    else:
        ok = await state.create(payload)
    if not ok:
        return await _render(state, draft, status_code=502)
    return _back_to_list()


@router.post("/ui/filaments/{filament_id}/increment", response_class=HTMLResponse)
async def increment_filament(filament_id: int, state: InventoryState = Depends(get_inventory_state)):
    """Add one spool to a filament's stock."""
    await state.refresh()
    record = state.get(filament_id)
    if record is None:
        state.last_error = state.last_error or f"Filament {filament_id} not found"
        return await _render(state, status_code=404)
    if not await state.increment_quantity(record):
        return await _render(state, status_code=502)
    return _back_to_list()


@router.post("/ui/filaments/{filament_id}/delete", response_class=HTMLResponse)
async def delete_filament(filament_id: int, state: InventoryState = Depends(get_inventory_state)):
    """Delete a filament after the browser-side confirmation prompt."""
    if not await state.delete(filament_id):
        return await _render(state, status_code=502)
    return _back_to_list()

"""HTML rendering for the filament inventory page."""

import html
import json
from urllib.parse import urlencode

from backend.app.core.config import settings
from backend.app.core.filament_presets import FILAMENT_TYPES
from backend.app.services.inventory_client import FilamentRecord
from backend.app.utils.filament_view import (
    ALL_TYPES,
    FormDraft,
    classify_quantity,
    filter_records,
    format_quantity,
    low_stock_records,
)

_STYLE = """
body { margin: 0; font-family: system-ui, sans-serif; background: #F9FAFB; color: #111827; }
header { background: #fff; border-bottom: 1px solid #E5E7EB; padding: 16px 24px;
         display: flex; justify-content: space-between; align-items: center; }
header h1 { margin: 0; font-size: 20px; }
main { max-width: 1000px; margin: 0 auto; padding: 24px; }
a.button, button { background: #059669; color: #fff; border: 0; border-radius: 8px; padding: 8px 14px;
                   font-weight: 600; cursor: pointer; text-decoration: none; font-size: 14px; }
button.secondary, a.secondary { background: #fff; color: #374151; border: 1px solid #E5E7EB; }
button.danger { background: #DC2626; }
.filters { display: flex; flex-wrap: wrap; gap: 8px; margin-bottom: 24px; }
.filters input[type=text] { flex: 1; min-width: 200px; padding: 8px 12px; border: 1px solid #E5E7EB;
                            border-radius: 8px; }
.filters a { padding: 6px 12px; border-radius: 8px; border: 1px solid #E5E7EB; background: #fff;
             color: #4B5563; text-decoration: none; font-size: 14px; }
.filters a.active { background: #111827; color: #fff; }
.banner { padding: 12px 16px; border-radius: 12px; margin-bottom: 16px; }
.banner.warning { background: #FFFBEB; color: #92400E; border: 1px solid #FDE68A; }
.banner.error { background: #FEF2F2; color: #991B1B; border: 1px solid #FECACA; }
.grid { display: grid; grid-template-columns: repeat(auto-fill, minmax(280px, 1fr)); gap: 20px; }
.card { background: #fff; border: 1px solid #E5E7EB; border-radius: 16px; overflow: hidden; }
.card .body { padding: 18px; }
.card .head { display: flex; gap: 12px; align-items: center; margin-bottom: 14px; }
.swatch { width: 44px; height: 44px; border-radius: 50%; border: 2px solid #E5E7EB; flex-shrink: 0; }
.card h3 { margin: 0; font-size: 17px; }
.tag { font-size: 11px; font-weight: 700; background: #F3F4F6; padding: 2px 6px; border-radius: 4px; }
.brand { font-size: 12px; color: #9CA3AF; margin-left: 6px; }
.stock { border-radius: 14px; padding: 14px; text-align: center; font-size: 26px; font-weight: 800; }
.stock.critical { color: #DC2626; background: #FEF2F2; }
.stock.low { color: #D97706; background: #FFFBEB; }
.stock.normal { color: #059669; background: #ECFDF5; }
.actions { display: flex; gap: 6px; margin-top: 12px; }
.actions form { margin: 0; }
.notes { padding: 10px 18px; background: #F9FAFB; border-top: 1px solid #F3F4F6; font-size: 12px;
         color: #6B7280; font-style: italic; }
.empty { text-align: center; padding: 60px 0; color: #6B7280; }
.panel { background: #fff; border: 1px solid #E5E7EB; border-radius: 16px; padding: 24px; margin-bottom: 24px; }
.panel label { display: block; font-size: 11px; font-weight: 700; color: #6B7280; text-transform: uppercase;
               margin: 12px 0 4px; }
.panel input, .panel select, .panel textarea { width: 100%; box-sizing: border-box; padding: 8px 10px;
                                              border: 1px solid #E5E7EB; border-radius: 8px; }
.presets { display: flex; flex-wrap: wrap; gap: 6px; }
.presets button { width: 30px; height: 30px; padding: 0; border-radius: 50%; border: 2px solid transparent; }
.presets button.selected { border-color: #059669; }
"""


def _e(value) -> str:
    return html.escape("" if value is None else str(value))


def page_url(query: str = "", type_filter: str = ALL_TYPES, **extra) -> str:
    params = {}
    if query:
        params["q"] = query
    if type_filter and type_filter != ALL_TYPES:
        params["type"] = type_filter
    params.update({k: v for k, v in extra.items() if v is not None})
    return "/" + (f"?{urlencode(params)}" if params else "")


def _render_filters(query: str, type_filter: str) -> str:
    buttons = []
    for option in (ALL_TYPES, *FILAMENT_TYPES):
        active = " active" if option == (type_filter or ALL_TYPES) else ""
        buttons.append(f'<a class="{active.strip()}" href="{_e(page_url(query, option))}">{_e(option)}</a>')
    hidden_type = ""
    if type_filter and type_filter != ALL_TYPES:
        hidden_type = f'<input type="hidden" name="type" value="{_e(type_filter)}">'
    return f"""
    <form class="filters" method="get" action="/">
      <input type="text" name="q" value="{_e(query)}" placeholder="Search by color or brand...">
      {hidden_type}
      <button type="submit" class="secondary">Search</button>
    </form>
    <div class="filters">{"".join(buttons)}</div>"""


def _render_card(record: FilamentRecord, query: str, type_filter: str) -> str:
    level = classify_quantity(record.quantity)
    edit_url = page_url(query, type_filter, edit=record.id)
    confirm = f"Delete {record.brand} {record.color_name}? This cannot be undone."
    notes = f'<div class="notes">{_e(record.notes)}</div>' if record.notes else ""
    return f"""
    <div class="card" data-id="{record.id}">
      <div class="body">
        <div class="head">
          <div class="swatch" style="background-color: {_e(record.color_hex)}"></div>
          <div>
            <h3>{_e(record.color_name)}</h3>
            <span class="tag">{_e(record.type)}</span><span class="brand">{_e(record.brand)}</span>
          </div>
        </div>
        <div class="stock {level}">{format_quantity(record.quantity)} <small>spools</small></div>
        <div class="actions">
          <form method="post" action="/ui/filaments/{record.id}/increment">
            <button type="submit" title="Add one spool">+1</button>
          </form>
          <a class="button secondary" href="{_e(edit_url)}">Edit</a>
          <form method="post" action="/ui/filaments/{record.id}/delete"
                onsubmit="return confirm({_e(json.dumps(confirm))});">
            <button type="submit" class="danger">Delete</button>
          </form>
        </div>
      </div>
      {notes}
    </div>"""


def _render_form(draft: FormDraft) -> str:
    title = "Edit spool" if draft.is_edit else "Add new spool"
    type_options = "".join(
        f'<option value="{_e(t)}"{" selected" if t == draft.type else ""}>{_e(t)}</option>' for t in FILAMENT_TYPES
    )
    swatches = "".join(
        f'<button type="submit" name="action" value="{_e("preset:" + p.name)}" title="{_e(p.name)}" formnovalidate'
        f' class="{"selected" if p.hex.upper() == draft.color_hex.upper() else ""}"'
        f' style="background-color: {_e(p.hex)}"></button>'
        for p in draft.presets()
    )
    presets = f'<label>Bambu Lab presets</label><div class="presets">{swatches}</div>' if swatches else ""
    errors = ""
    if draft.errors:
        errors = f'<div class="banner error">Please fill in: {_e(", ".join(draft.errors))}</div>'
    editing = f'<input type="hidden" name="editing_id" value="{draft.editing_id}">' if draft.is_edit else ""
    quantity = "" if draft.quantity is None else f"{draft.quantity:g}"
    return f"""
    <div class="panel" id="filament-form">
      <h2>{title}</h2>
      {errors}
      <form method="post" action="/ui/filaments/save">
        <button type="submit" name="action" value="save" style="display: none"></button>
        {editing}
        <label>Brand</label>
        <input type="text" name="brand" value="{_e(draft.brand)}" required>
        <label>Type</label>
        <select name="type">{type_options}</select>
        <button type="submit" name="action" value="refresh" class="secondary" formnovalidate>Show presets</button>
        {presets}
        <label>Color name</label>
        <input type="text" name="color_name" value="{_e(draft.color_name)}" placeholder="e.g. Jade White" required>
        <label>Color</label>
        <input type="color" name="color_hex" value="{_e(draft.color_hex)}">
        <label>Quantity (spools)</label>
        <input type="number" name="quantity" value="{_e(quantity)}" min="0" step="any" required>
        <label>Notes</label>
        <textarea name="notes" rows="2">{_e(draft.notes)}</textarea>
        <div class="actions">
          <button type="submit" name="action" value="save">{"Save changes" if draft.is_edit else "Add spool"}</button>
          <a class="button secondary" href="/">Cancel</a>
        </div>
      </form>
    </div>"""


def render_inventory_page(
    records: list[FilamentRecord],
    query: str = "",
    type_filter: str = ALL_TYPES,
    draft: FormDraft | None = None,
    error: str | None = None,
) -> str:
    """Render the whole page: filters, banners, optional form, and the card grid."""
    visible = filter_records(records, query, type_filter)
    low = low_stock_records(records)

    banners = []
    if error:
        banners.append(f'<div class="banner error" role="alert">{_e(error)}</div>')
    if low:
        names = ", ".join(f"{r.brand} {r.color_name}" for r in low)
        banners.append(
            f'<div class="banner warning">Low stock: {len(low)} spool{"s" if len(low) != 1 else ""}'
            f" below half a spool ({_e(names)})</div>"
        )

    cards = "".join(_render_card(r, query, type_filter) for r in visible)
    if not visible:
        cards = """
    <div class="empty">
      <h3>No filaments found</h3>
      <p>Adjust your search or add a new spool.</p>
    </div>"""
        grid = cards
    else:
        grid = f'<div class="grid">{cards}</div>'

    form = _render_form(draft) if draft is not None else ""
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{_e(settings.app_name)}</title>
  <style>{_STYLE}</style>
</head>
<body>
  <header>
    <h1>{_e(settings.app_name)}</h1>
    <a class="button" href="{_e(page_url(query, type_filter, new=1))}">Add spool</a>
  </header>
  <main>
    {"".join(banners)}
    {form}
    {_render_filters(query, type_filter)}
    {grid}
  </main>
</body>
</html>"""

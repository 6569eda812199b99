"""View logic for the filament inventory page.

Search, type filtering, stock classification and the create/edit form draft.
Everything here is derived from the full record list on every render; nothing
is cached between requests.
"""

import math
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Protocol

from backend.app.core.exceptions import FilamentValidationError
from backend.app.core.filament_presets import FILAMENT_TYPES, ColorPreset, find_preset, get_presets

ALL_TYPES = "All"

# Stock level thresholds, in spools
CRITICAL_BELOW = 0.25
LOW_BELOW = 0.75
LOW_STOCK_BANNER_BELOW = 0.5

DEFAULT_BRAND = "Bambu Lab"
DEFAULT_TYPE = "PLA"
DEFAULT_COLOR_HEX = "#000000"

_HEX_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


class FilamentLike(Protocol):
    brand: str
    type: str
    color_name: str
    color_hex: str
    quantity: float
    notes: str | None


def matches_search(record: FilamentLike, query: str) -> bool:
    """Case-insensitive substring match against color name or brand.

    The query is used as typed, so " " only matches names containing a space.
    """
    needle = query.lower()
    return needle in record.color_name.lower() or needle in record.brand.lower()


def matches_type(record: FilamentLike, type_filter: str | None) -> bool:
    if not type_filter or type_filter == ALL_TYPES:
        return True
    return record.type == type_filter


def filter_records(records: Iterable[FilamentLike], query: str = "", type_filter: str | None = ALL_TYPES) -> list:
    return [r for r in records if matches_search(r, query) and matches_type(r, type_filter)]


def classify_quantity(quantity: float) -> str:
    """Stock level: 'critical' below 0.25, 'low' below 0.75, else 'normal'."""
    if quantity < CRITICAL_BELOW:
        return "critical"
    if quantity < LOW_BELOW:
        return "low"
    return "normal"


def is_low_stock(quantity: float) -> bool:
    return quantity < LOW_STOCK_BANNER_BELOW


def low_stock_records(records: Iterable[FilamentLike]) -> list:
    return [r for r in records if is_low_stock(r.quantity)]


def format_quantity(quantity: float) -> str:
    """2.0 -> '2', 1.50 -> '1.5'."""
    return f"{quantity:.2f}".rstrip("0").rstrip(".")


def _parse_quantity(raw: str | None) -> float | None:
    if raw is None or not str(raw).strip():
        return None
    try:
        value = float(str(raw).replace(",", "."))
    except ValueError:
        return None
    # "nan" and "inf" parse as floats but are not quantities
    return value if math.isfinite(value) else None


@dataclass
class FormDraft:
    """The single draft behind both the create and the edit form."""

    brand: str = DEFAULT_BRAND
    type: str = DEFAULT_TYPE
    color_name: str = ""
    color_hex: str = DEFAULT_COLOR_HEX
    quantity: float | None = 1
    notes: str = ""
    editing_id: int | None = None
    errors: list[str] = field(default_factory=list)

    @classmethod
    def new(cls) -> "FormDraft":
        return cls()

    @classmethod
    def from_record(cls, record) -> "FormDraft":
        return cls(
            brand=record.brand,
            type=record.type,
            color_name=record.color_name,
            color_hex=record.color_hex,
            quantity=record.quantity,
            notes=record.notes or "",
            editing_id=record.id,
        )

    @classmethod
    def from_form(cls, form: Mapping[str, str]) -> "FormDraft":
        editing_id = form.get("editing_id") or ""
        return cls(
            brand=form.get("brand", ""),
            type=form.get("type", DEFAULT_TYPE),
            color_name=form.get("color_name", ""),
            color_hex=form.get("color_hex", DEFAULT_COLOR_HEX),
            quantity=_parse_quantity(form.get("quantity")),
            notes=form.get("notes", ""),
            editing_id=int(editing_id) if editing_id.isdigit() else None,
        )

    @property
    def is_edit(self) -> bool:
        return self.editing_id is not None

    def presets(self) -> list[ColorPreset]:
        return get_presets(self.type)

    def apply_preset(self, name: str) -> bool:
        """Overwrite color name and hex from a preset of the current type."""
        preset = find_preset(self.type, name)
        if preset is None:
            return False
        self.color_name = preset.name
        self.color_hex = preset.hex
        return True

    def missing_fields(self) -> list[str]:
        missing = []
        if not self.brand.strip():
            missing.append("brand")
        if self.type not in FILAMENT_TYPES:
            missing.append("type")
        if not self.color_name.strip():
            missing.append("colorName")
        if not _HEX_RE.match(self.color_hex or ""):
            missing.append("colorHex")
        if self.quantity is None or not math.isfinite(self.quantity) or self.quantity < 0:
            missing.append("quantity")
        return missing

    def to_payload(self) -> dict:
        """Request body for create/update. Raises FilamentValidationError on missing fields."""
        missing = self.missing_fields()
        if missing:
            raise FilamentValidationError(missing)
        return {
            "brand": self.brand.strip(),
            "type": self.type,
            "colorName": self.color_name.strip(),
            "colorHex": self.color_hex,
            "quantity": self.quantity,
            "notes": self.notes.strip() or None,
        }

"""Bambu Lab color presets offered as quick-select swatches, keyed by filament type.

Order matters: swatches render in the order listed here.
"""

from dataclasses import dataclass
from enum import StrEnum


class FilamentType(StrEnum):
    PLA = "PLA"
    PETG = "PETG"
    PLA_CF = "PLA-CF"
    PETG_CF = "PETG-CF"
    TPU = "TPU"
    OTHER = "Other"


# Display order for filter buttons and the type select
FILAMENT_TYPES: tuple[str, ...] = tuple(t.value for t in FilamentType)


@dataclass(frozen=True)
class ColorPreset:
    name: str
    hex: str


def _presets(*pairs: tuple[str, str]) -> tuple[ColorPreset, ...]:
    return tuple(ColorPreset(name, hex_code) for name, hex_code in pairs)


COLOR_PRESETS: dict[str, tuple[ColorPreset, ...]] = {
    FilamentType.PLA: _presets(
        ("Jade White", "#F5F5F5"),
        ("Black", "#1A1A1A"),
        ("Grey", "#808080"),
        ("Red", "#E60012"),
        ("Blue", "#0067B1"),
        ("Green", "#009640"),
        ("Yellow", "#FFD100"),
        ("Orange", "#F37021"),
        ("Purple", "#6D2D91"),
        ("Pink", "#E4007F"),
        ("Cyan", "#00A0E9"),
        ("Magenta", "#E4007F"),
        ("Brown", "#734338"),
        ("Silver", "#C0C0C0"),
        ("Gold", "#D4AF37"),
        ("Bronze", "#CD7F32"),
        ("Bambu Green", "#00AE42"),
        ("Mistletoe Green", "#2D5A27"),
        ("Lava Red", "#A61022"),
        ("Ice Blue", "#A5D7E8"),
    ),
    FilamentType.PETG: _presets(
        ("White", "#FFFFFF"),
        ("Black", "#000000"),
        ("Grey", "#808080"),
        ("Red", "#FF0000"),
        ("Blue", "#0000FF"),
        ("Green", "#008000"),
        ("Yellow", "#FFFF00"),
        ("Orange", "#FFA500"),
        ("Translucent", "#E0E0E0"),
    ),
    FilamentType.PLA_CF: _presets(
        ("Black", "#1A1A1A"),
        ("Lava Red", "#A61022"),
        ("Dark Blue", "#003366"),
        ("Dark Green", "#004D00"),
        ("Burgundy", "#800020"),
    ),
    FilamentType.PETG_CF: _presets(
        ("Black", "#1A1A1A"),
        ("Dark Grey", "#404040"),
    ),
    FilamentType.TPU: _presets(
        ("White", "#FFFFFF"),
        ("Black", "#000000"),
        ("Red", "#FF0000"),
        ("Blue", "#0000FF"),
        ("Green", "#008000"),
        ("Yellow", "#FFFF00"),
        ("Orange", "#FFA500"),
        ("Neon Green", "#39FF14"),
    ),
}


def get_presets(filament_type: str) -> list[ColorPreset]:
    """Presets for a filament type, empty for types without a curated list."""
    return list(COLOR_PRESETS.get(filament_type, ()))


def find_preset(filament_type: str, name: str) -> ColorPreset | None:
    for preset in COLOR_PRESETS.get(filament_type, ()):
        if preset.name == name:
            return preset
    return None

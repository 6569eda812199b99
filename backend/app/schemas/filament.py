from datetime import datetime

from pydantic import BaseModel, Field, field_validator
from pydantic.alias_generators import to_camel

from backend.app.core.filament_presets import FilamentType

# JSON keys are camelCase (colorName, colorHex, lastUsed); snake_case is accepted too
_camel_config = {"alias_generator": to_camel, "populate_by_name": True}


class FilamentBase(BaseModel):
    """Writable fields of a filament spool entry."""

    brand: str = Field(..., min_length=1, max_length=100)
    type: FilamentType
    color_name: str = Field(..., min_length=1, max_length=100)
    color_hex: str = Field(..., pattern=r"^#[0-9A-Fa-f]{6}$")
    quantity: float = Field(..., ge=0, allow_inf_nan=False, description="Number of spools, may be fractional")
    notes: str | None = None

    model_config = _camel_config

    @field_validator("brand", "color_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("must not be blank")
        return v


class FilamentCreate(FilamentBase):
    pass


class FilamentUpdate(FilamentBase):
    """Full replacement of every writable field. id and lastUsed in the body are ignored."""

    pass


class FilamentResponse(FilamentBase):
    id: int
    last_used: datetime

    model_config = {**_camel_config, "from_attributes": True}


class ColorPresetResponse(BaseModel):
    name: str
    hex: str

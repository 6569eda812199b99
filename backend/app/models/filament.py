from datetime import datetime

from sqlalchemy import DateTime, Float, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.core.database import Base


class Filament(Base):
    """A filament spool entry in the inventory."""

    __tablename__ = "filaments"
    # AUTOINCREMENT so SQLite never hands out the id of a deleted row again
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(primary_key=True)
    brand: Mapped[str] = mapped_column(String(100))  # "Bambu Lab"
    type: Mapped[str] = mapped_column(String(20))  # PLA, PETG, PLA-CF, PETG-CF, TPU, Other
    color_name: Mapped[str] = mapped_column(String(100))  # "Jade White"
    color_hex: Mapped[str] = mapped_column(String(7))  # #RRGGBB
    quantity: Mapped[float] = mapped_column(Float, default=1)  # Spool count, may be fractional
    notes: Mapped[str | None] = mapped_column(Text)
    # Most recent create/update write, not an actual print usage
    last_used: Mapped[datetime] = mapped_column(DateTime, server_default=func.now())

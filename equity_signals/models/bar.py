"""Price/volume snapshot (bar) models."""

from datetime import datetime
from decimal import Decimal
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Bar(BaseModel):
    """One timestamped price/volume snapshot for a symbol."""

    model_config = ConfigDict(frozen=True)

    symbol: str
    company_name: str = ""
    last_price: Decimal = Field(ge=0)
    change: Decimal = Decimal("0")
    percent_change: Decimal = Decimal("0")
    open: Decimal = Field(default=Decimal("0"), ge=0)
    day_high: Decimal = Field(default=Decimal("0"), ge=0)
    day_low: Decimal = Field(default=Decimal("0"), ge=0)
    previous_close: Decimal = Field(default=Decimal("0"), ge=0)
    volume: int = Field(default=0, ge=0)
    turnover: Decimal = Decimal("0")
    timestamp: datetime

    @field_validator("volume", mode="before")
    @classmethod
    def _missing_volume_is_zero(cls, value):
        return 0 if value is None else value


def sort_bars(bars: Iterable[Bar] | None) -> list[Bar]:
    """Return a new list of bars in chronological order.

    The sort is stable, so bars sharing a timestamp keep their input order.
    ``None`` yields an empty list.
    """
    if bars is None:
        return []
    return sorted(bars, key=lambda b: b.timestamp)


def closes(bars: Iterable[Bar]) -> list[Decimal]:
    """Get list of last prices."""
    return [b.last_price for b in bars]


def volumes(bars: Iterable[Bar]) -> list[int]:
    """Get list of volumes."""
    return [b.volume for b in bars]


"""
CONTRACT 1: Market Data

Input: DailySnapshot (one trading day, many symbols)
Output: TimeSeries (one symbol, many trading days)

Snapshots carry prices exactly as they were scraped (numbers or
comma-formatted strings). The series extractor normalizes them.
"""

from datetime import date
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator


# =============================================================================
# INPUT: Daily snapshots
# =============================================================================


class SymbolObservation(BaseModel):
    """Single symbol row in a daily snapshot (raw, unvalidated values)."""

    symbol: str
    name: Optional[str] = None
    price: Any = None
    change: Any = None
    volume: Any = None


class DailySnapshot(BaseModel):
    """All symbol observations for one trading day."""

    date: date
    index_value: Optional[float] = Field(
        default=None, description="NEPSE index close for the day"
    )
    stocks: list[SymbolObservation] = Field(default_factory=list)

    def find(self, symbol: str) -> Optional[SymbolObservation]:
        """Return the observation for ``symbol`` or None."""
        for stock in self.stocks:
            if stock.symbol.strip().upper() == symbol:
                return stock
        return None


# =============================================================================
# OUTPUT: TimeSeries
# =============================================================================


class PricePoint(BaseModel):
    """Normalized daily close and traded volume."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    date: date
    price: float = Field(..., gt=0)
    volume: float = Field(default=0.0, ge=0)


class TimeSeries(BaseModel):
    """
    Ordered daily history for exactly one symbol.

    Dates are strictly increasing. Empty and short series are valid.
    """

    model_config = ConfigDict(frozen=True)

    symbol: str
    points: tuple[PricePoint, ...] = ()

    @model_validator(mode="after")
    def _check_ordering(self) -> "TimeSeries":
        for prev, curr in zip(self.points, self.points[1:]):
            if curr.date <= prev.date:
                raise ValueError(
                    f"{self.symbol}: dates must be strictly increasing "
                    f"({prev.date} followed by {curr.date})"
                )
        return self

    def __len__(self) -> int:
        return len(self.points)

    @property
    def prices(self) -> list[float]:
        return [p.price for p in self.points]

    @property
    def volumes(self) -> list[float]:
        return [p.volume for p in self.points]

    @property
    def latest(self) -> Optional[PricePoint]:
        return self.points[-1] if self.points else None

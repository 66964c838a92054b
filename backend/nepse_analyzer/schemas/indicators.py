"""
CONTRACT 2: Indicator Engine

Input: TimeSeries
Output: IndicatorSet

Values are always defined for the latest point. Indicators that did not
have enough history carry their documented neutral default and are listed
in ``insufficient``.
"""

from typing import Optional
from pydantic import BaseModel, ConfigDict, Field


class MACDData(BaseModel):
    """MACD indicator values for the latest point."""

    model_config = ConfigDict(frozen=True)

    line: float = 0.0
    signal: float = 0.0
    histogram: float = 0.0


class IndicatorSet(BaseModel):
    """Latest indicator readings for one symbol."""

    model_config = ConfigDict(frozen=True)

    rsi: float = Field(default=50.0, ge=0, le=100)
    ema_short: float
    ema_long: Optional[float] = None
    sma_short: Optional[float] = None
    macd: MACDData = Field(default_factory=MACDData)
    insufficient: list[str] = Field(
        default_factory=list,
        description="Indicators that fell back to a default (rsi / ema_short / macd)",
    )

    def is_warm(self, indicator: str) -> bool:
        """True when ``indicator`` was computed from a full warm-up window."""
        return indicator not in self.insufficient


class VolumeStats(BaseModel):
    """Recent volume context used by the conviction/panic rule."""

    current_volume: float = 0.0
    average_volume: Optional[float] = Field(
        default=None, description="Mean volume over the lookback window"
    )
    price_change: Optional[float] = Field(
        default=None, description="Latest close minus previous close"
    )

"""
Indicator Engine Service Implementation

Calculates the latest indicator readings from a daily TimeSeries.
Pure Python/NumPy calculations.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from nepse_analyzer.core.config import Settings, settings
from nepse_analyzer.schemas.market import TimeSeries
from nepse_analyzer.schemas.indicators import IndicatorSet, MACDData
from nepse_analyzer.services.base import ValidationError
from nepse_analyzer.services.indicators.interface import IndicatorServiceInterface
from nepse_analyzer.services.indicators.calculations import (
    NEUTRAL_RSI,
    latest_ema,
    latest_macd,
    latest_rsi,
    latest_sma,
)

logger = logging.getLogger(__name__)

RSI = "rsi"
EMA_SHORT = "ema_short"
MACD = "macd"


@dataclass(frozen=True)
class IndicatorConfig:
    """Indicator periods."""

    rsi_period: int = 14
    ema_short_period: int = 20
    ema_long_period: int = 50
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9

    @classmethod
    def from_settings(cls, source: Settings = settings) -> "IndicatorConfig":
        return cls(
            rsi_period=source.rsi_period,
            ema_short_period=source.ema_short_period,
            ema_long_period=source.ema_long_period,
            macd_fast=source.macd_fast,
            macd_slow=source.macd_slow,
            macd_signal=source.macd_signal,
        )

    @property
    def min_points(self) -> int:
        """Shortest series for which at least one indicator is warm."""
        return min(
            self.rsi_period + 1,
            self.ema_short_period,
            self.macd_slow + self.macd_signal,
        )


class IndicatorService(IndicatorServiceInterface):
    """
    Indicator Engine Service.

    All calculations are deterministic and reproducible; every call is a
    full recompute over the series it is given.
    """

    def __init__(self, config: Optional[IndicatorConfig] = None):
        self.config = config or IndicatorConfig.from_settings()
        self._validate_config()

    def _validate_config(self) -> None:
        cfg = self.config
        periods = {
            "rsi_period": cfg.rsi_period,
            "ema_short_period": cfg.ema_short_period,
            "ema_long_period": cfg.ema_long_period,
            "macd_fast": cfg.macd_fast,
            "macd_slow": cfg.macd_slow,
            "macd_signal": cfg.macd_signal,
        }
        bad = {k: v for k, v in periods.items() if v < 1}
        if bad:
            raise ValidationError(self.name, "Indicator periods must be >= 1", bad)
        if cfg.macd_fast >= cfg.macd_slow:
            raise ValidationError(
                self.name,
                "MACD fast period must be shorter than slow period",
                {"macd_fast": cfg.macd_fast, "macd_slow": cfg.macd_slow},
            )

    @property
    def name(self) -> str:
        return "IndicatorService"

    async def execute(self, input_data: TimeSeries) -> IndicatorSet:
        """Calculate indicators for one symbol's series."""
        return self.compute_indicators(input_data)

    def compute_indicators(self, series: TimeSeries) -> IndicatorSet:
        """Calculate the latest indicator readings with safe defaults."""
        cfg = self.config
        closes = series.prices
        insufficient: list[str] = []

        if len(closes) < cfg.rsi_period + 1:
            insufficient.append(RSI)
        rsi_val = latest_rsi(closes, cfg.rsi_period)

        if len(closes) < cfg.ema_short_period:
            insufficient.append(EMA_SHORT)
        # Falls back to the last close when short, 0.0 for an empty series
        ema_short = latest_ema(closes, cfg.ema_short_period) or 0.0

        ema_long = None
        if len(closes) >= cfg.ema_long_period:
            ema_long = latest_ema(closes, cfg.ema_long_period)

        if len(closes) < cfg.macd_slow + cfg.macd_signal:
            insufficient.append(MACD)
        line, signal, histogram = latest_macd(
            closes, cfg.macd_fast, cfg.macd_slow, cfg.macd_signal
        )

        if insufficient:
            logger.debug(
                f"{series.symbol}: {len(closes)} points, using defaults for "
                f"{', '.join(insufficient)}"
            )

        return IndicatorSet(
            rsi=rsi_val if 0 <= rsi_val <= 100 else NEUTRAL_RSI,
            ema_short=ema_short,
            ema_long=ema_long,
            sma_short=latest_sma(closes, cfg.ema_short_period),
            macd=MACDData(line=line, signal=signal, histogram=histogram),
            insufficient=insufficient,
        )

    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[IndicatorService] = None


def get_indicator_service() -> IndicatorService:
    """Get or create indicator service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = IndicatorService()
    return _service_instance


def compute_indicators(series: TimeSeries) -> IndicatorSet:
    """Calculate indicators with the configured periods."""
    return get_indicator_service().compute_indicators(series)

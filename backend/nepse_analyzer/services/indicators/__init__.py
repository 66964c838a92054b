"""
Indicator Engine Service

CONTRACT:
    Input:  TimeSeries (daily closes and volumes for one symbol)
    Output: IndicatorSet

RESPONSIBILITIES:
    - Calculate SMA / EMA, Wilder RSI and MACD with correct warm-up alignment
    - Substitute documented neutral defaults when history is short
    - Keep NaN out of every recurrence

PURE PYTHON - Uses NumPy for calculations.
All math is deterministic and reproducible.
"""

from nepse_analyzer.services.indicators.interface import IndicatorServiceInterface
from nepse_analyzer.services.indicators.service import (
    IndicatorConfig,
    IndicatorService,
    compute_indicators,
    get_indicator_service,
)

__all__ = [
    "IndicatorServiceInterface",
    "IndicatorConfig",
    "IndicatorService",
    "compute_indicators",
    "get_indicator_service",
]

"""
NEPSE Analyzer Schema Contracts

This module defines all JSON contracts between system components.
These are the authoritative interfaces - all modules must conform to these schemas.
"""

from nepse_analyzer.schemas.market import (
    DailySnapshot,
    SymbolObservation,
    PricePoint,
    TimeSeries,
)
from nepse_analyzer.schemas.indicators import (
    IndicatorSet,
    MACDData,
    VolumeStats,
)
from nepse_analyzer.schemas.analysis import (
    AnalysisResult,
    AnalysisView,
    BatchAnalysisRequest,
    BatchAnalysisResult,
    Recommendation,
    Signal,
    SignalDirection,
)

__all__ = [
    # Market
    "DailySnapshot",
    "SymbolObservation",
    "PricePoint",
    "TimeSeries",
    # Indicators
    "IndicatorSet",
    "MACDData",
    "VolumeStats",
    # Analysis
    "AnalysisResult",
    "AnalysisView",
    "BatchAnalysisRequest",
    "BatchAnalysisResult",
    "Recommendation",
    "Signal",
    "SignalDirection",
]

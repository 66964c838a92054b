"""
CONTRACT 3: Analysis

Input: TimeSeries + IndicatorSet
Output: AnalysisResult

Score is centered at 50 and unbounded; the recommendation is a pure
function of the score and the configured thresholds.
"""

from datetime import date
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, Field

from nepse_analyzer.schemas.indicators import IndicatorSet


# =============================================================================
# ENUMS
# =============================================================================


class SignalDirection(str, Enum):
    BULLISH = "BULLISH"
    BEARISH = "BEARISH"
    NEUTRAL = "NEUTRAL"


class Recommendation(str, Enum):
    STRONG_BUY = "STRONG BUY"
    BUY = "BUY"
    HOLD = "HOLD"
    SELL = "SELL"
    STRONG_SELL = "STRONG SELL"


# =============================================================================
# OUTPUT: AnalysisResult
# =============================================================================


class Signal(BaseModel):
    """One scoring rule that fired."""

    direction: SignalDirection
    source: str = Field(..., description="Indicator name (RSI / Trend / MACD / Volume)")
    message: str
    weight: float = Field(..., description="Signed contribution to the score")


class AnalysisResult(BaseModel):
    """
    Complete verdict for a symbol.
    Returned by: Analysis Service
    Consumed by: API (after tier redaction), batch crunch
    """

    symbol: str
    as_of: Optional[date] = None
    price: Optional[float] = None
    volume: Optional[float] = None
    score: float
    recommendation: Recommendation
    signals: list[Signal]
    indicators: Optional[IndicatorSet] = None

    class Config:
        json_schema_extra = {
            "example": {
                "symbol": "NABIL",
                "as_of": "2024-02-04",
                "price": 1234.5,
                "score": 75.0,
                "recommendation": "STRONG BUY",
                "signals": [
                    {
                        "direction": "NEUTRAL",
                        "source": "RSI",
                        "message": "RSI is Neutral (52.9)",
                        "weight": 0,
                    },
                    {
                        "direction": "BULLISH",
                        "source": "Trend",
                        "message": "Uptrend: Price 1234.50 > 20 EMA 1201.33",
                        "weight": 15,
                    },
                ],
            }
        }


# =============================================================================
# BATCH: daily crunch over all active symbols
# =============================================================================


class BatchAnalysisRequest(BaseModel):
    """Analyze many symbols from the same snapshot source."""

    symbols: Optional[list[str]] = Field(
        default=None,
        description="Symbols to analyze (default: every symbol in the latest snapshot)",
    )
    history_limit: Optional[int] = Field(default=None, ge=1, le=1000)


class BatchAnalysisResult(BaseModel):
    """Outcome of a batch run; per-symbol failures never abort the batch."""

    as_of: Optional[date] = None
    results: list[AnalysisResult] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


# =============================================================================
# PRESENTATION: tier-redacted view
# =============================================================================


LOCKED = "LOCKED"
LOGIN_TO_VIEW = "LOGIN_TO_VIEW"
LOCKED_SIGNALS = ["Login to see AI verdict"]


class AnalysisView(BaseModel):
    """Serialized analysis, possibly redacted for guest viewers."""

    symbol: str
    as_of: Optional[date] = None
    price: Optional[float] = None
    is_pro: bool
    score: Union[float, str]
    recommendation: str
    signals: Union[list[Signal], list[str]]
    indicators: dict[str, Union[float, str, None]]

"""
Tier Redaction

The engine always computes full-fidelity results. Whether a viewer may
see the verdict is decided by the caller and passed in as a flag.
"""

from typing import Optional, Union

from nepse_analyzer.schemas.analysis import (
    LOCKED,
    LOCKED_SIGNALS,
    LOGIN_TO_VIEW,
    AnalysisResult,
    AnalysisView,
)


def _indicator_fields(result: AnalysisResult) -> dict[str, Optional[float]]:
    ind = result.indicators
    if ind is None:
        return {"rsi": None, "volume": result.volume}
    return {
        "rsi": ind.rsi,
        "ema": ind.ema_short,
        "ema_long": ind.ema_long,
        "macd_line": ind.macd.line,
        "macd_signal": ind.macd.signal,
        "macd_histogram": ind.macd.histogram,
        "volume": result.volume,
    }


def present_analysis(
    result: AnalysisResult,
    can_view_full: bool,
) -> AnalysisView:
    """
    Serialize ``result`` for a viewer.

    Guests keep the symbol, price and RSI; score, recommendation, signals
    and the remaining indicators are replaced by lock markers.
    """
    indicators: dict[str, Union[float, str, None]] = dict(_indicator_fields(result))

    if can_view_full:
        return AnalysisView(
            symbol=result.symbol,
            as_of=result.as_of,
            price=result.price,
            is_pro=True,
            score=result.score,
            recommendation=result.recommendation.value,
            signals=result.signals,
            indicators=indicators,
        )

    redacted = {
        key: (value if key == "rsi" else LOCKED) for key, value in indicators.items()
    }
    return AnalysisView(
        symbol=result.symbol,
        as_of=result.as_of,
        price=result.price,
        is_pro=False,
        score=LOCKED,
        recommendation=LOGIN_TO_VIEW,
        signals=list(LOCKED_SIGNALS),
        indicators=redacted,
    )

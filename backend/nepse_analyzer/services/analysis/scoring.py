"""
Scoring Rules

Turns the latest indicator readings into a score centered at 50, a
recommendation label and one human-readable Signal per rule that fired.
Pure functions: no persistence, no network.
"""

from dataclasses import dataclass, field
from typing import Optional

from nepse_analyzer.core.config import Settings, settings
from nepse_analyzer.schemas.analysis import Recommendation, Signal, SignalDirection
from nepse_analyzer.schemas.indicators import IndicatorSet, VolumeStats
from nepse_analyzer.services.indicators.service import EMA_SHORT, MACD, RSI


@dataclass(frozen=True)
class ScoringConfig:
    """Rule weights, bands and recommendation thresholds."""

    base_score: float = 50.0
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0
    rsi_weight: float = 20.0
    trend_weight: float = 15.0
    trend_period: int = 20
    macd_weight: float = 10.0
    volume_weight: float = 15.0
    volume_spike_multiplier: float = 1.5
    strong_buy_threshold: float = 70.0
    buy_threshold: float = 60.0
    sell_threshold: float = 40.0
    strong_sell_threshold: float = 25.0

    @classmethod
    def from_settings(cls, source: Settings = settings) -> "ScoringConfig":
        return cls(
            base_score=source.base_score,
            rsi_oversold=source.rsi_oversold,
            rsi_overbought=source.rsi_overbought,
            rsi_weight=source.rsi_weight,
            trend_weight=source.trend_weight,
            trend_period=source.ema_short_period,
            macd_weight=source.macd_weight,
            volume_weight=source.volume_weight,
            volume_spike_multiplier=source.volume_spike_multiplier,
            strong_buy_threshold=source.strong_buy_threshold,
            buy_threshold=source.buy_threshold,
            sell_threshold=source.sell_threshold,
            strong_sell_threshold=source.strong_sell_threshold,
        )


@dataclass
class ScoreOutcome:
    """Score, label and the signals that produced them."""

    score: float
    recommendation: Recommendation
    signals: list[Signal] = field(default_factory=list)


def recommend(score: float, config: ScoringConfig = ScoringConfig()) -> Recommendation:
    """Map a score onto the recommendation ladder."""
    if score >= config.strong_buy_threshold:
        return Recommendation.STRONG_BUY
    if score >= config.buy_threshold:
        return Recommendation.BUY
    if score <= config.strong_sell_threshold:
        return Recommendation.STRONG_SELL
    if score <= config.sell_threshold:
        return Recommendation.SELL
    return Recommendation.HOLD


def _neutral(source: str, message: str) -> Signal:
    return Signal(
        direction=SignalDirection.NEUTRAL, source=source, message=message, weight=0.0
    )


def _rsi_signal(rsi: float, config: ScoringConfig) -> Signal:
    if rsi < config.rsi_oversold:
        return Signal(
            direction=SignalDirection.BULLISH,
            source="RSI",
            message=f"RSI is Oversold ({rsi:.1f}). The stock may be undervalued and due for a bounce.",
            weight=config.rsi_weight,
        )
    if rsi > config.rsi_overbought:
        return Signal(
            direction=SignalDirection.BEARISH,
            source="RSI",
            message=f"RSI is Overbought ({rsi:.1f}). The stock may be overvalued and due for a correction.",
            weight=-config.rsi_weight,
        )
    return _neutral("RSI", f"RSI is Neutral ({rsi:.1f})")


def _trend_signal(price: float, ema: float, config: ScoringConfig) -> Signal:
    label = f"{config.trend_period} EMA"
    if price > ema:
        return Signal(
            direction=SignalDirection.BULLISH,
            source="Trend",
            message=f"Uptrend: Price {price:.2f} > {label} {ema:.2f}",
            weight=config.trend_weight,
        )
    return Signal(
        direction=SignalDirection.BEARISH,
        source="Trend",
        message=f"Downtrend: Price {price:.2f} <= {label} {ema:.2f}",
        weight=-config.trend_weight,
    )


def _macd_signal(indicators: IndicatorSet, config: ScoringConfig) -> Signal:
    macd = indicators.macd
    detail = f"histogram {macd.histogram:+.2f}, line {macd.line:.2f}, signal {macd.signal:.2f}"
    if macd.histogram > 0:
        return Signal(
            direction=SignalDirection.BULLISH,
            source="MACD",
            message=f"Bullish Momentum: MACD above its signal line ({detail})",
            weight=config.macd_weight,
        )
    return Signal(
        direction=SignalDirection.BEARISH,
        source="MACD",
        message=f"Bearish Momentum: MACD at or below its signal line ({detail})",
        weight=-config.macd_weight,
    )


def _volume_signal(stats: Optional[VolumeStats], config: ScoringConfig) -> Optional[Signal]:
    if stats is None or not stats.average_volume or stats.price_change is None:
        return None
    if stats.current_volume <= stats.average_volume * config.volume_spike_multiplier:
        return None

    ratio = stats.current_volume / stats.average_volume
    if stats.price_change > 0:
        return Signal(
            direction=SignalDirection.BULLISH,
            source="Volume",
            message=f"Volume is {ratio:.1f}x the average on a rising price. Buyers show conviction.",
            weight=config.volume_weight,
        )
    if stats.price_change < 0:
        return Signal(
            direction=SignalDirection.BEARISH,
            source="Volume",
            message=f"Volume is {ratio:.1f}x the average on a falling price. Panic selling.",
            weight=-config.volume_weight,
        )
    return None


def score_indicators(
    price: float,
    indicators: IndicatorSet,
    volume_stats: Optional[VolumeStats] = None,
    config: ScoringConfig = ScoringConfig(),
) -> ScoreOutcome:
    """
    Apply every rule independently and sum the weights onto the base score.

    Indicators that fell back to a default emit a neutral signal instead of
    voting.
    """
    signals: list[Signal] = []

    if indicators.is_warm(RSI):
        signals.append(_rsi_signal(indicators.rsi, config))
    else:
        signals.append(_neutral("RSI", "Not enough history for RSI, treating momentum as neutral"))

    if indicators.is_warm(EMA_SHORT):
        signals.append(_trend_signal(price, indicators.ema_short, config))
    else:
        signals.append(
            _neutral("Trend", f"Not enough history for the {config.trend_period} EMA, trend unknown")
        )

    if indicators.is_warm(MACD):
        signals.append(_macd_signal(indicators, config))
    else:
        signals.append(_neutral("MACD", "Not enough history for MACD, momentum unknown"))

    volume = _volume_signal(volume_stats, config)
    if volume is not None:
        signals.append(volume)

    score = config.base_score + sum(s.weight for s in signals)
    return ScoreOutcome(score=score, recommendation=recommend(score, config), signals=signals)

"""
Technical Indicator Calculations

Pure Python/NumPy implementations of technical indicators.
All math is deterministic.

Array functions return one slot per input point. Slots before an
indicator's warm-up window has elapsed are None, never NaN: a NaN fed back
into the EMA or Wilder recurrence would poison every later value.
"""

import math
from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

IndicatorSeries = list[Optional[float]]

NEUTRAL_RSI = 50.0


# =============================================================================
# INPUT HYGIENE
# =============================================================================


def sanitize(data: Sequence[Optional[float]]) -> np.ndarray:
    """
    Replace non-finite values with the most recent finite value.

    A leading run of bad values takes the first finite value instead.
    Returns an all-NaN array only when nothing in ``data`` is finite.
    """
    values = np.array(
        [np.nan if v is None else v for v in data], dtype=float
    )
    finite = np.isfinite(values)
    if finite.all() or not finite.any():
        return values

    last = values[np.argmax(finite)]
    for i in range(len(values)):
        if finite[i]:
            last = values[i]
        else:
            values[i] = last
    return values


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"Indicator period must be >= 1, got {period}")


def _empty(length: int) -> IndicatorSeries:
    return [None] * length


# =============================================================================
# MOVING AVERAGES
# =============================================================================


def sma(data: Sequence[float], period: int) -> IndicatorSeries:
    """Simple Moving Average."""
    _check_period(period)
    values = sanitize(data)
    result = _empty(len(values))
    if len(values) < period or not np.isfinite(values).all():
        return result

    for i in range(period - 1, len(values)):
        result[i] = float(np.mean(values[i - period + 1 : i + 1]))
    return result


def ema(data: Sequence[float], period: int) -> IndicatorSeries:
    """
    Exponential Moving Average.

    Seeded with the SMA of the first ``period`` values at index
    ``period - 1``; undefined everywhere when the series is shorter.
    """
    _check_period(period)
    values = sanitize(data)
    result = _empty(len(values))
    if len(values) < period or not np.isfinite(values).all():
        return result

    multiplier = 2 / (period + 1)

    # Start with SMA
    prev = float(np.mean(values[:period]))
    result[period - 1] = prev

    for i in range(period, len(values)):
        current = (values[i] - prev) * multiplier + prev
        if not math.isfinite(current):
            current = values[i]
        prev = float(current)
        result[i] = prev

    return result


def latest_ema(data: Sequence[float], period: int) -> Optional[float]:
    """
    Latest EMA value as a scalar.

    Fallback: when the series is shorter than ``period`` this returns the
    last raw price. That value is a placeholder, not an average, so a
    price-vs-EMA comparison against it carries no trend information.
    Returns None only for an empty series.
    """
    values = sanitize(data)
    if len(values) == 0 or not np.isfinite(values).all():
        return None
    if len(values) < period:
        return float(values[-1])
    return get_last_valid(ema(values, period))


def latest_sma(data: Sequence[float], period: int) -> Optional[float]:
    """Latest SMA value, or None when the series is shorter than ``period``."""
    return get_last_valid(sma(data, period))


# =============================================================================
# MOMENTUM INDICATORS
# =============================================================================


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        # Flat series: no gains and no losses
        return NEUTRAL_RSI if avg_gain == 0 else 100.0

    rs = avg_gain / avg_loss
    value = 100 - (100 / (1 + rs))
    return float(value) if math.isfinite(value) else NEUTRAL_RSI


def rsi(closes: Sequence[float], period: int = 14) -> IndicatorSeries:
    """
    Relative Strength Index with Wilder smoothing.

    Undefined for the first ``period`` positions.
    """
    _check_period(period)
    values = sanitize(closes)
    result = _empty(len(values))
    if len(values) < period + 1 or not np.isfinite(values).all():
        return result

    # Calculate price changes
    deltas = np.diff(values)

    # Separate gains and losses
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # First average
    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))
    result[period] = _rsi_from_averages(avg_gain, avg_loss)

    # Subsequent RSI values using smoothed averages
    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result[i + 1] = _rsi_from_averages(avg_gain, avg_loss)

    return result


def latest_rsi(closes: Sequence[float], period: int = 14) -> float:
    """Latest RSI; the neutral 50 when fewer than ``period + 1`` points exist."""
    value = get_last_valid(rsi(closes, period))
    return NEUTRAL_RSI if value is None else value


@dataclass(frozen=True)
class MACDSeries:
    """Aligned MACD sequences, one slot per input point."""

    line: IndicatorSeries
    signal: IndicatorSeries
    histogram: IndicatorSeries


def macd(
    closes: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> MACDSeries:
    """
    MACD (Moving Average Convergence Divergence).

    The line is defined from ``slow_period - 1``. The signal is an EMA over
    the defined suffix of the line, re-aligned so its last element matches
    the last close; it is defined from ``slow_period + signal_period - 2``.
    """
    _check_period(signal_period)
    if fast_period >= slow_period:
        raise ValueError(
            f"MACD fast period ({fast_period}) must be shorter than "
            f"slow period ({slow_period})"
        )

    fast_ema = ema(closes, fast_period)
    slow_ema = ema(closes, slow_period)

    macd_line: IndicatorSeries = [
        f - s if f is not None and s is not None else None
        for f, s in zip(fast_ema, slow_ema)
    ]

    # Signal line is EMA of the defined part of the MACD line
    start = warmup_length(macd_line)
    compact_signal = ema(macd_line[start:], signal_period)
    signal_line = _empty(start) + compact_signal

    histogram: IndicatorSeries = [
        m - s if m is not None and s is not None else None
        for m, s in zip(macd_line, signal_line)
    ]

    return MACDSeries(line=macd_line, signal=signal_line, histogram=histogram)


def latest_macd(
    closes: Sequence[float],
    fast_period: int = 12,
    slow_period: int = 26,
    signal_period: int = 9,
) -> tuple[float, float, float]:
    """
    Latest (line, signal, histogram).

    Returns the neutral (0, 0, 0) below ``slow_period + signal_period``
    points: a momentum reading without a valid signal line is misleading.
    """
    if len(closes) < slow_period + signal_period:
        return 0.0, 0.0, 0.0

    series = macd(closes, fast_period, slow_period, signal_period)
    line, signal, histogram = (
        series.line[-1],
        series.signal[-1],
        series.histogram[-1],
    )
    if line is None or signal is None or histogram is None:
        return 0.0, 0.0, 0.0
    return line, signal, histogram


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_last_valid(series: Sequence[Optional[float]]) -> Optional[float]:
    """Get last defined value from an indicator series."""
    for value in reversed(series):
        if value is not None:
            return float(value)
    return None


def warmup_length(series: Sequence[Optional[float]]) -> int:
    """Number of leading undefined slots."""
    return next(
        (i for i, v in enumerate(series) if v is not None), len(series)
    )

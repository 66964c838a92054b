"""
Tests for SMA / EMA, Wilder RSI and MACD.

Synthetic price lists only; small cases are worked out by hand.
"""

import math

import numpy as np
import pytest

from nepse_analyzer.services.indicators.calculations import (
    NEUTRAL_RSI,
    ema,
    get_last_valid,
    latest_ema,
    latest_macd,
    latest_rsi,
    latest_sma,
    macd,
    rsi,
    sanitize,
    sma,
    warmup_length,
)


def _wave(n: int) -> list[float]:
    return [100 + 10 * math.sin(i / 5) + i * 0.1 for i in range(n)]


class TestSanitize:
    def test_interior_nan_takes_previous_value(self):
        assert list(sanitize([1.0, float("nan"), 3.0])) == [1.0, 1.0, 3.0]

    def test_leading_none_takes_first_finite_value(self):
        assert list(sanitize([None, float("inf"), 5.0, 6.0])) == [5.0, 5.0, 5.0, 6.0]

    def test_all_bad_stays_nan(self):
        assert np.isnan(sanitize([None, float("nan")])).all()


class TestMovingAverages:
    def test_sma_window_mean(self):
        assert sma([1, 2, 3, 4, 5], 3) == [None, None, 2.0, 3.0, 4.0]

    def test_sma_short_series_undefined(self):
        assert sma([1, 2], 3) == [None, None]
        assert latest_sma([1, 2], 3) is None

    def test_ema_seeded_with_sma(self):
        # k = 0.5: seed 2, then (4-2)/2+2 = 3, (5-3)/2+3 = 4
        assert ema([1, 2, 3, 4, 5], 3) == pytest.approx([None, None, 2.0, 3.0, 4.0])

    def test_ema_recurrence(self):
        values = [22.0, 24.0, 23.0, 26.0, 30.0]
        k = 2 / 4
        expected_seed = 23.0
        expected_3 = (26.0 - expected_seed) * k + expected_seed
        expected_4 = (30.0 - expected_3) * k + expected_3
        result = ema(values, 3)
        assert result[2] == pytest.approx(expected_seed)
        assert result[3] == pytest.approx(expected_3)
        assert result[4] == pytest.approx(expected_4)

    @pytest.mark.parametrize("period", [1, 5, 20])
    def test_ema_constant_series_is_fixed_point(self, period):
        result = ema([42.5] * 30, period)
        assert warmup_length(result) == period - 1
        assert all(v == pytest.approx(42.5) for v in result[period - 1 :])

    def test_ema_short_series_all_undefined(self):
        assert ema([1.0] * 19, 20) == [None] * 19

    def test_ema_nan_does_not_poison_recurrence(self):
        result = ema([10.0, 11.0, float("nan"), 12.0, None, 13.0], 2)
        assert result[0] is None
        assert all(v is not None and math.isfinite(v) for v in result[1:])

    def test_latest_ema_falls_back_to_last_price(self):
        assert latest_ema([10.0, 11.0, 12.5], 20) == 12.5

    def test_latest_ema_empty(self):
        assert latest_ema([], 20) is None

    def test_invalid_period(self):
        with pytest.raises(ValueError):
            ema([1.0, 2.0], 0)


class TestRSI:
    def test_hand_computed_values(self):
        # gains [1, 0, 1], losses [0, 1, 0]; seed averages 0.5/0.5 -> 50,
        # then (0.5+1)/2 = 0.75 vs (0.5+0)/2 = 0.25 -> RS 3 -> 75
        assert rsi([1, 2, 1, 2], 2) == pytest.approx([None, None, 50.0, 75.0])

    def test_constant_series_is_neutral(self):
        result = rsi([10.0] * 30, 14)
        assert result[:14] == [None] * 14
        assert all(v == NEUTRAL_RSI for v in result[14:])

    def test_monotonic_increase_is_100(self):
        result = rsi([float(p) for p in range(1, 41)], 14)
        assert all(v == 100.0 for v in result[14:])

    def test_single_gain_after_flat_days(self):
        prices = [50.0] * 14 + [80.0]
        assert len(prices) == 15
        assert latest_rsi(prices, 14) == 100.0

    def test_monotonic_decrease_is_0(self):
        assert latest_rsi([float(p) for p in range(40, 0, -1)], 14) == 0.0

    def test_short_series_defaults_to_neutral(self):
        assert rsi([1.0] * 14, 14) == [None] * 14
        assert latest_rsi([1.0] * 14, 14) == NEUTRAL_RSI
        assert latest_rsi([], 14) == NEUTRAL_RSI

    def test_bounded(self):
        rng = np.random.default_rng(7)
        prices = list(100 + np.cumsum(rng.normal(0, 2, 200)))
        values = [v for v in rsi(prices, 14) if v is not None]
        assert len(values) == 200 - 14
        assert all(0 <= v <= 100 for v in values)


class TestMACD:
    def test_flat_series_is_zero(self):
        line, signal, histogram = latest_macd([10.0] * 40)
        assert (line, signal, histogram) == (0.0, 0.0, 0.0)

    def test_warmup_alignment(self):
        series = macd(_wave(60), 12, 26, 9)
        assert warmup_length(series.line) == 25
        assert warmup_length(series.signal) == 25 + 8
        assert warmup_length(series.histogram) == 25 + 8
        assert len(series.line) == len(series.signal) == len(series.histogram) == 60

    def test_signal_is_ema_of_compacted_line(self):
        series = macd(_wave(60))
        compact = ema(series.line[25:], 9)
        assert series.signal[25:] == pytest.approx(compact)

    def test_histogram_is_line_minus_signal(self):
        series = macd(_wave(80))
        for line, signal, hist in zip(series.line, series.signal, series.histogram):
            if hist is None:
                continue
            assert hist == pytest.approx(line - signal)

    @pytest.mark.parametrize("end", [34, 35, 47, 80])
    def test_latest_value_uses_only_past_data(self, end):
        """Truncating the series must reproduce the full-run value at that index."""
        closes = _wave(80)
        full = macd(closes)
        truncated = macd(closes[:end])
        assert truncated.signal[-1] == pytest.approx(full.signal[end - 1])
        assert truncated.histogram[-1] == pytest.approx(full.histogram[end - 1])

    def test_sign_flips_match_crossings(self):
        series = macd(_wave(150))
        start = warmup_length(series.histogram)
        flips = crossings = 0
        for i in range(start + 1, 150):
            prev_h, curr_h = series.histogram[i - 1], series.histogram[i]
            if (prev_h > 0) != (curr_h > 0):
                flips += 1
                above_before = series.line[i - 1] > series.signal[i - 1]
                above_now = series.line[i] > series.signal[i]
                assert above_before != above_now
            if (series.line[i - 1] > series.signal[i - 1]) != (series.line[i] > series.signal[i]):
                crossings += 1
        assert flips == crossings
        assert flips > 0

    def test_neutral_below_minimum_history(self):
        assert latest_macd(_wave(34)) == (0.0, 0.0, 0.0)

    def test_defined_at_minimum_history(self):
        line, signal, histogram = latest_macd(_wave(35))
        assert line != 0.0
        assert histogram == pytest.approx(line - signal)

    def test_fast_must_be_shorter_than_slow(self):
        with pytest.raises(ValueError):
            macd(_wave(60), 26, 12, 9)


def test_get_last_valid():
    assert get_last_valid([None, 1.0, 2.0, None]) == 2.0
    assert get_last_valid([None, None]) is None

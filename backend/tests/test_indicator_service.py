"""
Tests for IndicatorService: latest readings, defaults and configuration checks.
"""

import pytest

from nepse_analyzer.services.base import ValidationError
from nepse_analyzer.services.indicators import (
    IndicatorConfig,
    IndicatorService,
    compute_indicators,
)


class TestComputeIndicators:
    def test_full_history_is_warm(self, make_series):
        prices = [100 + (i % 7) * 1.5 + i * 0.2 for i in range(60)]
        indicators = IndicatorService().compute_indicators(make_series(prices))
        assert indicators.insufficient == []
        assert indicators.ema_long is not None
        assert indicators.sma_short == pytest.approx(sum(prices[-20:]) / 20)
        assert indicators.macd.histogram == pytest.approx(
            indicators.macd.line - indicators.macd.signal
        )

    def test_short_history_uses_defaults(self, make_series):
        indicators = IndicatorService().compute_indicators(make_series([10.0, 11.0, 12.0]))
        assert indicators.insufficient == ["rsi", "ema_short", "macd"]
        assert indicators.rsi == 50.0
        assert indicators.ema_short == 12.0
        assert indicators.ema_long is None
        assert indicators.sma_short is None
        assert (indicators.macd.line, indicators.macd.signal, indicators.macd.histogram) == (0, 0, 0)

    @pytest.mark.parametrize(
        "length, insufficient",
        [
            (14, ["rsi", "ema_short", "macd"]),
            (15, ["ema_short", "macd"]),
            (20, ["macd"]),
            (34, ["macd"]),
            (35, []),
        ],
    )
    def test_warm_up_boundaries(self, make_series, length, insufficient):
        prices = [50 + i * 0.5 for i in range(length)]
        indicators = IndicatorService().compute_indicators(make_series(prices))
        assert indicators.insufficient == insufficient

    def test_custom_periods(self, make_series):
        config = IndicatorConfig(rsi_period=2, ema_short_period=3, macd_fast=2, macd_slow=3, macd_signal=2)
        indicators = IndicatorService(config).compute_indicators(make_series([1.0, 2.0, 1.0, 2.0]))
        assert indicators.rsi == pytest.approx(75.0)
        assert indicators.insufficient == ["macd"]

    def test_module_level_helper(self, make_series):
        indicators = compute_indicators(make_series([100.0] * 40))
        assert indicators.rsi == 50.0
        assert indicators.ema_short == 100.0

    @pytest.mark.asyncio
    async def test_execute(self, make_series):
        service = IndicatorService()
        indicators = await service.execute(make_series([100.0] * 20))
        assert indicators.ema_short == 100.0
        assert await service.health_check() is True


class TestIndicatorConfig:
    def test_min_points(self):
        assert IndicatorConfig().min_points == 15

    def test_rejects_zero_period(self):
        with pytest.raises(ValidationError) as exc_info:
            IndicatorService(IndicatorConfig(rsi_period=0))
        assert exc_info.value.details == {"rsi_period": 0}

    def test_rejects_inverted_macd(self):
        with pytest.raises(ValidationError):
            IndicatorService(IndicatorConfig(macd_fast=26, macd_slow=12))

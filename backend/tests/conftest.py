"""
Shared pytest fixtures for the NEPSE Analyzer test suite.

Provides:
  - ``make_series``: build a TimeSeries from plain price / volume lists.
  - ``make_snapshots``: build DailySnapshot lists for one or more symbols.
  - ``reset_singletons``: clear module-level service singletons.
"""

from datetime import date, timedelta
from typing import Callable, Optional

import pytest

from nepse_analyzer.schemas.market import (
    DailySnapshot,
    PricePoint,
    SymbolObservation,
    TimeSeries,
)

START = date(2024, 1, 1)


@pytest.fixture
def make_series() -> Callable[..., TimeSeries]:
    """Factory: consecutive-day TimeSeries from prices (and optional volumes)."""

    def _make(
        prices: list[float],
        volumes: Optional[list[float]] = None,
        symbol: str = "NABIL",
        start: date = START,
    ) -> TimeSeries:
        volumes = volumes if volumes is not None else [1000.0] * len(prices)
        points = tuple(
            PricePoint(date=start + timedelta(days=i), price=p, volume=v)
            for i, (p, v) in enumerate(zip(prices, volumes))
        )
        return TimeSeries(symbol=symbol, points=points)

    return _make


@pytest.fixture
def make_snapshots() -> Callable[..., list[DailySnapshot]]:
    """Factory: one snapshot per day; ``histories`` maps symbol -> prices.

    A symbol whose price list is shorter than the longest one appears only
    on the most recent days, so every symbol trades on the final day.
    """

    def _make(
        histories: dict[str, list[object]],
        start: date = START,
        volume: object = "1,000",
    ) -> list[DailySnapshot]:
        days = max(len(p) for p in histories.values())
        snapshots = []
        for i in range(days):
            stocks = []
            for symbol, prices in histories.items():
                offset = days - len(prices)
                if i >= offset:
                    stocks.append(
                        SymbolObservation(symbol=symbol, price=prices[i - offset], volume=volume)
                    )
            snapshots.append(DailySnapshot(date=start + timedelta(days=i), stocks=stocks))
        return snapshots

    return _make


@pytest.fixture
def reset_singletons():
    """Clear the cached analysis service and snapshot source around a test."""
    from nepse_analyzer.services.analysis import service as analysis_service
    from nepse_analyzer.services.data_ingestion import set_snapshot_source

    analysis_service._service_instance = None
    set_snapshot_source(None)
    yield
    analysis_service._service_instance = None
    set_snapshot_source(None)

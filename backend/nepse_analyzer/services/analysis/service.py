"""
Analysis Service Implementation

Runs the full pipeline for one symbol:
    snapshots -> TimeSeries -> IndicatorSet -> score -> AnalysisResult

and the daily batch over every active symbol. The compute step is pure;
snapshot reads happen before it.
"""

import asyncio
import logging
from typing import Optional

from nepse_analyzer.core.config import settings
from nepse_analyzer.schemas.analysis import (
    AnalysisResult,
    BatchAnalysisRequest,
    BatchAnalysisResult,
    Signal,
    SignalDirection,
)
from nepse_analyzer.schemas.indicators import VolumeStats
from nepse_analyzer.schemas.market import DailySnapshot, TimeSeries
from nepse_analyzer.services.base import NoDataError, ValidationError
from nepse_analyzer.services.analysis.interface import AnalysisServiceInterface
from nepse_analyzer.services.analysis.scoring import ScoringConfig, score_indicators
from nepse_analyzer.services.data_ingestion import (
    SnapshotSource,
    extract_series,
    get_snapshot_source,
    normalize_symbol,
)
from nepse_analyzer.services.indicators import IndicatorService
from nepse_analyzer.services.indicators.calculations import latest_sma

logger = logging.getLogger(__name__)


class AnalysisService(AnalysisServiceInterface):
    """
    Analysis Service.

    Every call is a full recompute over the retrieved window; no state is
    carried between calls.
    """

    def __init__(
        self,
        source: Optional[SnapshotSource] = None,
        indicator_service: Optional[IndicatorService] = None,
        scoring_config: Optional[ScoringConfig] = None,
        volume_lookback: int = settings.volume_lookback,
        history_limit: int = settings.history_limit,
        min_history_days: int = settings.min_history_days,
    ):
        self._source = source
        self._indicators = indicator_service or IndicatorService()
        self._scoring = scoring_config or ScoringConfig.from_settings()
        self._volume_lookback = volume_lookback
        self._history_limit = history_limit
        self._min_history_days = min_history_days

    @property
    def name(self) -> str:
        return "AnalysisService"

    @property
    def source(self) -> SnapshotSource:
        if self._source is not None:
            return self._source
        return get_snapshot_source()

    # -------------------------------------------------------------------------
    # Single symbol
    # -------------------------------------------------------------------------

    def analyze(self, symbol: str, series: TimeSeries) -> AnalysisResult:
        """
        Score one symbol's series.

        Raises:
            ValidationError: ``series`` belongs to a different symbol
            NoDataError: The series is empty
        """
        symbol = normalize_symbol(symbol)
        if normalize_symbol(series.symbol) != symbol:
            raise ValidationError(
                self.name,
                f"Series for {series.symbol} passed as {symbol}",
                {"symbol": symbol, "series_symbol": series.symbol},
            )
        latest = series.latest
        if latest is None:
            raise NoDataError(self.name, symbol)

        indicators = self._indicators.compute_indicators(series)
        volume_stats = self._volume_stats(series)
        outcome = score_indicators(latest.price, indicators, volume_stats, self._scoring)

        signals = outcome.signals
        min_points = self._indicators.config.min_points
        if len(series) < min_points:
            signals = [
                Signal(
                    direction=SignalDirection.NEUTRAL,
                    source="History",
                    message=(
                        f"Insufficient data: {len(series)} trading days available, "
                        f"at least {min_points} needed for any indicator"
                    ),
                    weight=0.0,
                )
            ] + signals

        return AnalysisResult(
            symbol=symbol,
            as_of=latest.date,
            price=latest.price,
            volume=latest.volume,
            score=outcome.score,
            recommendation=outcome.recommendation,
            signals=signals,
            indicators=indicators,
        )

    def _volume_stats(self, series: TimeSeries) -> VolumeStats:
        volumes = series.volumes
        prices = series.prices
        return VolumeStats(
            current_volume=volumes[-1] if volumes else 0.0,
            average_volume=latest_sma(volumes, self._volume_lookback),
            price_change=prices[-1] - prices[-2] if len(prices) >= 2 else None,
        )

    async def analyze_symbol(
        self, symbol: str, snapshots: Optional[list[DailySnapshot]] = None
    ) -> AnalysisResult:
        """Extract the symbol's series and analyze it."""
        if snapshots is None:
            snapshots = await self.source.get_history(symbol, self._history_limit)
        series = extract_series(snapshots, symbol)
        return self.analyze(symbol, series)

    # -------------------------------------------------------------------------
    # Batch
    # -------------------------------------------------------------------------

    async def execute(self, input_data: BatchAnalysisRequest) -> BatchAnalysisResult:
        """Analyze every requested symbol concurrently."""
        source = self.source
        latest = await source.get_latest()
        if latest is None:
            logger.warning("No snapshots available, nothing to analyze")
            return BatchAnalysisResult()

        if input_data.symbols:
            symbols = [normalize_symbol(s) for s in input_data.symbols]
        else:
            symbols = [normalize_symbol(s.symbol) for s in latest.stocks]
        symbols = list(dict.fromkeys(symbols))
        limit = input_data.history_limit or self._history_limit

        logger.info(f"Analyzing {len(symbols)} symbols active on {latest.date}")
        outcomes = await asyncio.gather(
            *(self._analyze_for_batch(source, symbol, limit) for symbol in symbols),
            return_exceptions=True,
        )

        result = BatchAnalysisResult(as_of=latest.date)
        for symbol, outcome in zip(symbols, outcomes):
            if isinstance(outcome, AnalysisResult):
                result.results.append(outcome)
            elif outcome is None:
                result.skipped.append(symbol)
            elif isinstance(outcome, NoDataError):
                logger.warning(f"{symbol}: {outcome.message}")
                result.errors.append(f"{symbol}: {outcome.message}")
            else:
                logger.error(f"Analysis failed for {symbol}: {outcome}")
                result.errors.append(f"{symbol}: {outcome}")

        logger.info(
            f"Batch complete: {len(result.results)} analyzed, "
            f"{len(result.skipped)} skipped, {len(result.errors)} failed"
        )
        return result

    async def _analyze_for_batch(
        self, source: SnapshotSource, symbol: str, limit: int
    ) -> Optional[AnalysisResult]:
        snapshots = await source.get_history(symbol, limit)
        series = extract_series(snapshots, symbol)
        if len(series) < self._min_history_days:
            logger.warning(
                f"Skipping {symbol}: only {len(series)} days of history, "
                f"need {self._min_history_days}"
            )
            return None
        return await asyncio.to_thread(self.analyze, symbol, series)

    async def health_check(self) -> bool:
        """Analysis service is always healthy (pure computation)."""
        return True


# Singleton instance
_service_instance: Optional[AnalysisService] = None


def get_analysis_service() -> AnalysisService:
    """Get or create analysis service instance."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AnalysisService()
    return _service_instance


def analyze(symbol: str, series: TimeSeries) -> AnalysisResult:
    """Score one symbol's series with the configured periods and thresholds."""
    return get_analysis_service().analyze(symbol, series)

"""
Analysis Service Interface

Defines the contract for the scoring / recommendation layer.
"""

from abc import abstractmethod
from typing import Optional

from nepse_analyzer.services.base import BaseService
from nepse_analyzer.schemas.analysis import (
    AnalysisResult,
    BatchAnalysisRequest,
    BatchAnalysisResult,
)
from nepse_analyzer.schemas.market import DailySnapshot, TimeSeries


class AnalysisServiceInterface(BaseService[BatchAnalysisRequest, BatchAnalysisResult]):
    """
    Analysis Service Contract.

    INPUT: BatchAnalysisRequest
        - symbols: Symbols to analyze (default: all active today)
        - history_limit: Trading days of history per symbol

    OUTPUT: BatchAnalysisResult
        - results: One AnalysisResult per analyzed symbol
        - skipped: Symbols without enough history
        - errors: Per-symbol failures (never abort the batch)
    """

    @property
    def name(self) -> str:
        return "AnalysisService"

    @abstractmethod
    async def execute(self, input_data: BatchAnalysisRequest) -> BatchAnalysisResult:
        """Analyze every requested symbol concurrently."""
        pass

    @abstractmethod
    def analyze(self, symbol: str, series: TimeSeries) -> AnalysisResult:
        """
        Score one symbol's series. Side-effect free.

        Raises:
            NoDataError: The series is empty
        """
        pass

    @abstractmethod
    async def analyze_symbol(
        self, symbol: str, snapshots: Optional[list[DailySnapshot]] = None
    ) -> AnalysisResult:
        """Extract the symbol's series (from the source when not given) and analyze it."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Analysis service is always healthy (pure computation)."""
        pass

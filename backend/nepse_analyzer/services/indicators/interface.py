"""
Indicator Engine Service Interface

Defines the contract for the indicator calculation layer.
"""

from abc import abstractmethod

from nepse_analyzer.services.base import BaseService
from nepse_analyzer.schemas.market import TimeSeries
from nepse_analyzer.schemas.indicators import IndicatorSet


class IndicatorServiceInterface(BaseService[TimeSeries, IndicatorSet]):
    """
    Indicator Engine Service Contract.

    INPUT: TimeSeries
        - points: ordered daily closes and volumes for one symbol

    OUTPUT: IndicatorSet
        - Latest RSI, EMA, SMA and MACD readings
        - Neutral defaults (listed in ``insufficient``) where history is short
    """

    @property
    def name(self) -> str:
        return "IndicatorService"

    @abstractmethod
    async def execute(self, input_data: TimeSeries) -> IndicatorSet:
        """Calculate indicators for one symbol's series."""
        pass

    @abstractmethod
    def compute_indicators(self, series: TimeSeries) -> IndicatorSet:
        """
        Calculate indicators synchronously.

        Args:
            series: Daily history for the symbol (may be short or empty)

        Returns:
            Indicator readings for the latest point
        """
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Indicator service is always healthy (pure computation)."""
        pass

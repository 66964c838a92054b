"""
Analysis Service

CONTRACT:
    Input:  TimeSeries (single symbol) or BatchAnalysisRequest (daily crunch)
    Output: AnalysisResult / BatchAnalysisResult

RESPONSIBILITIES:
    - Combine the latest indicator readings into a score centered at 50
    - Map the score onto STRONG BUY / BUY / HOLD / SELL / STRONG SELL
    - Explain every rule that fired as a Signal
    - Run the batch over all active symbols concurrently

Tier redaction (guest vs pro) lives in ``presentation`` and is applied by
the caller after the full result is computed.
"""

from nepse_analyzer.services.analysis.interface import AnalysisServiceInterface
from nepse_analyzer.services.analysis.presentation import present_analysis
from nepse_analyzer.services.analysis.scoring import (
    ScoreOutcome,
    ScoringConfig,
    recommend,
    score_indicators,
)
from nepse_analyzer.services.analysis.service import (
    AnalysisService,
    analyze,
    get_analysis_service,
)

__all__ = [
    "AnalysisServiceInterface",
    "AnalysisService",
    "analyze",
    "get_analysis_service",
    "present_analysis",
    "ScoreOutcome",
    "ScoringConfig",
    "recommend",
    "score_indicators",
]

"""
Analysis API Endpoints

Per-symbol verdicts and the daily batch run.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException

from nepse_analyzer.core.config import settings
from nepse_analyzer.schemas.analysis import (
    AnalysisView,
    BatchAnalysisRequest,
    BatchAnalysisResult,
)
from nepse_analyzer.schemas.indicators import IndicatorSet
from nepse_analyzer.services.base import NoDataError
from nepse_analyzer.services.analysis import get_analysis_service, present_analysis

logger = logging.getLogger(__name__)

router = APIRouter()


def is_pro_viewer(authorization: Optional[str] = Header(default=None)) -> bool:
    """
    Tier predicate: a bearer token from ``pro_access_tokens`` unlocks the
    full verdict. Anything else is treated as a guest, never an error.
    """
    if not authorization or not authorization.startswith("Bearer "):
        return False
    token = authorization.split(" ", 1)[1].strip()
    return token in settings.pro_access_tokens


@router.get("/{symbol}", response_model=AnalysisView)
async def get_analysis(symbol: str, is_pro: bool = Depends(is_pro_viewer)):
    """
    Get the verdict for a symbol.

    Returns price and RSI for everyone; score, recommendation, signals and
    the remaining indicators only for pro viewers.
    """
    service = get_analysis_service()
    try:
        result = await service.analyze_symbol(symbol)
    except NoDataError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Analysis failed for {symbol}: {e}")
        raise HTTPException(status_code=500, detail=f"Analysis failed for {symbol}")

    return present_analysis(result, can_view_full=is_pro)


@router.get("/{symbol}/indicators", response_model=IndicatorSet)
async def get_indicators(symbol: str, is_pro: bool = Depends(is_pro_viewer)):
    """Get the raw indicator readings (pro only)."""
    if not is_pro:
        raise HTTPException(status_code=403, detail="Login to view indicator details")

    service = get_analysis_service()
    try:
        result = await service.analyze_symbol(symbol)
    except NoDataError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except Exception as e:
        logger.error(f"Indicator lookup failed for {symbol}: {e}")
        raise HTTPException(status_code=500, detail=f"Analysis failed for {symbol}")

    return result.indicators


@router.post("/batch", response_model=BatchAnalysisResult)
async def run_batch(request: BatchAnalysisRequest):
    """
    Analyze all active symbols (or the given list).

    Symbols with less than ``min_history_days`` of history are skipped.
    """
    service = get_analysis_service()
    return await service.execute(request)

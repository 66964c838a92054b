"""
Series Extractor

Projects raw daily snapshots (many symbols per day) into a clean,
chronologically ordered TimeSeries for one symbol.
"""

import logging
import math
from datetime import date
from typing import Any, Iterable, Optional

from nepse_analyzer.schemas.market import DailySnapshot, PricePoint, TimeSeries
from nepse_analyzer.services.base import NoDataError

logger = logging.getLogger(__name__)

SERVICE_NAME = "SeriesExtractor"


def parse_number(value: Any) -> Optional[float]:
    """
    Parse a scraped numeric value.

    Accepts numbers and strings with thousands separators ("1,234.50").
    Returns None for missing, empty, non-numeric and non-finite values.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        num = float(value)
    else:
        text = str(value).strip().replace(",", "")
        if not text:
            return None
        try:
            num = float(text)
        except ValueError:
            return None
    if not math.isfinite(num):
        return None
    return num


def normalize_symbol(symbol: str) -> str:
    return symbol.strip().upper()


def extract_series(snapshots: Iterable[DailySnapshot], symbol: str) -> TimeSeries:
    """
    Build the TimeSeries for ``symbol``.

    Days without the symbol, or without a positive parseable price, are
    skipped. Volume is coerced to 0 when missing or malformed. Snapshots may
    be in any order; a repeated date keeps the last snapshot seen.

    Raises:
        NoDataError: No day yields a usable price
    """
    target = normalize_symbol(symbol)
    by_date: dict[date, PricePoint] = {}

    for snapshot in snapshots:
        observation = snapshot.find(target)
        if observation is None:
            continue

        price = parse_number(observation.price)
        if price is None or price <= 0:
            logger.debug(
                f"{target} {snapshot.date}: unusable price {observation.price!r}, skipping day"
            )
            continue

        volume = parse_number(observation.volume)
        if volume is None or volume < 0:
            if observation.volume is not None:
                logger.debug(
                    f"{target} {snapshot.date}: malformed volume {observation.volume!r}, using 0"
                )
            volume = 0.0

        by_date[snapshot.date] = PricePoint(
            date=snapshot.date, price=price, volume=volume
        )

    if not by_date:
        raise NoDataError(SERVICE_NAME, target)

    points = tuple(by_date[d] for d in sorted(by_date))
    return TimeSeries(symbol=target, points=points)

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

import numpy as np
import pandas as pd
import polars as pl

from api.app.compute.timeseries import NORMALIZED_BASE, Series, as_date, frame_to_series

logger = logging.getLogger(__name__)

DEFAULT_LOOKBACK_YEARS = 5

# Daily percent change = (u - bias) * scale with u ~ U[0, 1).
# The portfolio leg is more volatile than the benchmark; both drift slightly up.
PORTFOLIO_DRIFT = (0.48, 2.0)
BENCHMARK_DRIFT = (0.49, 1.5)


def business_days(start: date, end: date) -> list[date]:
    """Weekdays in [start, end], one fresh date object per step."""
    if start > end:
        return []
    return [ts.date() for ts in pd.bdate_range(start=start, end=end)]


def _index_path(uniform: np.ndarray, bias: float, scale: float) -> np.ndarray:
    factors = 1.0 + (uniform - bias) * scale / 100.0
    # Day 0 is the base; the walk starts on day 1.
    factors[0] = 1.0
    return NORMALIZED_BASE * np.cumprod(factors)


def generate_mock_series(
    end: date | datetime,
    lookback_years: int = DEFAULT_LOOKBACK_YEARS,
    seed: Optional[int] = None,
) -> Series:
    """
    Generate a normalized daily portfolio/benchmark history ending at ``end``.

    One point per weekday from ``end - lookback_years`` to ``end`` inclusive.
    Both legs start at exactly 100.0 and then follow independent random walks
    drawn from a numpy generator seeded with ``seed`` (``None`` -> fresh entropy).
    """
    if lookback_years <= 0:
        raise ValueError("lookback_years must be positive")

    end_day = as_date(end)
    start_day = (pd.Timestamp(end_day) - pd.DateOffset(years=lookback_years)).date()
    days = business_days(start_day, end_day)
    if not days:
        return ()

    rng = np.random.default_rng(seed)
    uniform = rng.random((len(days), 2))
    portfolio = _index_path(uniform[:, 0], *PORTFOLIO_DRIFT)
    benchmark = _index_path(uniform[:, 1], *BENCHMARK_DRIFT)

    logger.info(
        "Generated mock series: %d business days %s..%s (seed=%s)",
        len(days),
        days[0].isoformat(),
        days[-1].isoformat(),
        seed,
    )
    frame = pl.DataFrame(
        {"date": days, "portfolio": portfolio, "benchmark": benchmark},
        schema={"date": pl.Date, "portfolio": pl.Float64, "benchmark": pl.Float64},
    )
    return frame_to_series(frame)


__all__ = ["DEFAULT_LOOKBACK_YEARS", "business_days", "generate_mock_series"]

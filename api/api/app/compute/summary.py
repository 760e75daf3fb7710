from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from api.app.compute.timeseries import NORMALIZED_BASE, TimePoint
from api.app.errors import EmptySeriesError


@dataclass(frozen=True)
class SummaryResult:
    portfolio_return_pct: float
    benchmark_return_pct: float
    difference_pct: float


def summarize(aggregated: Sequence[TimePoint]) -> SummaryResult:
    """
    Headline returns from the last displayed point.

    Both legs start at 100.0, so the offset from 100 is the cumulative percent
    return since the start of the series.
    """
    if not aggregated:
        raise EmptySeriesError("Cannot summarize an empty series")

    last = aggregated[-1]
    portfolio_pct = last.portfolio_value - NORMALIZED_BASE
    benchmark_pct = last.benchmark_value - NORMALIZED_BASE
    return SummaryResult(
        portfolio_return_pct=portfolio_pct,
        benchmark_return_pct=benchmark_pct,
        difference_pct=portfolio_pct - benchmark_pct,
    )


__all__ = ["SummaryResult", "summarize"]

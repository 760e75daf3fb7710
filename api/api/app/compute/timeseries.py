"""Core value types for the performance series.

A ``Series`` is a tuple of :class:`TimePoint` ordered by date. Both legs are
normalized indices: the first point is 100.0 for the portfolio and for the
benchmark, so ``value - 100`` reads directly as cumulative percent return.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Iterable, Sequence, Tuple

import polars as pl

from api.app.errors import InvalidSeriesError, InvalidWindowError

NORMALIZED_BASE = 100.0


@dataclass(frozen=True)
class TimePoint:
    date: date
    portfolio_value: float
    benchmark_value: float


Series = Tuple[TimePoint, ...]


class Granularity(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"

    @classmethod
    def parse(cls, value: "Granularity | str") -> "Granularity":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unsupported granularity: {value!r}") from None


class ViewingWindow(str, Enum):
    ONE_MONTH = "1M"
    THREE_MONTHS = "3M"
    SIX_MONTHS = "6M"
    ONE_YEAR = "1Y"
    FIVE_YEARS = "5Y"
    ALL = "ALL"

    @classmethod
    def parse(cls, value: "ViewingWindow | str") -> "ViewingWindow":
        """Coerce a label such as ``"1y"`` into a window, raising InvalidWindowError."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise InvalidWindowError(value)
        try:
            return cls(value.strip().upper())
        except ValueError:
            raise InvalidWindowError(value) from None


def as_date(value: date | datetime) -> date:
    """Truncate datetimes to their calendar date; dates pass through."""
    if isinstance(value, datetime):
        return value.date()
    return value


def validate_series(points: Sequence[TimePoint]) -> None:
    """
    Check the base-series invariants and raise InvalidSeriesError on the first violation.

    - dates strictly increasing (no duplicates)
    - weekdays only
    - both legs equal to NORMALIZED_BASE at index 0
    An empty series is valid.
    """
    if not points:
        return

    first = points[0]
    if first.portfolio_value != NORMALIZED_BASE or first.benchmark_value != NORMALIZED_BASE:
        raise InvalidSeriesError(
            f"Series must start at {NORMALIZED_BASE} for both legs, got "
            f"portfolio={first.portfolio_value} benchmark={first.benchmark_value}"
        )

    previous = None
    for idx, point in enumerate(points):
        if point.date.weekday() >= 5:
            raise InvalidSeriesError(f"Point {idx} falls on a weekend: {point.date.isoformat()}")
        if previous is not None and point.date <= previous:
            raise InvalidSeriesError(
                f"Dates must be strictly increasing: {point.date.isoformat()} at index {idx} "
                f"follows {previous.isoformat()}"
            )
        previous = point.date


def series_to_frame(points: Iterable[TimePoint]) -> pl.DataFrame:
    points = list(points)
    return pl.DataFrame(
        {
            "date": [p.date for p in points],
            "portfolio": [p.portfolio_value for p in points],
            "benchmark": [p.benchmark_value for p in points],
        },
        schema={"date": pl.Date, "portfolio": pl.Float64, "benchmark": pl.Float64},
    )


def frame_to_series(frame: pl.DataFrame) -> Series:
    frame = frame.sort("date")
    return tuple(
        TimePoint(
            date=as_date(row["date"]),
            portfolio_value=float(row["portfolio"]),
            benchmark_value=float(row["benchmark"]),
        )
        for row in frame.iter_rows(named=True)
    )


__all__ = [
    "NORMALIZED_BASE",
    "Granularity",
    "Series",
    "TimePoint",
    "ViewingWindow",
    "as_date",
    "frame_to_series",
    "series_to_frame",
    "validate_series",
]

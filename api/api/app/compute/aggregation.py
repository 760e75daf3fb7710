from __future__ import annotations

from datetime import date, timedelta
from typing import Hashable, Sequence

from api.app.compute.timeseries import Granularity, TimePoint


def period_key(day: date, granularity: Granularity | str) -> Hashable:
    """
    Bucket identifier for ``day``.

    weekly  -> the Monday starting that week (Sunday belongs to the week
               that started six days earlier)
    monthly -> (year, month)
    daily   -> the date itself
    """
    granularity = Granularity.parse(granularity)
    if granularity is Granularity.WEEKLY:
        return day - timedelta(days=day.weekday())
    if granularity is Granularity.MONTHLY:
        return (day.year, day.month)
    return day


def aggregate(points: Sequence[TimePoint], granularity: Granularity | str) -> Sequence[TimePoint]:
    """Resample a daily series to period closes (last point per bucket)."""

    granularity = Granularity.parse(granularity)
    if granularity is Granularity.DAILY:
        return points

    aggregated: list[TimePoint] = []
    current_key: Hashable = None
    closing: TimePoint | None = None

    # Input is date-ascending, so a key change marks the end of a bucket and
    # the last point seen in it is the period close.
    for point in points:
        key = period_key(point.date, granularity)
        if closing is not None and key != current_key:
            aggregated.append(closing)
        current_key = key
        closing = point

    if closing is not None:
        aggregated.append(closing)

    return tuple(aggregated)


__all__ = ["aggregate", "period_key"]

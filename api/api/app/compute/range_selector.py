from __future__ import annotations

from bisect import bisect_left
from dataclasses import dataclass
from datetime import date, datetime
from typing import NamedTuple, Sequence

import pandas as pd

from api.app.compute.timeseries import Granularity, Series, TimePoint, ViewingWindow, as_date


@dataclass(frozen=True)
class WindowPolicy:
    window: ViewingWindow
    months: int
    granularity: Granularity

    @property
    def offset(self) -> pd.DateOffset:
        if self.months % 12 == 0:
            return pd.DateOffset(years=self.months // 12)
        return pd.DateOffset(months=self.months)

    @property
    def label(self) -> str:
        if self.months % 12 == 0:
            years = self.months // 12
            return f"{years} year" if years == 1 else f"{years} years"
        return f"{self.months} month" if self.months == 1 else f"{self.months} months"


# Coarser windows get coarser sampling to bound the number of rendered points.
# ALL looks back as far as the generated history (5 years).
WINDOW_POLICY: dict[ViewingWindow, WindowPolicy] = {
    ViewingWindow.ONE_MONTH: WindowPolicy(ViewingWindow.ONE_MONTH, 1, Granularity.DAILY),
    ViewingWindow.THREE_MONTHS: WindowPolicy(ViewingWindow.THREE_MONTHS, 3, Granularity.DAILY),
    ViewingWindow.SIX_MONTHS: WindowPolicy(ViewingWindow.SIX_MONTHS, 6, Granularity.WEEKLY),
    ViewingWindow.ONE_YEAR: WindowPolicy(ViewingWindow.ONE_YEAR, 12, Granularity.WEEKLY),
    ViewingWindow.FIVE_YEARS: WindowPolicy(ViewingWindow.FIVE_YEARS, 60, Granularity.MONTHLY),
    ViewingWindow.ALL: WindowPolicy(ViewingWindow.ALL, 60, Granularity.MONTHLY),
}


class RangeSelection(NamedTuple):
    points: Series
    granularity: Granularity


def window_policies() -> list[WindowPolicy]:
    """Return the window table in display order (1M first, ALL last)."""
    return [WINDOW_POLICY[w] for w in ViewingWindow]


def aggregation_for(window: ViewingWindow | str) -> Granularity:
    return WINDOW_POLICY[ViewingWindow.parse(window)].granularity


def cutoff_for(window: ViewingWindow | str, now: date | datetime) -> date:
    """
    Earliest date kept for ``window`` as of ``now``.

    Month/year offsets use calendar arithmetic and clamp to the last valid
    day of the target month (2024-03-31 minus one month is 2024-02-29).
    """
    policy = WINDOW_POLICY[ViewingWindow.parse(window)]
    return (pd.Timestamp(as_date(now)) - policy.offset).date()


def _first_index_on_or_after(points: Sequence[TimePoint], cutoff: date) -> int:
    # Dates are ascending, so the boundary is monotonic.
    return bisect_left(points, cutoff, key=lambda p: p.date)


def select_range(
    base: Sequence[TimePoint],
    window: ViewingWindow | str,
    now: date | datetime,
) -> RangeSelection:
    """
    Slice ``base`` to the points on/after the window cutoff and pair it with
    the window's granularity.

    If every point is older than the cutoff the whole series is returned
    rather than an empty slice.
    """
    window = ViewingWindow.parse(window)
    granularity = WINDOW_POLICY[window].granularity
    cutoff = cutoff_for(window, now)

    start = _first_index_on_or_after(base, cutoff)
    if start >= len(base):
        return RangeSelection(tuple(base), granularity)
    return RangeSelection(tuple(base[start:]), granularity)


def is_fallback(base: Sequence[TimePoint], window: ViewingWindow | str, now: date | datetime) -> bool:
    """True when select_range would fall back to the full series."""
    if not base:
        return True
    return base[-1].date < cutoff_for(window, now)


__all__ = [
    "RangeSelection",
    "WINDOW_POLICY",
    "WindowPolicy",
    "aggregation_for",
    "cutoff_for",
    "is_fallback",
    "select_range",
    "window_policies",
]

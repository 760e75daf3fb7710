"""Range selection, period aggregation and summary math for the performance chart."""

from api.app.compute.aggregation import aggregate, period_key
from api.app.compute.range_selector import (
    RangeSelection,
    WindowPolicy,
    aggregation_for,
    cutoff_for,
    is_fallback,
    select_range,
    window_policies,
)
from api.app.compute.summary import SummaryResult, summarize
from api.app.compute.timeseries import (
    NORMALIZED_BASE,
    Granularity,
    Series,
    TimePoint,
    ViewingWindow,
    frame_to_series,
    series_to_frame,
    validate_series,
)

__all__ = [
    "NORMALIZED_BASE",
    "Granularity",
    "RangeSelection",
    "Series",
    "SummaryResult",
    "TimePoint",
    "ViewingWindow",
    "WindowPolicy",
    "aggregate",
    "aggregation_for",
    "cutoff_for",
    "frame_to_series",
    "is_fallback",
    "period_key",
    "select_range",
    "series_to_frame",
    "summarize",
    "validate_series",
    "window_policies",
]

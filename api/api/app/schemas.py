from __future__ import annotations

import datetime as dt
from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from api.app.compute.timeseries import Granularity, ViewingWindow


class SeriesPoint(BaseModel):
    date: dt.date
    portfolio: float
    benchmark: float


class WindowInfo(BaseModel):
    window: ViewingWindow
    granularity: Granularity
    lookback: str
    lookback_months: int


class PerformanceResponse(BaseModel):
    """Aggregated chart series for one viewing window.

    - `cutoff` is the earliest date the window asks for.
    - `fallback` is true when no point reached the cutoff and the whole
      history is shown instead.
    """

    window: ViewingWindow
    granularity: Granularity
    as_of: date
    cutoff: date
    fallback: bool = False
    raw_count: int = 0
    aggregated_count: int = 0
    points: List[SeriesPoint] = Field(default_factory=list)


class SummaryResponse(BaseModel):
    window: ViewingWindow
    as_of: date
    portfolio_return_pct: float
    benchmark_return_pct: float
    difference_pct: float


class HoldingRow(BaseModel):
    ticker: str
    date_added: date
    amount_invested: float
    purchase_price: float
    shares: float
    current_price: float
    current_value: float
    gain_loss: float
    return_percent: float


class SeriesMeta(BaseModel):
    data_version: int
    seed: Optional[int] = None
    lookback_years: int
    point_count: int
    date_min: Optional[date] = None
    date_max: Optional[date] = None
    generated_at: datetime

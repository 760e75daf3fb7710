from __future__ import annotations

import logging
from datetime import date, datetime, timezone
from typing import Callable, Optional, Sequence
from uuid import uuid4

from api.app.compute.aggregation import aggregate
from api.app.compute.range_selector import cutoff_for, is_fallback, select_range, window_policies
from api.app.compute.summary import summarize
from api.app.compute.timeseries import Series, TimePoint, ViewingWindow, series_to_frame, validate_series
from api.app.config import DEFAULT_CACHE_TTL_SECONDS, get_server_settings
from api.app.data.generator import DEFAULT_LOOKBACK_YEARS, generate_mock_series
from api.app.data.holdings import default_holdings
from api.app.schemas import (
    HoldingRow,
    PerformanceResponse,
    SeriesMeta,
    SeriesPoint,
    SummaryResponse,
    WindowInfo,
)
from api.app.services.cache import CacheBackend, build_window_key, get_cache_backend

logger = logging.getLogger(__name__)

_KEEP_SEED = object()


def _to_points(points: Sequence[TimePoint]) -> list[SeriesPoint]:
    return [
        SeriesPoint(date=p.date, portfolio=p.portfolio_value, benchmark=p.benchmark_value)
        for p in points
    ]


def _from_points(points: Sequence[SeriesPoint]) -> Series:
    return tuple(
        TimePoint(date=p.date, portfolio_value=p.portfolio, benchmark_value=p.benchmark)
        for p in points
    )


class DashboardStore:
    """Owns the base series for the process and runs the window pipeline on demand.

    The base series is generated lazily on first use and only replaced by an
    explicit :meth:`refresh` or :meth:`load`. Every replacement bumps
    ``data_version`` and draws a fresh ``series_token``; cache keys carry the
    token, so a backend shared between processes never serves a payload built
    from a different series.
    """

    def __init__(
        self,
        seed: Optional[int] = None,
        lookback_years: int = DEFAULT_LOOKBACK_YEARS,
        cache: CacheBackend | None = None,
        cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        clock: Callable[[], date] | None = None,
    ) -> None:
        self.seed = seed
        self.lookback_years = lookback_years
        self.cache_ttl_seconds = cache_ttl_seconds
        self._clock = clock or date.today
        self._cache = cache if cache is not None else get_cache_backend()
        self._series: Series | None = None
        self._generated_at: datetime | None = None
        self.data_version = 0
        self.series_token: str | None = None

    @classmethod
    def from_env(cls) -> "DashboardStore":
        settings = get_server_settings()
        return cls(
            seed=settings.seed,
            lookback_years=settings.lookback_years,
            cache_ttl_seconds=settings.cache_ttl_seconds,
        )

    # ---------------- base series ----------------
    def today(self) -> date:
        return self._clock()

    @property
    def base_series(self) -> Series:
        if self._series is None:
            self._install(generate_mock_series(self.today(), self.lookback_years, seed=self.seed))
        return self._series  # type: ignore[return-value]

    def _install(self, series: Series) -> None:
        validate_series(series)
        self._series = series
        self._generated_at = datetime.now(timezone.utc)
        self.data_version += 1
        self.series_token = uuid4().hex
        logger.info("Installed base series v%s (%d points)", self.data_version, len(series))

    def refresh(self, seed: Optional[int] | object = _KEEP_SEED) -> SeriesMeta:
        """Regenerate the base series, optionally with a new seed."""
        if seed is not _KEEP_SEED:
            self.seed = seed  # type: ignore[assignment]
        self._install(generate_mock_series(self.today(), self.lookback_years, seed=self.seed))
        return self.series_meta()

    def load(self, series: Sequence[TimePoint]) -> SeriesMeta:
        """Replace the base series with a prebuilt one (validated first)."""
        self._install(tuple(series))
        return self.series_meta()

    def series_meta(self) -> SeriesMeta:
        series = self.base_series
        return SeriesMeta(
            data_version=self.data_version,
            seed=self.seed,
            lookback_years=self.lookback_years,
            point_count=len(series),
            date_min=series[0].date if series else None,
            date_max=series[-1].date if series else None,
            generated_at=self._generated_at or datetime.now(timezone.utc),
        )

    # ---------------- window pipeline ----------------
    def windows(self) -> list[WindowInfo]:
        return [
            WindowInfo(
                window=policy.window,
                granularity=policy.granularity,
                lookback=policy.label,
                lookback_months=policy.months,
            )
            for policy in window_policies()
        ]

    def performance(self, window: ViewingWindow | str, as_of: date | None = None) -> PerformanceResponse:
        window = ViewingWindow.parse(window)
        as_of = as_of or self.today()
        base = self.base_series

        cache_key = build_window_key(window.value, as_of, self.series_token, "performance")
        cached = self._cache.get(cache_key)
        if cached is not None:
            try:
                response = PerformanceResponse.model_validate_json(cached)
                logger.debug("Performance cache hit for %s", cache_key)
                return response
            except ValueError:
                logger.warning("Discarding unreadable cache entry %s", cache_key, exc_info=True)
                self._cache.delete(cache_key)

        selection = select_range(base, window, as_of)
        aggregated = aggregate(selection.points, selection.granularity)
        logger.debug(
            "Pipeline %s as of %s: %d -> %d points (%s)",
            window.value,
            as_of.isoformat(),
            len(selection.points),
            len(aggregated),
            selection.granularity.value,
        )

        response = PerformanceResponse(
            window=window,
            granularity=selection.granularity,
            as_of=as_of,
            cutoff=cutoff_for(window, as_of),
            fallback=is_fallback(base, window, as_of),
            raw_count=len(selection.points),
            aggregated_count=len(aggregated),
            points=_to_points(aggregated),
        )
        self._cache.set(cache_key, response.model_dump_json().encode("utf-8"), self.cache_ttl_seconds)
        return response

    def aggregated_series(self, window: ViewingWindow | str, as_of: date | None = None) -> Series:
        return _from_points(self.performance(window, as_of).points)

    def summary(self, window: ViewingWindow | str, as_of: date | None = None) -> SummaryResponse:
        performance = self.performance(window, as_of)
        result = summarize(_from_points(performance.points))
        return SummaryResponse(
            window=performance.window,
            as_of=performance.as_of,
            portfolio_return_pct=result.portfolio_return_pct,
            benchmark_return_pct=result.benchmark_return_pct,
            difference_pct=result.difference_pct,
        )

    def export_csv(self, window: ViewingWindow | str, as_of: date | None = None) -> tuple[str, str]:
        performance = self.performance(window, as_of)
        frame = series_to_frame(_from_points(performance.points))
        filename = f"performance_{performance.window.value}_{performance.as_of.isoformat()}.csv"
        return filename, frame.write_csv()

    # ---------------- holdings ----------------
    def holdings(self) -> list[HoldingRow]:
        return [
            HoldingRow(
                ticker=h.ticker,
                date_added=h.date_added,
                amount_invested=h.amount_invested,
                purchase_price=h.purchase_price,
                shares=h.shares,
                current_price=h.current_price,
                current_value=h.current_value,
                gain_loss=h.gain_loss,
                return_percent=h.return_percent,
            )
            for h in default_holdings()
        ]


store = DashboardStore.from_env()


def get_store() -> DashboardStore:
    return store


__all__ = ["DashboardStore", "get_store", "store"]

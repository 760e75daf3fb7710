from __future__ import annotations

from datetime import date, timedelta

import pytest

from api.app.compute.timeseries import TimePoint
from api.app.errors import EmptySeriesError, InvalidSeriesError, InvalidWindowError
from api.app.services.cache import InMemoryCache, build_window_key
from api.app.services.dashboard_store import DashboardStore
from tests.series_harness import linear_series

TODAY = date(2024, 1, 2)


def _store(series=None) -> DashboardStore:
    store = DashboardStore(seed=11, lookback_years=1, cache=InMemoryCache(), clock=lambda: TODAY)
    if series is not None:
        store.load(series)
    return store


def test_base_series_generated_lazily_once() -> None:
    store = _store()
    assert store.data_version == 0

    first = store.base_series
    assert store.data_version == 1
    assert store.base_series is first
    assert first[-1].date == TODAY


def test_performance_runs_window_pipeline() -> None:
    store = _store(linear_series(date(2023, 1, 2), date(2024, 1, 1)))
    response = store.performance("1y")

    assert response.window.value == "1Y"
    assert response.granularity.value == "weekly"
    assert response.as_of == TODAY
    assert response.cutoff == date(2023, 1, 2)
    assert response.fallback is False
    assert response.raw_count == 261
    assert response.aggregated_count == len(response.points) == 53


def test_performance_is_memoized_per_installed_series() -> None:
    cache = InMemoryCache()
    store = DashboardStore(cache=cache, clock=lambda: TODAY)
    store.load(linear_series(date(2023, 1, 2), date(2024, 1, 1)))

    first = store.performance("6M")
    key = build_window_key("6M", TODAY, store.series_token, "performance")
    assert cache.get(key) is not None
    assert store.performance("6M") == first

    store.load(linear_series(date(2023, 1, 2), date(2024, 1, 1), portfolio_end=90.0))
    assert store.performance("6M").points[-1].portfolio == pytest.approx(90.0)


def test_stores_sharing_a_cache_never_serve_each_others_series() -> None:
    cache = InMemoryCache()
    a = DashboardStore(seed=1, lookback_years=1, cache=cache, clock=lambda: TODAY)
    b = DashboardStore(seed=2, lookback_years=1, cache=cache, clock=lambda: TODAY)

    served_a = a.performance("1Y")
    served_b = b.performance("1Y")

    assert a.data_version == b.data_version == 1
    assert a.series_token != b.series_token
    assert served_a.points[-1].portfolio == pytest.approx(a.base_series[-1].portfolio_value)
    assert served_b.points[-1].portfolio == pytest.approx(b.base_series[-1].portfolio_value)
    assert b.summary("1Y").portfolio_return_pct == pytest.approx(b.base_series[-1].portfolio_value - 100.0)


def test_unreadable_cache_entry_is_recomputed() -> None:
    cache = InMemoryCache()
    store = DashboardStore(cache=cache, clock=lambda: TODAY)
    store.load(linear_series(date(2023, 1, 2), date(2024, 1, 1)))
    cache.set(build_window_key("1M", TODAY, store.series_token, "performance"), b"not json")

    assert store.performance("1M").aggregated_count == 21


def test_fallback_flag_when_history_is_older_than_window() -> None:
    store = _store(linear_series(date(2020, 1, 6), date(2020, 6, 30)))
    response = store.performance("1M")

    assert response.fallback is True
    assert response.points[0].date == date(2020, 1, 6)


def test_summary_uses_last_aggregated_point() -> None:
    store = _store(linear_series(date(2023, 1, 2), date(2024, 1, 1)))
    summary = store.summary("ALL")

    assert summary.portfolio_return_pct == pytest.approx(20.0)
    assert summary.benchmark_return_pct == pytest.approx(10.0)
    assert summary.difference_pct == pytest.approx(10.0)


def test_summary_of_empty_series_raises() -> None:
    store = _store(())
    assert store.performance("1Y").points == []
    with pytest.raises(EmptySeriesError):
        store.summary("1Y")


def test_invalid_window_raises() -> None:
    with pytest.raises(InvalidWindowError):
        _store(()).performance("2W")


def test_load_rejects_invalid_series() -> None:
    store = _store()
    bad = (TimePoint(date(2024, 1, 2), 99.0, 100.0),)
    with pytest.raises(InvalidSeriesError):
        store.load(bad)


def test_refresh_bumps_data_version_and_can_change_seed() -> None:
    store = _store()
    before = store.base_series
    meta = store.refresh(seed=12)

    assert meta.data_version == 2
    assert meta.seed == 12
    assert store.base_series != before

    assert store.refresh().seed == 12


def test_series_meta() -> None:
    store = _store(linear_series(date(2023, 1, 2), date(2024, 1, 1)))
    meta = store.series_meta()

    assert meta.point_count == 261
    assert meta.date_min == date(2023, 1, 2)
    assert meta.date_max == date(2024, 1, 1)
    assert meta.generated_at.tzinfo is not None


def test_export_csv() -> None:
    store = _store(linear_series(date(2023, 1, 2), date(2024, 1, 1)))
    filename, body = store.export_csv("ALL")

    lines = body.strip().splitlines()
    assert filename == "performance_ALL_2024-01-02.csv"
    assert lines[0] == "date,portfolio,benchmark"
    assert len(lines) == 1 + 13
    last_day, portfolio, _ = lines[-1].split(",")
    assert last_day == "2024-01-01"
    assert float(portfolio) == pytest.approx(120.0)


def test_windows_table() -> None:
    windows = _store().windows()
    assert [w.window.value for w in windows] == ["1M", "3M", "6M", "1Y", "5Y", "ALL"]
    assert windows[3].lookback == "1 year"
    assert windows[-1].lookback_months == 60


def test_holdings() -> None:
    rows = _store().holdings()
    assert [r.ticker for r in rows] == ["NVDA", "TSLA", "PLTR"]
    assert rows[0].return_percent == pytest.approx(76.74)


def test_in_memory_cache_expires() -> None:
    clock = {"now": 1000.0}
    cache = InMemoryCache(clock=lambda: clock["now"])
    cache.set("k", b"v", ttl_seconds=10)
    cache.set("forever", b"v")
    assert cache.get("k") == b"v"

    clock["now"] = 1011.0
    assert cache.get("k") is None
    assert cache.get("forever") == b"v"

    cache.delete("forever")
    assert cache.get("forever") is None


def test_in_memory_cache_sweeps_expired_entries_on_write() -> None:
    clock = {"now": 0.0}
    cache = InMemoryCache(clock=lambda: clock["now"])
    store = DashboardStore(cache=cache, cache_ttl_seconds=1, clock=lambda: TODAY)
    store.load(linear_series(date(2023, 1, 2), date(2024, 1, 1)))

    for offset in range(50):
        store.performance("1M", as_of=date(2023, 6, 1) + timedelta(days=offset))
    for _ in range(5):
        store.load(linear_series(date(2023, 1, 2), date(2024, 1, 1)))
        store.performance("1M")
    assert len(cache.store) == 55

    clock["now"] = 10_000.0
    store.performance("1M")
    assert len(cache.store) == 1


def test_in_memory_cache_evicts_least_recently_used() -> None:
    cache = InMemoryCache(max_entries=2)
    cache.set("a", b"1")
    cache.set("b", b"2")
    assert cache.get("a") == b"1"

    cache.set("c", b"3")
    assert cache.get("b") is None
    assert cache.get("a") == b"1"
    assert cache.get("c") == b"3"
    assert len(cache.store) == 2

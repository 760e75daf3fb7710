from __future__ import annotations

from datetime import date

import pytest

from api.app.compute.timeseries import validate_series
from api.app.data.generator import business_days, generate_mock_series

END = date(2024, 1, 2)


def test_same_seed_same_series() -> None:
    assert generate_mock_series(END, seed=42) == generate_mock_series(END, seed=42)
    assert generate_mock_series(END, seed=42) != generate_mock_series(END, seed=43)


def test_series_satisfies_invariants() -> None:
    series = generate_mock_series(END, seed=1)
    validate_series(series)

    assert series[0].portfolio_value == 100.0
    assert series[0].benchmark_value == 100.0
    assert series[0].date == date(2019, 1, 2)
    assert series[-1].date == END


def test_five_year_horizon_is_about_1300_business_days() -> None:
    series = generate_mock_series(END, seed=1)
    assert 1300 <= len(series) <= 1310


def test_weekend_end_date_stops_on_friday() -> None:
    series = generate_mock_series(date(2024, 1, 7), lookback_years=1, seed=5)
    assert series[-1].date == date(2024, 1, 5)


def test_daily_moves_stay_within_drift_bounds() -> None:
    series = generate_mock_series(END, lookback_years=1, seed=9)
    for prev, cur in zip(series, series[1:]):
        portfolio_move = cur.portfolio_value / prev.portfolio_value - 1.0
        benchmark_move = cur.benchmark_value / prev.benchmark_value - 1.0
        assert -0.0096 - 1e-12 <= portfolio_move <= 0.0104 + 1e-12
        assert -0.00735 - 1e-12 <= benchmark_move <= 0.00765 + 1e-12


def test_business_days() -> None:
    days = business_days(date(2024, 3, 8), date(2024, 3, 12))
    assert days == [date(2024, 3, 8), date(2024, 3, 11), date(2024, 3, 12)]
    assert business_days(date(2024, 3, 12), date(2024, 3, 8)) == []


def test_lookback_must_be_positive() -> None:
    with pytest.raises(ValueError):
        generate_mock_series(END, lookback_years=0)


def test_points_carry_plain_dates_and_floats() -> None:
    point = generate_mock_series(END, lookback_years=1, seed=3)[-1]
    assert type(point.date) is date
    assert type(point.portfolio_value) is float
    assert type(point.benchmark_value) is float

"""Tests for the linear usage forecaster."""
from datetime import date, datetime, timedelta, timezone

import pytest

from energy_tracker.core.errors import ComputationError
from energy_tracker.models.usage import UsageEntry
from energy_tracker.services.usage_forecaster import (
    fit_linear_trend,
    forecast_usage,
    recent_window,
)

TODAY = date(2024, 6, 10)


def _series(usages, start=date(2024, 5, 1)):
    return [
        UsageEntry(user_id="u1", date=start + timedelta(days=i), usage=float(u))
        for i, u in enumerate(usages)
    ]


def test_fewer_than_seven_entries_returns_null_prediction():
    result = forecast_usage(_series([1, 2, 3, 4, 5, 6]), today=TODAY)
    assert result["predictions"] is None
    assert result["message"] == "Need at least 7 days of data for prediction"


def test_no_entries_returns_null_prediction():
    assert forecast_usage([], today=TODAY)["predictions"] is None


def test_perfect_line_slope_and_intercept():
    slope, intercept = fit_linear_trend([1, 2, 3, 4, 5, 6, 7])
    assert slope == 1
    assert intercept == 1


def test_seven_increasing_entries_day_one_is_eight():
    result = forecast_usage(_series([1, 2, 3, 4, 5, 6, 7]), today=TODAY)
    predictions = result["predictions"]
    assert len(predictions) == 7
    assert predictions[0] == {"date": "2024-06-11", "predictedUsage": 8.0}
    assert [p["predictedUsage"] for p in predictions] == [8, 9, 10, 11, 12, 13, 14]
    assert predictions[-1]["date"] == "2024-06-17"
    assert result["dataPoints"] == 7
    assert result["trend"] == "increasing"


def test_horizon_anchored_to_today_not_last_entry():
    result = forecast_usage(_series([5] * 7, start=date(2023, 1, 1)), today=TODAY)
    assert result["predictions"][0]["date"] == "2024-06-11"
    assert all(p["predictedUsage"] == 5 for p in result["predictions"])
    assert result["trend"] == "stable"


def test_negative_projection_clamped_to_zero():
    result = forecast_usage(_series([70, 60, 50, 40, 30, 20, 10]), today=TODAY)
    values = [p["predictedUsage"] for p in result["predictions"]]
    assert values[0] == 0
    assert all(v >= 0 for v in values)
    assert result["trend"] == "decreasing"


def test_only_last_thirty_entries_used():
    # 10 old outliers followed by 30 flat readings
    result = forecast_usage(_series([1000] * 10 + [4] * 30), today=TODAY)
    assert result["dataPoints"] == 30
    assert all(p["predictedUsage"] == 4 for p in result["predictions"])


def test_entries_sorted_by_date_before_fitting():
    entries = list(reversed(_series([1, 2, 3, 4, 5, 6, 7])))
    result = forecast_usage(entries, today=TODAY)
    assert result["predictions"][0]["predictedUsage"] == 8


def test_same_day_entries_ordered_by_timestamp():
    day = date(2024, 5, 1)
    ts = datetime(2024, 5, 1, tzinfo=timezone.utc)
    late = UsageEntry(user_id="u1", date=day, usage=2.0, timestamp=ts + timedelta(hours=2))
    early = UsageEntry(user_id="u1", date=day, usage=1.0, timestamp=ts)
    assert [e.usage for e in recent_window([late, early])] == [1.0, 2.0]


def test_predictions_rounded_to_two_decimals():
    result = forecast_usage(_series([1.111, 2.222, 3.333, 4.444, 5.555, 6.666, 7.777]), today=TODAY)
    for p in result["predictions"]:
        assert p["predictedUsage"] == round(p["predictedUsage"], 2)


def test_single_point_regression_raises_computation_error():
    with pytest.raises(ComputationError):
        fit_linear_trend([3.0])


def test_empty_regression_raises_computation_error():
    with pytest.raises(ComputationError):
        fit_linear_trend([])


def test_overflowing_series_raises_computation_error():
    with pytest.raises(ComputationError):
        forecast_usage(_series([1e308] * 7), today=TODAY)

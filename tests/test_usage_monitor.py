"""Tests for dashboard summary, goal progress and daily alerts."""
from datetime import date

import pytest

from energy_tracker.core.errors import ComputationError
from energy_tracker.models.usage import UsageEntry
from energy_tracker.services.usage_monitor import check_daily_alert, goal_progress, usage_summary

TODAY = date(2024, 3, 20)


def _entry(day, usage, appliance="General", cost=0.0):
    return UsageEntry(user_id="u1", date=date.fromisoformat(day), usage=usage, appliance=appliance, cost=cost)


ENTRIES = [
    _entry("2024-02-10", 40, cost=4.0),
    _entry("2024-03-01", 10, "HVAC", cost=1.0),
    _entry("2024-03-20", 30, "HVAC"),
    _entry("2024-03-20", 25),
]


def test_usage_summary():
    summary = usage_summary(ENTRIES, today=TODAY)
    assert summary["entriesCount"] == 4
    assert summary["totalUsage"] == 105
    assert summary["totalCost"] == 5.0
    assert summary["avgDailyUsage"] == 26.25
    assert summary["currentMonthUsage"] == 65
    assert summary["previousMonthUsage"] == 40
    assert summary["todayUsage"] == 55
    assert summary["applianceBreakdown"] == {"General": 65, "HVAC": 40}


def test_usage_summary_january_previous_month_is_december():
    entries = [_entry("2023-12-31", 7)]
    assert usage_summary(entries, today=date(2024, 1, 5))["previousMonthUsage"] == 7


def test_usage_summary_empty():
    summary = usage_summary([], today=TODAY)
    assert summary["totalUsage"] == 0
    assert summary["avgDailyUsage"] == 0


def test_goal_progress():
    progress = goal_progress(ENTRIES, goal=100, today=TODAY)
    assert progress["currentMonthUsage"] == 65
    assert progress["usagePercentage"] == 65.0
    assert progress["remaining"] == 35
    assert progress["onTrack"] is True


def test_goal_progress_over_goal():
    progress = goal_progress(ENTRIES, goal=50, today=TODAY)
    assert progress["onTrack"] is False
    assert progress["remaining"] == -15


def test_goal_progress_without_goal():
    assert goal_progress(ENTRIES, goal=0, today=TODAY)["usagePercentage"] == 0


def test_daily_alert_triggers_over_threshold():
    status = check_daily_alert(ENTRIES, enabled=True, threshold=50, today=TODAY)
    assert status["triggered"] is True
    assert status["todayUsage"] == 55
    assert status["overBy"] == 5


def test_daily_alert_disabled_never_triggers():
    status = check_daily_alert(ENTRIES, enabled=False, threshold=10, today=TODAY)
    assert status["triggered"] is False
    assert status["overBy"] == 0


def test_daily_alert_at_threshold_not_triggered():
    assert check_daily_alert(ENTRIES, enabled=True, threshold=55, today=TODAY)["triggered"] is False


def test_goal_progress_without_goal_has_nothing_remaining():
    progress = goal_progress(ENTRIES, goal=0, today=TODAY)
    assert progress["remaining"] == 0
    assert progress["onTrack"] is True


def test_usage_summary_overflowing_total_raises_computation_error():
    entries = [_entry("2024-03-01", 1e308), _entry("2024-03-02", 1e308)]
    with pytest.raises(ComputationError):
        usage_summary(entries, today=TODAY)


def test_usage_summary_overflowing_cost_raises_computation_error():
    entries = [_entry("2024-03-01", 1, cost=1e308), _entry("2024-03-02", 1, cost=1e308)]
    with pytest.raises(ComputationError):
        usage_summary(entries, today=TODAY)

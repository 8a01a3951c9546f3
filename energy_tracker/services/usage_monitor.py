"""
Usage Monitor
=============
Dashboard statistics derived from a user's entries:
  - overall / current-month / previous-month / today totals
  - progress against the monthly kWh goal
  - daily usage alert against the user's threshold
"""
from __future__ import annotations

from datetime import date
from typing import Any, Iterable, Optional

from energy_tracker.models.usage import UsageEntry
from energy_tracker.services.aggregator import aggregate_usage, finite_sum
from energy_tracker.utils.date_helpers import previous_month, utc_today

DEFAULT_ALERT_THRESHOLD = 50.0


def _usage_on(entries: list[UsageEntry], day: date) -> float:
    return finite_sum(e.usage for e in entries if e.date == day)


def usage_summary(entries: Iterable[UsageEntry], today: Optional[date] = None) -> dict[str, Any]:
    entries = list(entries)
    today = today or utc_today()
    overall = aggregate_usage(entries)
    prev_year, prev_month = previous_month(today.year, today.month)

    return {
        "entriesCount": overall.count,
        "totalUsage": round(overall.total_usage, 2),
        "totalCost": round(finite_sum(e.cost for e in entries), 2),
        "avgDailyUsage": round(overall.average, 2),
        "currentMonthUsage": round(aggregate_usage(entries, today.month, today.year).total_usage, 2),
        "previousMonthUsage": round(aggregate_usage(entries, prev_month, prev_year).total_usage, 2),
        "todayUsage": round(_usage_on(entries, today), 2),
        "applianceBreakdown": {k: round(v, 2) for k, v in sorted(overall.by_appliance.items())},
    }


def goal_progress(
    entries: Iterable[UsageEntry],
    goal: float,
    today: Optional[date] = None,
) -> dict[str, Any]:
    """Current-month usage measured against a monthly kWh goal (0 = no goal)."""
    today = today or utc_today()
    current = aggregate_usage(entries, today.month, today.year).total_usage
    percentage = (current / goal) * 100 if goal > 0 else 0.0
    return {
        "goal": goal,
        "currentMonthUsage": round(current, 2),
        "usagePercentage": round(percentage, 1),
        "remaining": round(goal - current, 2) if goal > 0 else 0.0,
        "onTrack": percentage <= 100,
    }


def check_daily_alert(
    entries: Iterable[UsageEntry],
    enabled: bool,
    threshold: float = DEFAULT_ALERT_THRESHOLD,
    today: Optional[date] = None,
) -> dict[str, Any]:
    """Whether today's usage exceeds the alert threshold."""
    today = today or utc_today()
    today_usage = _usage_on(list(entries), today)
    triggered = bool(enabled) and today_usage > threshold
    return {
        "enabled": bool(enabled),
        "threshold": threshold,
        "todayUsage": round(today_usage, 2),
        "triggered": triggered,
        "overBy": round(today_usage - threshold, 2) if triggered else 0.0,
    }

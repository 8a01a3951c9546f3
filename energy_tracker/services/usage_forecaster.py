"""
Usage Forecaster
================
Projects daily usage for the next 7 days from the user's most recent entries
using simple linear regression (pure stdlib).

Entries are ranked by (date, timestamp) and regressed against their rank, so
gaps between recorded days are ignored. The projection is anchored to the
current date, not to the last recorded day.

Requires at least 7 entries; fewer yields a null prediction with a message.
"""
from __future__ import annotations

import logging
import math
from datetime import date
from typing import Any, Iterable, Optional

from energy_tracker.core.errors import ComputationError, InsufficientDataError
from energy_tracker.models.usage import UsageEntry
from energy_tracker.services.aggregator import finite_sum
from energy_tracker.utils.date_helpers import days_ahead, utc_today

logger = logging.getLogger(__name__)

MIN_ENTRIES = 7
WINDOW = 30
HORIZON_DAYS = 7

INSUFFICIENT_DATA_MESSAGE = "Need at least {min_entries} days of data for prediction"


def fit_linear_trend(y: list[float]) -> tuple[float, float]:
    """Compute (slope, intercept) of y against x = 0..n-1."""
    n = len(y)
    if n == 0:
        raise ComputationError("Cannot fit a trend to an empty series")
    x = [float(i) for i in range(n)]
    sum_x = sum(x)
    sum_y = finite_sum(y)
    sum_xx = sum(xi * xi for xi in x)
    sum_xy = finite_sum(xi * yi for xi, yi in zip(x, y))
    denom = n * sum_xx - sum_x * sum_x
    if denom == 0 or not math.isfinite(denom):
        raise ComputationError("Degenerate regression: zero denominator", data_points=n)
    slope = (n * sum_xy - sum_x * sum_y) / denom
    intercept = (sum_y - slope * sum_x) / n
    if not (math.isfinite(slope) and math.isfinite(intercept)):
        raise ComputationError("Regression produced a non-finite coefficient", data_points=n)
    return slope, intercept


def recent_window(entries: Iterable[UsageEntry], window: int = WINDOW) -> list[UsageEntry]:
    """Entries ordered oldest → newest by (date, timestamp), truncated to the last ``window``."""
    ordered = sorted(entries, key=lambda e: e.sort_key)
    return ordered[-window:]


def _trend(slope: float, values: list[float]) -> str:
    mean = finite_sum(values) / len(values)
    if slope > mean * 0.02:
        return "increasing"
    if slope < -mean * 0.02:
        return "decreasing"
    return "stable"


def _project(
    entries: list[UsageEntry],
    today: date,
    min_entries: int,
    window: int,
    horizon: int,
) -> dict[str, Any]:
    if len(entries) < min_entries:
        raise InsufficientDataError(
            INSUFFICIENT_DATA_MESSAGE.format(min_entries=min_entries),
            data_points=len(entries),
        )

    series = recent_window(entries, window)
    y_vals = [e.usage for e in series]
    slope, intercept = fit_linear_trend(y_vals)
    n = len(series)

    predictions = []
    for i, day in enumerate(days_ahead(today, horizon), start=1):
        predicted = max(0.0, slope * (n + i - 1) + intercept)
        predictions.append({"date": day.isoformat(), "predictedUsage": round(predicted, 2)})

    return {
        "predictions": predictions,
        "dataPoints": n,
        "trend": _trend(slope, y_vals),
    }


def forecast_usage(
    entries: Iterable[UsageEntry],
    today: Optional[date] = None,
    min_entries: int = MIN_ENTRIES,
    window: int = WINDOW,
    horizon: int = HORIZON_DAYS,
) -> dict[str, Any]:
    """
    Returns either:
    {
      "predictions": [{"date": "YYYY-MM-DD", "predictedUsage": float}, ...],
      "dataPoints": int,
      "trend": "increasing" | "decreasing" | "stable",
    }
    or, with too little history:
    { "predictions": None, "message": str }
    """
    entries = list(entries)
    try:
        return _project(entries, today or utc_today(), min_entries, window, horizon)
    except InsufficientDataError as e:
        logger.debug(f"Forecast skipped: {e.message} ({len(entries)} entries)")
        return {"predictions": None, "message": e.message}

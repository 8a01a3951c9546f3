"""
Bill Calculator
===============
Estimates the electricity bill for one calendar month from the entries
recorded in that month.

Invalid input is rejected, never clamped:
  - month outside 1–12 or a year that is not four digits
  - a rate that is not a positive finite number

A month without entries is a zero bill. A total or cost that overflows
raises ComputationError.
"""
from __future__ import annotations

import math
from typing import Any, Iterable

from energy_tracker.core.errors import ComputationError, InputValidationError
from energy_tracker.models.usage import UsageEntry
from energy_tracker.services.aggregator import aggregate_usage, validate_period

DEFAULT_RATE_PER_KWH = 0.12


def _validate_rate(rate_per_kwh: float) -> float:
    if isinstance(rate_per_kwh, bool) or not isinstance(rate_per_kwh, (int, float)):
        raise InputValidationError("ratePerKwh must be a number", ratePerKwh=repr(rate_per_kwh))
    if not math.isfinite(rate_per_kwh) or rate_per_kwh <= 0:
        raise InputValidationError("ratePerKwh must be greater than 0", ratePerKwh=rate_per_kwh)
    return float(rate_per_kwh)


def calculate_bill(
    entries: Iterable[UsageEntry],
    month: int,
    year: int,
    rate_per_kwh: float = DEFAULT_RATE_PER_KWH,
) -> dict[str, Any]:
    """
    Returns:
    {
      "month": int, "year": int,
      "totalUsage": float,        # kWh recorded in the month
      "ratePerKwh": float,
      "estimatedCost": float,     # totalUsage * ratePerKwh, unrounded
      "entriesCount": int,
    }
    """
    rate = _validate_rate(rate_per_kwh)
    validate_period(month, year)
    aggregate = aggregate_usage(entries, month=month, year=year)
    estimated_cost = aggregate.total_usage * rate
    if not math.isfinite(estimated_cost):
        raise ComputationError("Estimated cost is not finite", month=month, year=year)

    return {
        "month": month,
        "year": year,
        "totalUsage": aggregate.total_usage,
        "ratePerKwh": rate,
        "estimatedCost": estimated_cost,
        "entriesCount": aggregate.count,
    }

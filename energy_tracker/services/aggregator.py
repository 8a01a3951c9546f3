"""
Usage Aggregator
================
Sums a user's usage entries, optionally restricted to one calendar month,
and breaks the total down per appliance.

Totals use math.fsum so the result does not depend on input order, and a
total that overflows raises ComputationError.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Optional

from energy_tracker.core.errors import ComputationError, InputValidationError
from energy_tracker.models.usage import UsageEntry


@dataclass(frozen=True)
class UsageAggregate:
    total_usage: float
    count: int
    by_appliance: dict[str, float] = field(default_factory=dict)

    @property
    def average(self) -> float:
        """Mean usage per entry; 0.0 for an empty set."""
        if self.count == 0:
            return 0.0
        return self.total_usage / self.count


def finite_sum(values: Iterable[float]) -> float:
    """math.fsum that raises ComputationError instead of overflowing to inf."""
    try:
        total = math.fsum(values)
    except OverflowError as e:
        raise ComputationError("Usage total overflowed") from e
    if not math.isfinite(total):
        raise ComputationError("Usage total is not finite", total=repr(total))
    return total


def validate_period(month: int, year: int) -> None:
    if isinstance(month, bool) or not isinstance(month, int) or not 1 <= month <= 12:
        raise InputValidationError("month must be an integer between 1 and 12", month=month)
    if isinstance(year, bool) or not isinstance(year, int) or not 1000 <= year <= 9999:
        raise InputValidationError("year must be a four-digit integer", year=year)


def filter_by_month(entries: Iterable[UsageEntry], month: int, year: int) -> list[UsageEntry]:
    validate_period(month, year)
    return [e for e in entries if e.date.month == month and e.date.year == year]


def appliance_breakdown(entries: Iterable[UsageEntry]) -> dict[str, float]:
    grouped: dict[str, list[float]] = {}
    for e in entries:
        grouped.setdefault(e.appliance, []).append(e.usage)
    return {appliance: finite_sum(values) for appliance, values in grouped.items()}


def dominant_appliance(breakdown: dict[str, float]) -> Optional[str]:
    """Appliance with the largest summed usage; ties go to the alphabetically first."""
    if not breakdown:
        return None
    return min(breakdown.items(), key=lambda item: (-item[1], item[0]))[0]


def aggregate_usage(
    entries: Iterable[UsageEntry],
    month: Optional[int] = None,
    year: Optional[int] = None,
) -> UsageAggregate:
    """Total, count and per-appliance totals over the (optionally month-filtered) entries."""
    selected = list(entries)
    if month is not None or year is not None:
        if month is None or year is None:
            raise InputValidationError("month and year must be given together")
        selected = filter_by_month(selected, month, year)

    return UsageAggregate(
        total_usage=finite_sum(e.usage for e in selected),
        count=len(selected),
        by_appliance=appliance_breakdown(selected),
    )

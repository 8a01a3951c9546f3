"""
Energy Tips Engine
==================
Turns a user's aggregate usage into a short ordered list of saving tips.

Rule ladder (evaluated in order, tips appended in the same order):
  1. average usage per entry   > 30 kWh  → LED, phantom-load
  2. average usage per entry   > 50 kWh  → ENERGY STAR, thermostat (adds to 1)
  3. dominant appliance HVAC / Water Heater → appliance tip
  4. nothing so far                        → two generic tips
"""
from __future__ import annotations

from typing import Iterable

from energy_tracker.models.usage import UsageEntry
from energy_tracker.services.aggregator import aggregate_usage, dominant_appliance

HIGH_USAGE_KWH = 30.0
VERY_HIGH_USAGE_KWH = 50.0

_HIGH_USAGE_TIPS = [
    "Your daily usage is quite high. Consider switching to LED bulbs to reduce consumption by up to 80%.",
    "Unplug electronics when not in use to avoid phantom power drain.",
]

_VERY_HIGH_USAGE_TIPS = [
    "Consider upgrading to ENERGY STAR certified appliances for significant savings.",
    "Set your thermostat 2-3 degrees higher in summer and lower in winter.",
]

# dominant appliance → tip; appliances not listed contribute nothing
_APPLIANCE_TIPS: dict[str, str] = {
    "HVAC": "HVAC is your biggest energy consumer. Regular maintenance can improve efficiency by 15%.",
    "Water Heater": "Lower your water heater temperature to 120°F to save energy without sacrificing comfort.",
}

_FALLBACK_TIPS = [
    "Great job maintaining low energy usage! Consider solar panels for even greater savings.",
    "Smart power strips can help eliminate standby power consumption.",
]


def generate_tips(entries: Iterable[UsageEntry]) -> list[str]:
    """Return the tips for a user's entries. Never empty."""
    aggregate = aggregate_usage(entries)
    avg_daily_usage = aggregate.total_usage / max(aggregate.count, 1)

    tips: list[str] = []
    if avg_daily_usage > HIGH_USAGE_KWH:
        tips.extend(_HIGH_USAGE_TIPS)
    if avg_daily_usage > VERY_HIGH_USAGE_KWH:
        tips.extend(_VERY_HIGH_USAGE_TIPS)

    top_appliance = dominant_appliance(aggregate.by_appliance)
    if top_appliance in _APPLIANCE_TIPS:
        tips.append(_APPLIANCE_TIPS[top_appliance])

    if not tips:
        tips.extend(_FALLBACK_TIPS)

    return tips

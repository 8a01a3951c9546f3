"""Tests for the energy tips rule ladder."""
from datetime import date

from energy_tracker.models.usage import UsageEntry
from energy_tracker.services.tips_engine import generate_tips


def _entries(usages, appliance="General"):
    return [
        UsageEntry(user_id="u1", date=date(2024, 3, i + 1), usage=u, appliance=appliance)
        for i, u in enumerate(usages)
    ]


def test_low_usage_gets_generic_tips():
    tips = generate_tips(_entries([5, 10, 12]))
    assert len(tips) == 2
    assert tips[0].startswith("Great job")
    assert "Smart power strips" in tips[1]


def test_empty_entries_still_get_tips():
    assert len(generate_tips([])) == 2


def test_high_usage_gets_led_and_phantom_tips():
    tips = generate_tips(_entries([35, 40]))
    assert len(tips) == 2
    assert "LED" in tips[0]
    assert "phantom" in tips[1]


def test_very_high_usage_is_additive():
    tips = generate_tips(_entries([60, 70]))
    assert len(tips) == 4
    assert "LED" in tips[0]
    assert "ENERGY STAR" in tips[2]
    assert "thermostat" in tips[3]


def test_exactly_thirty_is_not_high():
    tips = generate_tips(_entries([30, 30]))
    assert tips[0].startswith("Great job")


def test_hvac_dominant_adds_tip_without_fallback():
    tips = generate_tips(_entries([10, 10], appliance="HVAC"))
    assert tips == [
        "HVAC is your biggest energy consumer. Regular maintenance can improve efficiency by 15%."
    ]


def test_water_heater_tip_after_usage_tips():
    tips = generate_tips(_entries([60, 60], appliance="Water Heater"))
    assert len(tips) == 5
    assert "water heater" in tips[-1]


def test_unknown_dominant_appliance_contributes_nothing():
    entries = _entries([10], appliance="Refrigerator") + _entries([1], appliance="HVAC")
    tips = generate_tips(entries)
    assert len(tips) == 2
    assert tips[0].startswith("Great job")


def test_dominant_tie_resolved_alphabetically():
    entries = _entries([8], appliance="Water Heater") + _entries([8], appliance="HVAC")
    tips = generate_tips(entries)
    assert tips[0].startswith("HVAC")

"""Tests for usage entry validation on write and on read."""
from datetime import date, datetime, timezone

import pytest
from pydantic import ValidationError

from energy_tracker.core.errors import DataIntegrityError
from energy_tracker.models.usage import UsageEntry, UsageEntryCreate, usage_key, usage_prefix


def _record(**overrides):
    record = {
        "userId": "u1",
        "date": "2024-03-01",
        "usage": 12.5,
        "appliance": "HVAC",
        "cost": 1.5,
        "timestamp": "2024-03-01T10:00:00+00:00",
    }
    record.update(overrides)
    return record


class TestUsageEntryCreate:
    def test_defaults(self):
        payload = UsageEntryCreate.model_validate({"date": "2024-03-01", "usage": "7.5"})
        assert payload.date == date(2024, 3, 1)
        assert payload.usage == 7.5
        assert payload.appliance == "General"

    def test_blank_appliance_defaults_to_general(self):
        payload = UsageEntryCreate.model_validate({"date": "2024-03-01", "usage": 1, "appliance": "  "})
        assert payload.appliance == "General"

    def test_iso_timestamp_date_accepted(self):
        payload = UsageEntryCreate.model_validate({"date": "2024-03-01T18:30:00Z", "usage": 1})
        assert payload.date == date(2024, 3, 1)

    @pytest.mark.parametrize("usage", [-1, "abc", float("nan"), float("inf")])
    def test_invalid_usage_rejected(self, usage):
        with pytest.raises(ValidationError):
            UsageEntryCreate.model_validate({"date": "2024-03-01", "usage": usage})

    def test_invalid_date_rejected(self):
        with pytest.raises(ValidationError):
            UsageEntryCreate.model_validate({"date": "yesterday", "usage": 1})

    def test_negative_cost_rejected(self):
        with pytest.raises(ValidationError):
            UsageEntryCreate.model_validate({"date": "2024-03-01", "usage": 1, "cost": -2})


class TestFromRecord:
    def test_round_trip_fields(self):
        entry = UsageEntry.from_record(_record())
        assert entry.date == date(2024, 3, 1)
        assert entry.usage == 12.5
        assert entry.timestamp == datetime(2024, 3, 1, 10, tzinfo=timezone.utc)
        assert entry.to_record()["date"] == "2024-03-01"

    def test_missing_appliance_and_cost_default(self):
        entry = UsageEntry.from_record(_record(appliance=None, cost=None))
        assert entry.appliance == "General"
        assert entry.cost == 0.0

    @pytest.mark.parametrize("usage", ["12", None, True, -3, float("nan")])
    def test_bad_usage_is_integrity_error(self, usage):
        with pytest.raises(DataIntegrityError):
            UsageEntry.from_record(_record(usage=usage))

    @pytest.mark.parametrize("day", ["not-a-date", None, "2024-13-01"])
    def test_bad_date_is_integrity_error(self, day):
        with pytest.raises(DataIntegrityError):
            UsageEntry.from_record(_record(date=day))


def test_usage_key_under_user_prefix():
    key = usage_key("u1", datetime(2024, 3, 1, tzinfo=timezone.utc))
    assert key.startswith(usage_prefix("u1"))
    assert key != usage_key("u1", datetime(2024, 3, 1, tzinfo=timezone.utc))

"""
Usage entry domain type.

``UsageEntryCreate`` validates what callers write; ``UsageEntry`` is the
immutable record read back from the key-value store. A stored record that no
longer satisfies the write-time rules raises DataIntegrityError on read so
that no computation silently skips it.
"""
from __future__ import annotations

import datetime as dt
import math
import uuid
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator

from energy_tracker.core.errors import DataIntegrityError
from energy_tracker.utils.date_helpers import parse_date, parse_timestamp, utcnow

DEFAULT_APPLIANCE = "General"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def usage_prefix(user_id: str) -> str:
    return f"usage:{user_id}:"


def usage_key(user_id: str, timestamp: datetime) -> str:
    """Storage key for one entry; sorts by creation time within a user prefix."""
    millis = int(timestamp.timestamp() * 1000)
    return f"{usage_prefix(user_id)}{millis:013d}:{uuid.uuid4().hex[:8]}"


class UsageEntryCreate(BaseModel):
    date: dt.date
    usage: float = Field(ge=0, allow_inf_nan=False)
    appliance: Optional[str] = Field(default=None, validate_default=True)
    cost: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)

    @field_validator("date", mode="before")
    @classmethod
    def lenient_date(cls, v: Any) -> dt.date:
        return parse_date(v)

    @field_validator("appliance")
    @classmethod
    def default_appliance(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            return DEFAULT_APPLIANCE
        return v.strip()


@dataclass(frozen=True)
class UsageEntry:
    user_id: str
    date: date
    usage: float
    appliance: str = DEFAULT_APPLIANCE
    cost: float = 0.0
    timestamp: Optional[datetime] = None

    @property
    def sort_key(self) -> tuple[date, datetime]:
        return self.date, self.timestamp or _EPOCH

    @classmethod
    def create(cls, user_id: str, payload: UsageEntryCreate, now: datetime | None = None) -> "UsageEntry":
        return cls(
            user_id=user_id,
            date=payload.date,
            usage=float(payload.usage),
            appliance=payload.appliance or DEFAULT_APPLIANCE,
            cost=float(payload.cost or 0.0),
            timestamp=now or utcnow(),
        )

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "UsageEntry":
        """Build an entry from a stored record, failing on anything unusable."""
        if not isinstance(record, dict):
            raise DataIntegrityError("Usage record is not an object", record=repr(record))

        usage = _finite_number(record.get("usage"))
        if usage is None or usage < 0:
            raise DataIntegrityError(
                "Usage record has an invalid usage value",
                record=record.get("timestamp"),
                usage=repr(record.get("usage")),
            )

        raw_cost = record.get("cost")
        cost = 0.0 if raw_cost in (None, "") else _finite_number(raw_cost)
        if cost is None or cost < 0:
            raise DataIntegrityError(
                "Usage record has an invalid cost value",
                record=record.get("timestamp"),
                cost=repr(raw_cost),
            )

        try:
            entry_date = parse_date(record.get("date"))
            timestamp = parse_timestamp(record.get("timestamp"))
        except ValueError as e:
            raise DataIntegrityError(
                "Usage record has an unparseable date",
                record=record.get("timestamp"),
                reason=str(e),
            ) from e

        appliance = record.get("appliance") or DEFAULT_APPLIANCE
        return cls(
            user_id=str(record.get("userId", "")),
            date=entry_date,
            usage=usage,
            appliance=str(appliance),
            cost=cost,
            timestamp=timestamp,
        )

    def to_record(self) -> dict[str, Any]:
        return {
            "userId": self.user_id,
            "date": self.date.isoformat(),
            "usage": self.usage,
            "appliance": self.appliance,
            "cost": self.cost,
            "timestamp": self.timestamp.isoformat() if self.timestamp else None,
        }


def entries_from_records(records: list[dict[str, Any]]) -> list[UsageEntry]:
    return [UsageEntry.from_record(r) for r in records]


def _finite_number(value: Any) -> float | None:
    # bool is an int subclass; a stored true/false is not a reading
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number

"""
Per-user records on the key-value store: usage entries (append-only), the
monthly goal and the alert settings.
"""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy.orm import Session

from energy_tracker.core import kv_store
from energy_tracker.core.errors import DataIntegrityError, InputValidationError
from energy_tracker.models.usage import (
    UsageEntry, UsageEntryCreate, entries_from_records, usage_key, usage_prefix,
)
from energy_tracker.services.usage_monitor import DEFAULT_ALERT_THRESHOLD
from energy_tracker.utils.date_helpers import parse_timestamp, utcnow

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ── Usage entries ─────────────────────────────────────────────────────────────

def add_entry(
    db: Session,
    user_id: str,
    payload: UsageEntryCreate,
    now: Optional[datetime] = None,
) -> UsageEntry:
    """Append one entry. Not idempotent: every call stores a new record."""
    entry = UsageEntry.create(user_id, payload, now=now)
    kv_store.set(db, usage_key(user_id, entry.timestamp), entry.to_record())
    logger.info(f"Stored usage entry for {user_id}: {entry.date} {entry.usage} kWh ({entry.appliance})")
    return entry


def list_records(db: Session, user_id: str) -> list[dict[str, Any]]:
    return kv_store.get_by_prefix(db, usage_prefix(user_id))


def newest_first(records: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """Raw records ordered by creation instant, newest first.

    Timestamps are compared as instants, so differing UTC offsets order
    correctly. Records without a timestamp go last.
    """
    def _created_at(record: dict[str, Any]) -> datetime:
        try:
            return parse_timestamp(record.get("timestamp")) or _EPOCH
        except ValueError as e:
            raise DataIntegrityError(
                "Stored usage record has an invalid timestamp",
                timestamp=repr(record.get("timestamp")),
            ) from e

    return sorted(records, key=_created_at, reverse=True)


def load_entries(db: Session, user_id: str) -> list[UsageEntry]:
    """All of a user's entries; raises DataIntegrityError on a corrupt record."""
    return entries_from_records(list_records(db, user_id))


# ── Goal / alert settings singletons ──────────────────────────────────────────

def _goal_key(user_id: str) -> str:
    return f"goal:{user_id}"


def _alerts_key(user_id: str) -> str:
    return f"alerts:{user_id}"


def get_goal(db: Session, user_id: str) -> float:
    data = kv_store.get(db, _goal_key(user_id)) or {}
    return float(data.get("goal") or 0)


def set_goal(db: Session, user_id: str, goal: float) -> float:
    if goal <= 0:
        raise InputValidationError("goal must be greater than 0", goal=goal)
    kv_store.set(db, _goal_key(user_id), {
        "userId": user_id,
        "goal": goal,
        "updatedAt": utcnow().isoformat(),
    })
    return goal


def get_alert_settings(db: Session, user_id: str) -> dict[str, Any]:
    data = kv_store.get(db, _alerts_key(user_id)) or {}
    threshold = data.get("threshold")
    return {
        "enabled": bool(data.get("enabled", False)),
        "threshold": float(threshold) if threshold is not None else DEFAULT_ALERT_THRESHOLD,
    }


def set_alert_settings(db: Session, user_id: str, enabled: bool, threshold: float) -> dict[str, Any]:
    if threshold < 0:
        raise InputValidationError("threshold cannot be negative", threshold=threshold)
    kv_store.set(db, _alerts_key(user_id), {
        "userId": user_id,
        "enabled": enabled,
        "threshold": threshold,
        "updatedAt": utcnow().isoformat(),
    })
    return {"enabled": enabled, "threshold": threshold}

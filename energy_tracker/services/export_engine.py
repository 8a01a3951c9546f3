"""
Export Engine
=============
Generates downloadable exports of a user's usage entries:
  - CSV (one row per entry, newest first)
  - JSON backup bundle, which can be restored through the API
"""
from __future__ import annotations

import csv
import io
import json
from typing import Any, Iterable

from energy_tracker.core.errors import InputValidationError
from energy_tracker.models.usage import UsageEntry
from energy_tracker.utils.date_helpers import utcnow

CSV_HEADER = ["Date", "Usage (kWh)", "Appliance", "Cost ($)"]
BACKUP_VERSION = "2.0.0"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def newest_first(entries: Iterable[UsageEntry]) -> list[UsageEntry]:
    """Reverse-chronological by (date, timestamp); equal keys keep input order."""
    indexed = list(enumerate(entries))
    indexed.sort(key=lambda pair: (pair[1].sort_key, -pair[0]), reverse=True)
    return [e for _, e in indexed]


# ── CSV ───────────────────────────────────────────────────────────────────────

def entries_to_csv(entries: Iterable[UsageEntry]) -> str:
    """Return CSV text: header plus one row per entry, lines joined by newlines."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for e in newest_first(entries):
        writer.writerow([
            e.date.isoformat(),
            _format_number(e.usage),
            e.appliance,
            _format_number(e.cost),
        ])
    return buf.getvalue().rstrip("\n")


# ── JSON backup ───────────────────────────────────────────────────────────────

def build_backup_bundle(entries: Iterable[UsageEntry]) -> str:
    """Return a formatted JSON backup of all entries."""
    records = [e.to_record() for e in newest_first(entries)]
    bundle = {
        "version": BACKUP_VERSION,
        "exportDate": utcnow().isoformat(),
        "dataCount": len(records),
        "data": records,
    }
    return json.dumps(bundle, indent=2, default=str)


def parse_backup_bundle(payload: Any) -> list[dict[str, Any]]:
    """Extract the entry payloads from a backup bundle.

    Only the fields a caller may write are returned; user ids and
    timestamps from the bundle are discarded.
    """
    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise InputValidationError("Backup is not valid JSON") from e

    if not isinstance(payload, dict) or not isinstance(payload.get("data"), list):
        raise InputValidationError("Invalid backup file format: missing data list")

    items = []
    for item in payload["data"]:
        if not isinstance(item, dict):
            raise InputValidationError("Invalid backup file format: entry is not an object")
        items.append({
            "date": item.get("date"),
            "usage": item.get("usage"),
            "appliance": item.get("appliance"),
            "cost": item.get("cost") or 0,
        })
    return items

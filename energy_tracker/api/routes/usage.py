"""
Usage entry routes.
  POST /api/v1/energy-usage          - record one entry
  GET  /api/v1/energy-usage          - list entries, newest first
  POST /api/v1/energy-usage/restore  - re-create entries from a JSON backup
  GET  /api/v1/usage-summary         - dashboard totals
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError
from sqlalchemy.orm import Session

from energy_tracker.core.database import get_db
from energy_tracker.core.logging import ContextLogger
from energy_tracker.core.security import get_current_user_id
from energy_tracker.models.usage import UsageEntryCreate
from energy_tracker.services import usage_store
from energy_tracker.services.export_engine import parse_backup_bundle
from energy_tracker.services.usage_monitor import usage_summary

router = APIRouter(tags=["usage"])
_log = ContextLogger(__name__)


@router.post("/energy-usage")
def add_energy_usage(
    payload: UsageEntryCreate,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    entry = usage_store.add_entry(db, user_id, payload)
    return {"success": True, "data": entry.to_record()}


@router.get("/energy-usage")
def list_energy_usage(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    """Return the user's stored records sorted by creation time, newest first."""
    records = usage_store.newest_first(usage_store.list_records(db, user_id))
    return {"data": records}


@router.post("/energy-usage/restore")
def restore_energy_usage(
    bundle: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    """Store every valid entry of a backup as a new entry.

    Entries already present are not detected; restoring the same backup twice
    stores everything twice.
    """
    log = _log.bind(user_id=user_id)
    restored = 0
    errors: list[dict[str, Any]] = []
    for index, item in enumerate(parse_backup_bundle(bundle)):
        try:
            payload = UsageEntryCreate.model_validate(item)
        except ValidationError as e:
            errors.append({"index": index, "error": e.errors()[0]["msg"]})
            continue
        usage_store.add_entry(db, user_id, payload)
        restored += 1

    log.info("Backup restored", restored=restored, failed=len(errors))
    return {"restored": restored, "failed": len(errors), "errors": errors}


@router.get("/usage-summary")
def get_usage_summary(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    return usage_summary(usage_store.load_entries(db, user_id))

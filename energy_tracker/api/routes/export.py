from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse
from sqlalchemy.orm import Session

from energy_tracker.core.database import get_db
from energy_tracker.core.security import get_current_user_id
from energy_tracker.services import usage_store
from energy_tracker.services.export_engine import build_backup_bundle, entries_to_csv
from energy_tracker.utils.date_helpers import utc_today

router = APIRouter(tags=["export"])


@router.get("/export-csv")
def export_csv(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    csv_content = entries_to_csv(usage_store.load_entries(db, user_id))
    return StreamingResponse(
        iter([csv_content]), media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=energy-usage.csv"},
    )


@router.get("/export-backup")
def export_backup(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
):
    json_content = build_backup_bundle(usage_store.load_entries(db, user_id))
    return StreamingResponse(
        iter([json_content]), media_type="application/json",
        headers={"Content-Disposition": f"attachment; filename=energy-backup-{utc_today().isoformat()}.json"},
    )

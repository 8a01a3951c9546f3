"""
Analytics API Routes
====================
Provides:
  GET  /api/v1/predict-usage   - 7-day usage forecast
  GET  /api/v1/energy-tips     - heuristic saving tips
  POST /api/v1/calculate-bill  - monthly bill estimate
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field
from sqlalchemy.orm import Session

from energy_tracker.core.config import get_settings
from energy_tracker.core.database import get_db
from energy_tracker.core.logging import ContextLogger
from energy_tracker.core.security import get_current_user_id
from energy_tracker.services import usage_store
from energy_tracker.services.bill_calculator import calculate_bill
from energy_tracker.services.tips_engine import generate_tips
from energy_tracker.services.usage_forecaster import forecast_usage

router = APIRouter(tags=["analytics"])
_log = ContextLogger(__name__)


class BillRequest(BaseModel):
    """Fields stay untyped so malformed values reach the bill validators (400)."""

    model_config = ConfigDict(populate_by_name=True)

    month: Any = None
    year: Any = None
    rate_per_kwh: Any = Field(default=None, alias="ratePerKwh")


# ── Endpoints ────────────────────────────────────────────────────────────────

@router.get("/predict-usage")
def predict_usage(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    """Return the next 7 days of predicted usage, or a null prediction with a reason."""
    settings = get_settings()
    entries = usage_store.load_entries(db, user_id)
    result = forecast_usage(
        entries,
        min_entries=settings.forecast_min_entries,
        window=settings.forecast_window,
        horizon=settings.forecast_horizon_days,
    )
    _log.bind(user_id=user_id).debug("Forecast computed", entries=len(entries))
    return result


@router.get("/energy-tips")
def energy_tips(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    return {"tips": generate_tips(usage_store.load_entries(db, user_id))}


@router.post("/calculate-bill")
def bill(
    payload: BillRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    rate = payload.rate_per_kwh
    if rate is None:
        rate = get_settings().default_rate_per_kwh
    entries = usage_store.load_entries(db, user_id)
    return {"bill": calculate_bill(entries, payload.month, payload.year, rate)}

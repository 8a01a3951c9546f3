"""
Per-user singletons: the monthly energy goal and the daily usage alert.
"""
from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from energy_tracker.core.database import get_db
from energy_tracker.core.security import get_current_user_id
from energy_tracker.services import usage_store
from energy_tracker.services.usage_monitor import check_daily_alert, goal_progress

router = APIRouter(tags=["preferences"])


class GoalRequest(BaseModel):
    goal: float = Field(allow_inf_nan=False)


class AlertSettingsRequest(BaseModel):
    enabled: bool = False
    threshold: float = Field(allow_inf_nan=False)


@router.get("/energy-goal")
def get_energy_goal(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    goal = usage_store.get_goal(db, user_id)
    progress = goal_progress(usage_store.load_entries(db, user_id), goal)
    return {"goal": goal, "progress": progress}


@router.post("/energy-goal")
def save_energy_goal(
    payload: GoalRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    goal = usage_store.set_goal(db, user_id, payload.goal)
    return {"success": True, "goal": goal}


@router.get("/alert-settings")
def get_alert_settings(
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    settings = usage_store.get_alert_settings(db, user_id)
    status = check_daily_alert(
        usage_store.load_entries(db, user_id),
        enabled=settings["enabled"],
        threshold=settings["threshold"],
    )
    return {**settings, "status": status}


@router.post("/alert-settings")
def save_alert_settings(
    payload: AlertSettingsRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    saved = usage_store.set_alert_settings(db, user_id, payload.enabled, payload.threshold)
    return {"success": True, **saved}

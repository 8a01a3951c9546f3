from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from energy_tracker.core.database import get_db
from energy_tracker.core.security import get_current_user_id
from energy_tracker.services import usage_store
from energy_tracker.services.energy_assistant import ask_assistant

router = APIRouter(tags=["assistant"])


class ChatRequest(BaseModel):
    message: str = ""


@router.post("/chat")
def chat(
    payload: ChatRequest,
    db: Session = Depends(get_db),
    user_id: str = Depends(get_current_user_id),
) -> dict[str, Any]:
    entries = usage_store.load_entries(db, user_id)
    return ask_assistant(payload.message, entries)

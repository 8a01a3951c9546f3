from __future__ import annotations

from fastapi import APIRouter

from energy_tracker.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health():
    settings = get_settings()
    return {
        "status": "ok",
        "version": settings.app_version,
        "assistant_configured": bool(settings.gemini_api_key),
    }

"""
FastAPI application entry point.
"""
from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from energy_tracker.core.config import get_settings
from energy_tracker.core.database import init_db
from energy_tracker.core.errors import EnergyTrackerError
from energy_tracker.core.logging import configure_logging

settings = get_settings()

configure_logging()
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Home Energy Tracker",
    description="Residential energy usage tracking: billing, tips and usage forecasting",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
)

# ── CORS ──────────────────────────────────────────────────────────────────────
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
    expose_headers=["Content-Length"],
    max_age=600,
)


# ── Errors ────────────────────────────────────────────────────────────────────
@app.exception_handler(EnergyTrackerError)
async def energy_tracker_error_handler(request: Request, exc: EnergyTrackerError):
    level = logging.ERROR if exc.status_code >= 500 else logging.WARNING
    logger.log(level, f"{request.method} {request.url.path} failed: {exc.error_type}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# ── Routers ───────────────────────────────────────────────────────────────────
from energy_tracker.api.routes import analytics, chat, export, health, preferences, usage  # noqa: E402

app.include_router(health.router)
app.include_router(usage.router, prefix="/api/v1")
app.include_router(analytics.router, prefix="/api/v1")
app.include_router(export.router, prefix="/api/v1")
app.include_router(preferences.router, prefix="/api/v1")
app.include_router(chat.router, prefix="/api/v1")


# ── Startup / Shutdown ────────────────────────────────────────────────────────
@app.on_event("startup")
async def startup_event():
    logger.info(f"Starting Home Energy Tracker v{settings.app_version}")
    init_db()
    logger.info("Startup complete")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("Shutdown complete")

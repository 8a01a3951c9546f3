"""
SQLAlchemy database engine and session management.
Uses SQLite by default (swappable to PostgreSQL via DB_URL env var).
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from energy_tracker.core.config import get_settings

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


# Relative SQLite paths resolve against the project root (parent of energy_tracker/)
_PROJECT_DIR = Path(__file__).resolve().parents[2]


def _resolve_db_url(url: str) -> str:
    """Convert a relative sqlite:///./path to an absolute path so it never moves with CWD."""
    if url.startswith("sqlite:///./") or url.startswith("sqlite:///.\\"):
        rel_path = url[len("sqlite:///./"):]
        abs_path = _PROJECT_DIR / rel_path
        return f"sqlite:///{abs_path}"
    return url


def _get_engine():
    settings = get_settings()
    db_url = _resolve_db_url(settings.db_url)

    if db_url.startswith("sqlite"):
        engine = create_engine(
            db_url,
            connect_args={
                "check_same_thread": False,
                "timeout": settings.store_timeout_seconds,
            },
            pool_pre_ping=True,
        )

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_conn, _rec):
            cursor = dbapi_conn.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.close()
    else:
        engine = create_engine(
            db_url,
            pool_pre_ping=True,
            pool_size=10,
            max_overflow=20,
            pool_timeout=settings.store_timeout_seconds,
        )

    return engine


engine = _get_engine()
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency - yields a DB session and closes it after use."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create all tables. Called at application startup."""
    from energy_tracker.models import kv  # noqa: F401
    Base.metadata.create_all(bind=engine)
    logger.info("Database initialized - tables created if not exist")

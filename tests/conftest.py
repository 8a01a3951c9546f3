"""Shared test setup: a throwaway SQLite store and a fixed JWT secret."""
import os
import tempfile
from pathlib import Path

_DB_PATH = Path(tempfile.mkdtemp(prefix="energy-tracker-")) / "test.db"
os.environ["DB_URL"] = f"sqlite:///{_DB_PATH}"
os.environ["JWT_SECRET_KEY"] = "test-secret"
os.environ["JWT_AUDIENCE"] = ""
os.environ["GEMINI_API_KEY"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest

from energy_tracker.core.database import SessionLocal, init_db
from energy_tracker.core.security import create_access_token
from energy_tracker.models.kv import KVRecord


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture()
def db():
    init_db()
    session = SessionLocal()
    try:
        yield session
    finally:
        session.rollback()
        session.query(KVRecord).delete()
        session.commit()
        session.close()


@pytest.fixture()
def auth_headers():
    def _headers(user_id: str = "user-1") -> dict[str, str]:
        return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}
    return _headers

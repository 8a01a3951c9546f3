"""
Generic key-value store on top of SQLAlchemy.

Keys are namespaced strings (``usage:<user>:<ts>``, ``goal:<user>``,
``alerts:<user>``); values are JSON documents. Reads that fail surface as a
retryable UpstreamUnavailableError, writes as a non-retryable one because a
blind retry of a usage write would store a duplicate entry.
"""
from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from energy_tracker.core.errors import UpstreamUnavailableError
from energy_tracker.models.kv import KVRecord

logger = logging.getLogger(__name__)


def get(db: Session, key: str) -> Any | None:
    """Return the value stored under ``key`` or None."""
    try:
        record = db.get(KVRecord, key)
    except SQLAlchemyError as e:
        logger.warning(f"KV read failed for {key}: {e}")
        raise UpstreamUnavailableError("Key-value store unavailable", retryable=True) from e
    return record.value if record is not None else None


def set(db: Session, key: str, value: Any) -> None:
    """Insert or replace the value stored under ``key``."""
    try:
        record = db.get(KVRecord, key)
        if record is None:
            db.add(KVRecord(key=key, value=value))
        else:
            record.value = value
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"KV write failed for {key}: {e}")
        raise UpstreamUnavailableError("Key-value store write failed", retryable=False) from e


def delete(db: Session, key: str) -> bool:
    try:
        record = db.get(KVRecord, key)
        if record is None:
            return False
        db.delete(record)
        db.commit()
        return True
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"KV delete failed for {key}: {e}")
        raise UpstreamUnavailableError("Key-value store write failed", retryable=False) from e


def get_by_prefix(db: Session, prefix: str) -> list[Any]:
    """Return all values whose key starts with ``prefix``, ordered by key."""
    stmt = (
        select(KVRecord)
        .where(KVRecord.key.startswith(prefix, autoescape=True))
        .order_by(KVRecord.key)
    )
    try:
        records = db.scalars(stmt).all()
    except SQLAlchemyError as e:
        logger.warning(f"KV prefix scan failed for {prefix}: {e}")
        raise UpstreamUnavailableError("Key-value store unavailable", retryable=True) from e
    # LIKE is case-insensitive on SQLite; keep the match exact
    return [r.value for r in records if r.key.startswith(prefix)]

"""Key-value persistence used by every store in the app.

Values are JSON documents. There are no cross-key transactions: each call
commits on its own.
"""

import logging
from typing import Any, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.attributes import flag_modified

from app.core.errors import StorageError
from app.models.kv_store import KVEntry

logger = logging.getLogger(__name__)


def get(db: Session, key: str) -> Optional[Any]:
    try:
        entry = db.get(KVEntry, key)
    except SQLAlchemyError as e:
        logger.error(f"❌ KV read failed for {key}: {e}")
        raise StorageError()
    return entry.value if entry else None


def set(db: Session, key: str, value: Any) -> None:
    try:
        entry = db.get(KVEntry, key)
        if entry:
            entry.value = value
            # callers often hand back the same list they read, which SQLAlchemy cannot diff
            flag_modified(entry, "value")
        else:
            db.add(KVEntry(key=key, value=value))
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"❌ KV write failed for {key}: {e}")
        raise StorageError()


def get_by_prefix(db: Session, prefix: str) -> list[dict]:
    """Return ``[{"key": ..., "value": ...}]`` for every key starting with prefix, ordered by key."""
    try:
        rows = (
            db.query(KVEntry)
            .filter(KVEntry.key.startswith(prefix, autoescape=True))
            .order_by(KVEntry.key)
            .all()
        )
    except SQLAlchemyError as e:
        logger.error(f"❌ KV prefix scan failed for {prefix}: {e}")
        raise StorageError()
    return [{"key": row.key, "value": row.value} for row in rows]

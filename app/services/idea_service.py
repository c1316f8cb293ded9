"""Ideas repository: one KV entry per user holding that user's whole collection."""

import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from app.core.errors import StorageError
from app.schemas.idea import Idea, IdeaStatus, Priority
from app.services import kv_store

logger = logging.getLogger(__name__)

IDEAS_PREFIX = "ideas:user:"

_PRIORITIES = {p.value for p in Priority}
_STATUSES = {s.value for s in IdeaStatus}


def ideas_key(user_id: str) -> str:
    return f"{IDEAS_PREFIX}{user_id}"


_TEXT_FIELDS = ("title", "description", "details", "ownerName", "createdAt", "updatedAt")


def _clean_collaborators(value: Any) -> list[dict]:
    if not isinstance(value, list):
        return []
    cleaned = []
    for c in value:
        if not isinstance(c, dict) or not isinstance(c.get("id"), str) or not c["id"]:
            continue
        name = c.get("name")
        cleaned.append({**c, "name": name if isinstance(name, str) else ""})
    return cleaned


def _backfill(raw: dict, owner_id: str) -> dict:
    data = dict(raw)
    if isinstance(data.get("id"), int) and not isinstance(data.get("id"), bool):
        data["id"] = str(data["id"])
    if not isinstance(data.get("ownerId"), str) or not data["ownerId"]:
        data["ownerId"] = owner_id
    for field in _TEXT_FIELDS:
        if not isinstance(data.get(field), str):
            data[field] = ""
    if not data["updatedAt"] or data["updatedAt"] < data["createdAt"]:
        data["updatedAt"] = data["createdAt"]
    for field in ("tags", "images"):
        value = data.get(field)
        data[field] = [v for v in value if isinstance(v, str)] if isinstance(value, list) else []
    data["collaborators"] = _clean_collaborators(data.get("collaborators"))
    if "websiteUrl" in data and not isinstance(data["websiteUrl"], str):
        data["websiteUrl"] = None
    if data.get("priority") not in _PRIORITIES:
        data["priority"] = Priority.medium.value
    if data.get("status") not in _STATUSES:
        data["status"] = IdeaStatus.idea.value
    if not isinstance(data.get("isShared"), bool):
        data["isShared"] = False
    return data


def normalize_ideas(value: Any, owner_id: str) -> list[Idea]:
    """Turn whatever is stored under a user's key into a validated list.

    Missing or mistyped fields get a default instead of failing the record,
    so records written before ownership and collaboration existed still load.
    Only entries that are not objects or carry no id are dropped.
    """
    if not isinstance(value, list):
        if value is not None:
            logger.warning(f"⚠️ Ideas for {owner_id} are not a list, ignoring")
        return []

    ideas = []
    for raw in value:
        if not isinstance(raw, dict):
            continue
        try:
            ideas.append(Idea.model_validate(_backfill(raw, owner_id)))
        except PydanticValidationError as e:
            logger.warning(f"⚠️ Skipping malformed idea for {owner_id}: {e.error_count()} error(s)")
    return ideas


def get_user_ideas(db: Session, user_id: str) -> list[Idea]:
    return normalize_ideas(kv_store.get(db, ideas_key(user_id)), user_id)


def save_user_ideas(db: Session, user_id: str, ideas: list[Idea], owner_name: Optional[str] = None) -> None:
    """Overwrite the whole collection. The last writer wins.

    Every idea is stamped with the collection owner's id. ``ownerName`` is
    filled from ``owner_name`` only when the client left the field out.
    """
    records = []
    for idea in ideas:
        if idea.owner_id != user_id:
            idea.owner_id = user_id
        if "owner_name" not in idea.model_fields_set and owner_name:
            idea.owner_name = owner_name
        if any(c.id == user_id for c in idea.collaborators):
            idea.collaborators = [c for c in idea.collaborators if c.id != user_id]
        records.append(idea.to_dict())

    kv_store.set(db, ideas_key(user_id), records)
    logger.info(f"💾 Saved {len(records)} ideas for user {user_id}")


def get_shared_ideas_for_user(db: Session, user_id: str) -> list[Idea]:
    return [idea for idea in get_user_ideas(db, user_id) if idea.is_shared]


def scan_all_ideas(db: Session) -> list[tuple[str, list[Idea]]]:
    """Every user's collection as ``(user_id, ideas)``. A failed scan yields nothing."""
    try:
        entries = kv_store.get_by_prefix(db, IDEAS_PREFIX)
    except StorageError:
        logger.warning("⚠️ Idea scan failed, treating as empty")
        return []

    collections = []
    for entry in entries:
        owner_id = entry["key"][len(IDEAS_PREFIX):]
        collections.append((owner_id, normalize_ideas(entry["value"], owner_id)))
    return collections


def get_shared_ideas_excluding(db: Session, user_id: str) -> list[Idea]:
    shared = []
    for owner_id, ideas in scan_all_ideas(db):
        if owner_id == user_id:
            continue
        shared.extend(idea for idea in ideas if idea.is_shared)
    return shared

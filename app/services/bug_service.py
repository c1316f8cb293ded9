"""Bug tracker: one global newest-first list of reports plus a comment list per bug."""

import logging
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from sqlalchemy.orm import Session

from app.core.errors import InvalidStatus, NotFound, ValidationError
from app.schemas.bug import Bug, BugStatus, Comment, UserInfo
from app.schemas.session import CurrentUser
from app.services import kv_store

logger = logging.getLogger(__name__)

BUGS_KEY = "bugs"
GUEST = "guest"


def comments_key(bug_id: str) -> str:
    return f"bug_comments:{bug_id}"


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def _author(user: Optional[CurrentUser], user_info: Optional[UserInfo]) -> tuple[str, str, Optional[str]]:
    info = user_info or UserInfo()
    if user:
        return user.user_id, info.name or user.display_name, info.email or user.email
    return GUEST, info.name or "Guest", info.email or None


def _load_bugs(db: Session) -> list[dict]:
    value = kv_store.get(db, BUGS_KEY)
    return value if isinstance(value, list) else []


def list_bugs(db: Session) -> list[dict]:
    return _load_bugs(db)


def get_bug(db: Session, bug_id: str) -> Optional[dict]:
    for bug in _load_bugs(db):
        if isinstance(bug, dict) and bug.get("id") == bug_id:
            return bug
    return None


def create_bug(
    db: Session,
    title: str,
    description: str,
    user: Optional[CurrentUser] = None,
    user_info: Optional[UserInfo] = None,
) -> dict:
    if not title or not title.strip():
        raise ValidationError("Title is required")
    if not description or not description.strip():
        raise ValidationError("Description is required")

    reported_by, reporter_name, reporter_email = _author(user, user_info)
    now = now_iso()
    bug = Bug(
        id=str(uuid4()),
        title=title.strip(),
        description=description.strip(),
        status=BugStatus.open,
        reported_by=reported_by,
        reporter_name=reporter_name,
        reporter_email=reporter_email,
        created_at=now,
        updated_at=now,
    ).model_dump(mode="json", by_alias=True, exclude_none=True)

    kv_store.set(db, BUGS_KEY, [bug] + _load_bugs(db))
    logger.info(f"🐞 Bug {bug['id']} reported by {reported_by}")
    return bug


def update_status(db: Session, bug_id: str, status: str) -> dict:
    if status not in {s.value for s in BugStatus}:
        raise InvalidStatus("Invalid status")

    bugs = _load_bugs(db)
    for bug in bugs:
        if isinstance(bug, dict) and bug.get("id") == bug_id:
            bug["status"] = status
            bug["updatedAt"] = now_iso()
            kv_store.set(db, BUGS_KEY, bugs)
            logger.info(f"🐞 Bug {bug_id} moved to {status}")
            return bug
    raise NotFound("Bug not found")


def list_comments(db: Session, bug_id: str) -> list[dict]:
    value = kv_store.get(db, comments_key(bug_id))
    return value if isinstance(value, list) else []


def add_comment(
    db: Session,
    bug_id: str,
    text: str,
    user: Optional[CurrentUser] = None,
    user_info: Optional[UserInfo] = None,
) -> dict:
    if not text or not text.strip():
        raise ValidationError("Comment text is required")
    if not get_bug(db, bug_id):
        raise NotFound("Bug not found")

    user_id, user_name, user_email = _author(user, user_info)
    comment = Comment(
        id=str(uuid4()),
        bug_id=bug_id,
        text=text.strip(),
        user_id=user_id,
        user_name=user_name,
        user_email=user_email,
        created_at=now_iso(),
    ).model_dump(mode="json", by_alias=True, exclude_none=True)

    kv_store.set(db, comments_key(bug_id), list_comments(db, bug_id) + [comment])
    logger.info(f"💬 Comment {comment['id']} added to bug {bug_id}")
    return comment

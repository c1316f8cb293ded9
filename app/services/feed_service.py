"""Derived, unstored views over every user's shared ideas.

Both feeds are recomputed on each call. Per-user keys are read independently,
so a feed may mix old and new state of different users.
"""

import logging

from sqlalchemy.orm import Session

from app.core.errors import StorageError
from app.schemas.idea import Idea
from app.services import follow_service, idea_service

logger = logging.getLogger(__name__)


def _newest_first(ideas: list[Idea]) -> list[Idea]:
    # ISO-8601 strings of a fixed width sort the same as the instants they encode
    return sorted(ideas, key=lambda idea: idea.updated_at, reverse=True)


def following_feed(db: Session, user_id: str) -> list[Idea]:
    ideas = []
    for followee_id in follow_service.list_following(db, user_id):
        try:
            ideas.extend(idea_service.get_shared_ideas_for_user(db, followee_id))
        except StorageError:
            logger.warning(f"⚠️ Could not read ideas of {followee_id}, skipping")
    return _newest_first(ideas)


def public_feed(db: Session) -> list[Idea]:
    ideas = []
    for _, collection in idea_service.scan_all_ideas(db):
        ideas.extend(idea for idea in collection if idea.is_shared)
    return _newest_first(ideas)

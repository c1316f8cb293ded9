"""Collaborator edits on a single idea.

Only the caller's own collection is ever read or written, so an idea that
belongs to someone else is simply not found and the call is a no-op.
"""

import logging

from sqlalchemy.orm import Session

from app.schemas.idea import Collaborator, Idea
from app.services import idea_service

logger = logging.getLogger(__name__)


def _find_owned(ideas: list[Idea], owner_id: str, idea_id: str):
    for idea in ideas:
        if idea.id == idea_id and idea.owner_id == owner_id:
            return idea
    return None


def add_collaborator(db: Session, owner_id: str, idea_id: str, collaborator_id: str, collaborator_name: str) -> None:
    ideas = idea_service.get_user_ideas(db, owner_id)
    idea = _find_owned(ideas, owner_id, idea_id)
    if not idea:
        logger.info(f"🔍 Idea {idea_id} not owned by {owner_id}, nothing to add")
        return
    if collaborator_id == owner_id or any(c.id == collaborator_id for c in idea.collaborators):
        return

    idea.collaborators.append(Collaborator(id=collaborator_id, name=collaborator_name))
    idea_service.save_user_ideas(db, owner_id, ideas)
    logger.info(f"🤝 Added collaborator {collaborator_id} to idea {idea_id}")


def remove_collaborator(db: Session, owner_id: str, idea_id: str, collaborator_id: str) -> None:
    ideas = idea_service.get_user_ideas(db, owner_id)
    idea = _find_owned(ideas, owner_id, idea_id)
    if not idea:
        logger.info(f"🔍 Idea {idea_id} not owned by {owner_id}, nothing to remove")
        return

    remaining = [c for c in idea.collaborators if c.id != collaborator_id]
    if len(remaining) == len(idea.collaborators):
        return
    idea.collaborators = remaining
    idea_service.save_user_ideas(db, owner_id, ideas)
    logger.info(f"🤝 Removed collaborator {collaborator_id} from idea {idea_id}")

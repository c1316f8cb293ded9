from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.dependencies.auth import get_current_user
from app.schemas.idea import AddCollaboratorRequest, SaveIdeasRequest
from app.schemas.session import CurrentUser
from app.services import collaborator_service, idea_service

router = APIRouter()


@router.get("/ideas")
def list_ideas(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    user_ideas = idea_service.get_user_ideas(db, user.user_id)
    shared_ideas = idea_service.get_shared_ideas_excluding(db, user.user_id)
    return {
        "userIdeas": [i.to_dict() for i in user_ideas],
        "sharedIdeas": [i.to_dict() for i in shared_ideas],
    }


@router.post("/ideas")
def save_ideas(payload: SaveIdeasRequest, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    idea_service.save_user_ideas(db, user.user_id, payload.ideas, owner_name=user.display_name)
    return {"success": True}


@router.post("/ideas/{idea_id}/collaborators")
def add_collaborator(
    idea_id: str,
    payload: AddCollaboratorRequest,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    collaborator_service.add_collaborator(
        db, user.user_id, idea_id, payload.collaborator_id, payload.collaborator_name
    )
    return {"success": True}


@router.delete("/ideas/{idea_id}/collaborators/{collaborator_id}")
def remove_collaborator(
    idea_id: str,
    collaborator_id: str,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    collaborator_service.remove_collaborator(db, user.user_id, idea_id, collaborator_id)
    return {"success": True}


@router.get("/users/{user_id}/ideas")
def list_public_user_ideas(user_id: str, db: Session = Depends(get_db)):
    return {"ideas": [i.to_dict() for i in idea_service.get_shared_ideas_for_user(db, user_id)]}

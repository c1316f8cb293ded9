from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.dependencies.auth import get_current_user, get_optional_user
from app.schemas.bug import BugCreate, CommentCreate, StatusUpdate
from app.schemas.session import CurrentUser
from app.services import bug_service

router = APIRouter()


@router.post("/bugs")
def create_bug(
    payload: BugCreate,
    user: Optional[CurrentUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    bug = bug_service.create_bug(db, payload.title, payload.description, user=user, user_info=payload.userInfo)
    return {"bug": bug}


@router.get("/bugs")
def list_bugs(db: Session = Depends(get_db)):
    return {"bugs": bug_service.list_bugs(db)}


@router.post("/bugs/{bug_id}/comments")
def add_comment(
    bug_id: str,
    payload: CommentCreate,
    user: Optional[CurrentUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    comment = bug_service.add_comment(db, bug_id, payload.text, user=user, user_info=payload.userInfo)
    return {"comment": comment}


@router.get("/bugs/{bug_id}/comments")
def list_comments(bug_id: str, db: Session = Depends(get_db)):
    return {"comments": bug_service.list_comments(db, bug_id)}


@router.patch("/bugs/{bug_id}/status")
def update_status(
    bug_id: str,
    payload: StatusUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    bug_service.update_status(db, bug_id, payload.status)
    return {"success": True}

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.dependencies.auth import get_current_user
from app.schemas.session import CurrentUser
from app.services import feed_service

router = APIRouter()


@router.get("/feed/following")
def following_feed(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"ideas": [i.to_dict() for i in feed_service.following_feed(db, user.user_id)]}


@router.get("/feed/public")
def public_feed(db: Session = Depends(get_db)):
    return {"ideas": [i.to_dict() for i in feed_service.public_feed(db)]}

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.dependencies.auth import get_current_user, get_optional_user
from app.schemas.session import CurrentUser
from app.schemas.user import FollowRequest, FollowingUser, ProfileUpdate
from app.services import follow_service, identity

router = APIRouter()


@router.get("/users/search")
def search_users(
    q: str = "",
    user: Optional[CurrentUser] = Depends(get_optional_user),
    db: Session = Depends(get_db),
):
    exclude_id = user.user_id if user else None
    return {"users": identity.search_users(db, q, exclude_id=exclude_id)}


# -----------------------------
# Following
# -----------------------------
@router.post("/follow")
def follow(payload: FollowRequest, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    follow_service.follow(db, user.user_id, payload.targetUserId)
    return {"success": True}


@router.post("/unfollow")
def unfollow(payload: FollowRequest, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    follow_service.unfollow(db, user.user_id, payload.targetUserId)
    return {"success": True}


@router.get("/following")
def list_following(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return {"following": follow_service.list_following(db, user.user_id)}


@router.get("/following/details")
def list_following_details(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    users = follow_service.list_following_details(db, user.user_id)
    return {"users": [FollowingUser(**u) for u in users]}


# -----------------------------
# Profile
# -----------------------------
@router.get("/profile")
def get_profile(user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return follow_service.get_profile(db, user.user_id)


@router.put("/profile")
def update_profile(payload: ProfileUpdate, user: CurrentUser = Depends(get_current_user), db: Session = Depends(get_db)):
    return follow_service.update_profile(db, user.user_id, payload.bio)

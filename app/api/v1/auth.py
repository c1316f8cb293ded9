import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.core.errors import Unauthorized
from app.dependencies.auth import get_current_user
from app.schemas.session import CurrentUser
from app.schemas.user import ResetPasswordRequest, TokenResponse, UserLogin, UserOut, UserSignup
from app.services import identity

logger = logging.getLogger(__name__)

router = APIRouter()


class ResetPasswordConfirm(BaseModel):
    token: str
    new_password: str


def _user_out(user) -> UserOut:
    return UserOut(id=user.id, email=user.email, name=identity.display_name(user))


# === Sign up ===
@router.post("/signup")
def signup(payload: UserSignup, db: Session = Depends(get_db)):
    user = identity.create_user(db, payload.email, payload.password, payload.name)
    return {"user": _user_out(user)}


# === Login ===
@router.post("/login", response_model=TokenResponse)
def login(payload: UserLogin, db: Session = Depends(get_db)):
    user = identity.authenticate_user(db, payload.email, payload.password)
    if not user:
        logger.warning("⚠️ Failed login attempt")
        raise Unauthorized("Invalid login credentials")
    return TokenResponse(access_token=identity.create_access_token(user), user=_user_out(user))


# === /me ===
@router.get("/me")
def me(user: CurrentUser = Depends(get_current_user)):
    return {"id": user.user_id, "name": user.display_name, "email": user.email}


# === Reset Password ===
@router.post("/reset-password")
def reset_password(payload: ResetPasswordRequest, db: Session = Depends(get_db)):
    # Same answer whether or not the email exists
    identity.request_password_reset(db, payload.email)
    return {"success": True}


@router.post("/reset-password/confirm")
def reset_password_confirm(payload: ResetPasswordConfirm, db: Session = Depends(get_db)):
    identity.reset_password(db, payload.token, payload.new_password)
    return {"success": True}

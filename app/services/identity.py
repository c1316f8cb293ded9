import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import uuid4

import bcrypt
from jose import jwt, JWTError
from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.core.config import (
    JWT_SECRET,
    JWT_ALGORITHM,
    ACCESS_TOKEN_EXPIRE_MINUTES,
    RESET_TOKEN_EXPIRE_MINUTES,
)
from app.core.errors import ValidationError
from app.models.user import User

logger = logging.getLogger(__name__)

SEARCH_LIMIT = 10


# === Hashing Utilities ===
def get_password_hash(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(plain: str, hashed: str) -> bool:
    return bcrypt.checkpw(plain.encode(), hashed.encode())


# === Token Utilities ===
def create_jwt_token(data: dict, expires_in_minutes: int) -> str:
    payload = data.copy()
    payload["exp"] = datetime.utcnow() + timedelta(minutes=expires_in_minutes)
    payload["iat"] = datetime.utcnow()
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    return jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])


def create_access_token(user: User) -> str:
    return create_jwt_token({"sub": str(user.id)}, ACCESS_TOKEN_EXPIRE_MINUTES)


def create_reset_token(user: User) -> str:
    return create_jwt_token({"sub": str(user.id), "action": "reset_password"}, RESET_TOKEN_EXPIRE_MINUTES)


def resolve_token(token: str) -> Optional[str]:
    """Validate an access token and return its user id, or None."""
    try:
        payload = decode_token(token)
    except JWTError as e:
        logger.warning(f"⚠️ JWT decode failed: {str(e)}")
        return None
    if payload.get("action"):
        # reset tokens are not sessions
        return None
    return payload.get("sub")


# === User Directory ===
def display_name(user: User) -> str:
    return user.name or user.email


def to_public(user: User) -> dict:
    return {"id": user.id, "name": display_name(user), "email": user.email}


def create_user(db: Session, email: str, password: str, name: str) -> User:
    email = email.lower()
    if db.query(User).filter(User.email == email).first():
        raise ValidationError("A user with this email address has already been registered")

    user = User(
        id=str(uuid4()),
        email=email,
        hashed_password=get_password_hash(password),
        name=name or None,
        created_at=datetime.utcnow(),
    )
    db.add(user)
    db.commit()
    logger.info(f"✅ Registered user {user.id}")
    return user


def authenticate_user(db: Session, email: str, password: str) -> Optional[User]:
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user or not verify_password(password, user.hashed_password):
        return None
    return user


def get_user_by_id(db: Session, user_id: str) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def list_users(db: Session, exclude_id: Optional[str] = None, limit: Optional[int] = None) -> list[User]:
    """Directory listing in signup order."""
    q = db.query(User)
    if exclude_id:
        q = q.filter(User.id != exclude_id)
    q = q.order_by(User.created_at)
    if limit:
        q = q.limit(limit)
    return q.all()


def search_users(db: Session, query: str, exclude_id: Optional[str] = None) -> list[dict]:
    """Case-insensitive match on name or email. An empty query lists users."""
    term = (query or "").strip().lower()
    if not term:
        return [to_public(u) for u in list_users(db, exclude_id=exclude_id, limit=SEARCH_LIMIT)]

    q = db.query(User).filter(or_(
        func.lower(User.name).contains(term, autoescape=True),
        func.lower(User.email).contains(term, autoescape=True),
    ))
    if exclude_id:
        q = q.filter(User.id != exclude_id)
    users = q.order_by(User.created_at).limit(SEARCH_LIMIT).all()
    return [to_public(u) for u in users]


def request_password_reset(db: Session, email: str) -> Optional[str]:
    """Issue a reset token for a known email. Callers must not reveal whether one was issued."""
    user = get_user_by_email(db, email)
    if not user:
        logger.info("🔁 Password reset requested for unknown email")
        return None
    logger.info(f"🔁 Password reset token issued for user {user.id}")
    return create_reset_token(user)


def reset_password(db: Session, token: str, new_password: str) -> None:
    try:
        payload = decode_token(token)
    except JWTError:
        raise ValidationError("Invalid or expired token")

    if payload.get("action") != "reset_password":
        raise ValidationError("Invalid token")

    user = get_user_by_id(db, payload.get("sub"))
    if not user:
        raise ValidationError("Invalid token")

    user.hashed_password = get_password_hash(new_password)
    db.commit()
    logger.info(f"✅ Password reset for user {user.id}")

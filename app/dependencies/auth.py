import logging
from typing import Optional

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.config import ANON_KEY
from app.core.db import get_db
from app.core.errors import Unauthorized
from app.schemas.session import CurrentUser
from app.services import identity

logger = logging.getLogger(__name__)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization.split(" ", 1)[1].strip()
    return token or None


def _resolve(token: Optional[str], db: Session) -> Optional[CurrentUser]:
    if not token or (ANON_KEY and token == ANON_KEY):
        return None

    user_id = identity.resolve_token(token)
    if not user_id:
        return None

    user = identity.get_user_by_id(db, user_id)
    if not user:
        logger.warning(f"❌ User not found for ID: {user_id}")
        return None

    return CurrentUser(user_id=user.id, display_name=identity.display_name(user), email=user.email)


# === Auth Dependencies
async def get_current_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> CurrentUser:
    user = _resolve(_bearer_token(authorization), db)
    if not user:
        raise Unauthorized()
    return user


async def get_optional_user(
    authorization: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> Optional[CurrentUser]:
    """Anonymous callers (no token, or the public anon key) resolve to None."""
    return _resolve(_bearer_token(authorization), db)

import logging
from typing import Optional

from sqlalchemy.orm import Session

from app.core.errors import InvalidTarget
from app.services import identity, idea_service, kv_store

logger = logging.getLogger(__name__)


def follows_key(user_id: str) -> str:
    return f"follows:{user_id}"


def profile_key(user_id: str) -> str:
    return f"profile:{user_id}"


def list_following(db: Session, follower_id: str) -> list[str]:
    value = kv_store.get(db, follows_key(follower_id))
    if not isinstance(value, list):
        return []
    return [v for v in value if isinstance(v, str)]


def follow(db: Session, follower_id: str, target_id: Optional[str]) -> None:
    if not target_id or not target_id.strip():
        raise InvalidTarget("Target user ID is required")
    if target_id == follower_id:
        raise InvalidTarget("Cannot follow yourself")

    following = list_following(db, follower_id)
    if target_id in following:
        return
    following.append(target_id)
    kv_store.set(db, follows_key(follower_id), following)
    logger.info(f"➕ {follower_id} now follows {target_id}")


def unfollow(db: Session, follower_id: str, target_id: Optional[str]) -> None:
    following = list_following(db, follower_id)
    if target_id not in following:
        return
    kv_store.set(db, follows_key(follower_id), [f for f in following if f != target_id])
    logger.info(f"➖ {follower_id} unfollowed {target_id}")


def get_profile(db: Session, user_id: str) -> dict:
    value = kv_store.get(db, profile_key(user_id))
    bio = value.get("bio") if isinstance(value, dict) else None
    return {"bio": bio if isinstance(bio, str) else ""}


def update_profile(db: Session, user_id: str, bio: str) -> dict:
    value = kv_store.get(db, profile_key(user_id))
    profile = dict(value) if isinstance(value, dict) else {}
    profile["bio"] = bio
    kv_store.set(db, profile_key(user_id), profile)
    return {"bio": bio}


def list_following_details(db: Session, follower_id: str) -> list[dict]:
    """Followed users with bio and shared-idea count. Users that fail to resolve are left out."""
    details = []
    for user_id in list_following(db, follower_id):
        try:
            user = identity.get_user_by_id(db, user_id)
            if not user:
                logger.warning(f"⚠️ Followed user {user_id} not found")
                continue
            details.append({
                **identity.to_public(user),
                "bio": get_profile(db, user_id)["bio"],
                "publicIdeasCount": len(idea_service.get_shared_ideas_for_user(db, user_id)),
            })
        except Exception as e:
            logger.warning(f"⚠️ Could not load details for {user_id}: {e}")
    return details

"""Client-side application state.

Persistence only happens through explicit calls. Loading data moves the
store into the ``loaded`` state and never triggers a save; saving before
that point is refused, so an empty pre-load list can never overwrite the
server copy.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional
from uuid import uuid4

from app.client.api import IdeaBoardAPI

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = (
    "title", "description", "details", "tags", "images", "websiteUrl", "priority", "status", "isShared",
)


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass
class Session:
    user_id: str
    display_name: str
    email: str


@dataclass
class AppState:
    session: Optional[Session] = None
    user_ideas: list[dict] = field(default_factory=list)
    shared_ideas: list[dict] = field(default_factory=list)
    following_feed: list[dict] = field(default_factory=list)
    public_feed: list[dict] = field(default_factory=list)
    following: list[str] = field(default_factory=list)
    bugs: list[dict] = field(default_factory=list)
    loaded: bool = False


class IdeaBoardStore:
    def __init__(self, api: IdeaBoardAPI):
        self.api = api
        self.state = AppState()

    # === Session ===
    def login(self, email: str, password: str) -> Session:
        data = self.api.login(email, password)
        user = data["user"]
        self.state = AppState(session=Session(user_id=user["id"], display_name=user["name"], email=user["email"]))
        self.load()
        return self.state.session

    def signup(self, email: str, password: str, name: str) -> Session:
        self.api.signup(email, password, name)
        return self.login(email, password)

    def logout(self):
        self.api.logout()
        self.state = AppState()

    def _require_session(self) -> Session:
        if not self.state.session:
            raise RuntimeError("Not logged in")
        return self.state.session

    # === Loading ===
    def load(self):
        self._require_session()
        self.state.loaded = False
        data = self.api.get_ideas()
        self.state.user_ideas = data.get("userIdeas") or []
        self.state.shared_ideas = data.get("sharedIdeas") or []
        self.state.following = self.api.get_following()
        self.state.following_feed = self.api.get_following_feed()
        self.state.public_feed = self.api.get_public_feed()
        self.state.loaded = True

    def refresh_feeds(self):
        self.state.shared_ideas = self.api.get_ideas().get("sharedIdeas") or []
        self.state.following_feed = self.api.get_following_feed()
        self.state.public_feed = self.api.get_public_feed()

    def save(self):
        if not self.state.loaded:
            raise RuntimeError("Ideas are not loaded yet")
        self.api.save_ideas(self.state.user_ideas)

    # === Ideas ===
    def add_idea(self, **fields) -> dict:
        session = self._require_session()
        now = now_iso()
        idea = {
            "title": "",
            "description": "",
            "details": "",
            "tags": [],
            "images": [],
            "priority": "medium",
            "status": "idea",
            "isShared": False,
            **{k: v for k, v in fields.items() if k in EDITABLE_FIELDS},
            "id": str(uuid4()),
            "ownerId": session.user_id,
            "ownerName": session.display_name,
            "collaborators": [],
            "createdAt": now,
            "updatedAt": now,
        }
        self.state.user_ideas = [idea] + self.state.user_ideas
        self.save()
        if idea["isShared"]:
            self.refresh_feeds()
        return idea

    def _find(self, idea_id: str) -> dict:
        for idea in self.state.user_ideas:
            if idea["id"] == idea_id:
                return idea
        raise KeyError(idea_id)

    def update_idea(self, idea_id: str, **updates) -> dict:
        """Apply an edit and save. Feeds are re-fetched only when the shared flag flips."""
        current = self._find(idea_id)
        updated = {
            **current,
            **{k: v for k, v in updates.items() if k in EDITABLE_FIELDS},
            "updatedAt": now_iso(),
        }
        self.state.user_ideas = [updated if i["id"] == idea_id else i for i in self.state.user_ideas]
        self.save()
        if bool(current.get("isShared")) != bool(updated.get("isShared")):
            self.refresh_feeds()
        return updated

    def delete_idea(self, idea_id: str):
        removed = self._find(idea_id)
        self.state.user_ideas = [i for i in self.state.user_ideas if i["id"] != idea_id]
        self.save()
        if removed.get("isShared"):
            self.refresh_feeds()

    # === Collaborators ===
    def add_collaborator(self, idea_id: str, user_id: str, name: str):
        self.api.add_collaborator(idea_id, user_id, name)
        idea = self._find(idea_id)
        collaborators = idea.get("collaborators") or []
        if user_id != idea.get("ownerId") and all(c["id"] != user_id for c in collaborators):
            idea["collaborators"] = collaborators + [{"id": user_id, "name": name}]

    def remove_collaborator(self, idea_id: str, user_id: str):
        self.api.remove_collaborator(idea_id, user_id)
        idea = self._find(idea_id)
        idea["collaborators"] = [c for c in idea.get("collaborators") or [] if c["id"] != user_id]

    # === Social ===
    def follow(self, user_id: str):
        self.api.follow(user_id)
        self.state.following = self.api.get_following()
        self.state.following_feed = self.api.get_following_feed()

    def unfollow(self, user_id: str):
        self.api.unfollow(user_id)
        self.state.following = self.api.get_following()
        self.state.following_feed = self.api.get_following_feed()

    def search_users(self, query: str) -> list[dict]:
        # mirrors the two-character minimum of the search box
        if len(query.strip()) < 2:
            return []
        return self.api.search_users(query)

    def filter_ideas(self, query: str = "", status: str = "all", priority: str = "all") -> list[dict]:
        """Own ideas matching text in title, description or tags, plus status and priority."""
        term = query.strip().lower()

        def matches(idea: dict) -> bool:
            if term and not (
                term in (idea.get("title") or "").lower()
                or term in (idea.get("description") or "").lower()
                or any(term in tag.lower() for tag in idea.get("tags") or [])
            ):
                return False
            if status != "all" and idea.get("status") != status:
                return False
            return priority == "all" or idea.get("priority") == priority

        return [idea for idea in self.state.user_ideas if matches(idea)]

    # === Bugs ===
    def load_bugs(self) -> list[dict]:
        self.state.bugs = self.api.list_bugs()
        return self.state.bugs

    def report_bug(self, title: str, description: str, name: str = "", email: str = "") -> dict:
        session = self.state.session
        user_info = {
            "name": name or (session.display_name if session else ""),
            "email": email or (session.email if session else ""),
        }
        bug = self.api.create_bug(title, description, user_info)
        self.load_bugs()
        return bug

    def filter_bugs(self, status: str = "all") -> list[dict]:
        if status == "all":
            return list(self.state.bugs)
        return [bug for bug in self.state.bugs if bug.get("status") == status]

    def bug_counts(self) -> dict:
        counts = {"all": len(self.state.bugs), "open": 0, "in-progress": 0, "closed": 0}
        for bug in self.state.bugs:
            if bug.get("status") in counts:
                counts[bug["status"]] += 1
        return counts

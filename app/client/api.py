"""HTTP client for the IdeaBoard API."""

import logging
from typing import Any, Optional

import requests

logger = logging.getLogger(__name__)


class APIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class IdeaBoardAPI:
    def __init__(self, base_url: str, anon_key: str = "", session: Optional[requests.Session] = None, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.anon_key = anon_key
        self.access_token: Optional[str] = None
        self.http = session or requests.Session()
        self.timeout = timeout

    def _headers(self) -> dict:
        token = self.access_token or self.anon_key
        return {"Authorization": f"Bearer {token}"} if token else {}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        res = self.http.request(
            method, f"{self.base_url}{path}", headers=self._headers(), timeout=self.timeout, **kwargs
        )
        try:
            data = res.json()
        except ValueError:
            data = {}
        if not res.ok:
            message = data.get("error") if isinstance(data, dict) else None
            logger.error(f"❌ {method} {path} failed: {res.status_code} {message}")
            raise APIError(res.status_code, message or res.reason or "Request failed")
        return data

    # === Auth ===
    def signup(self, email: str, password: str, name: str) -> dict:
        return self._request("POST", "/signup", json={"email": email, "password": password, "name": name})["user"]

    def login(self, email: str, password: str) -> dict:
        data = self._request("POST", "/login", json={"email": email, "password": password})
        self.access_token = data["access_token"]
        return data

    def logout(self):
        self.access_token = None

    def reset_password(self, email: str) -> None:
        self._request("POST", "/reset-password", json={"email": email})

    # === Ideas ===
    def get_ideas(self) -> dict:
        return self._request("GET", "/ideas")

    def save_ideas(self, ideas: list[dict]) -> None:
        self._request("POST", "/ideas", json={"ideas": ideas})

    def get_user_ideas(self, user_id: str) -> list[dict]:
        return self._request("GET", f"/users/{user_id}/ideas")["ideas"]

    def add_collaborator(self, idea_id: str, collaborator_id: str, collaborator_name: str) -> None:
        self._request(
            "POST",
            f"/ideas/{idea_id}/collaborators",
            json={"collaboratorId": collaborator_id, "collaboratorName": collaborator_name},
        )

    def remove_collaborator(self, idea_id: str, collaborator_id: str) -> None:
        self._request("DELETE", f"/ideas/{idea_id}/collaborators/{collaborator_id}")

    # === Social ===
    def search_users(self, query: str) -> list[dict]:
        return self._request("GET", "/users/search", params={"q": query})["users"]

    def follow(self, user_id: str) -> None:
        self._request("POST", "/follow", json={"targetUserId": user_id})

    def unfollow(self, user_id: str) -> None:
        self._request("POST", "/unfollow", json={"targetUserId": user_id})

    def get_following(self) -> list[str]:
        return self._request("GET", "/following")["following"]

    def get_following_details(self) -> list[dict]:
        return self._request("GET", "/following/details")["users"]

    def get_following_feed(self) -> list[dict]:
        return self._request("GET", "/feed/following")["ideas"]

    def get_public_feed(self) -> list[dict]:
        return self._request("GET", "/feed/public")["ideas"]

    # === Bugs ===
    def create_bug(self, title: str, description: str, user_info: Optional[dict] = None) -> dict:
        body = {"title": title, "description": description, "userInfo": user_info}
        return self._request("POST", "/bugs", json=body)["bug"]

    def list_bugs(self) -> list[dict]:
        return self._request("GET", "/bugs")["bugs"]

    def add_comment(self, bug_id: str, text: str, user_info: Optional[dict] = None) -> dict:
        return self._request("POST", f"/bugs/{bug_id}/comments", json={"text": text, "userInfo": user_info})["comment"]

    def list_comments(self, bug_id: str) -> list[dict]:
        return self._request("GET", f"/bugs/{bug_id}/comments")["comments"]

    def update_bug_status(self, bug_id: str, status: str) -> None:
        self._request("PATCH", f"/bugs/{bug_id}/status", json={"status": status})

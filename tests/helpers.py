from fastapi.testclient import TestClient

ANON_HEADERS = {"Authorization": "Bearer anon-test-key"}


def register(client: TestClient, email: str, name: str, password: str = "secret123") -> tuple[str, dict]:
    res = client.post("/signup", json={"email": email, "password": password, "name": name})
    assert res.status_code == 200, res.text
    user_id = res.json()["user"]["id"]
    res = client.post("/login", json={"email": email, "password": password})
    assert res.status_code == 200, res.text
    return user_id, {"Authorization": f"Bearer {res.json()['access_token']}"}


def make_idea(owner_id: str, idea_id: str, updated_at: str = "2024-01-01T00:00:00.000Z", **fields) -> dict:
    idea = {
        "id": idea_id,
        "title": f"Idea {idea_id}",
        "description": "A description",
        "details": "",
        "tags": ["ui"],
        "images": [],
        "priority": "medium",
        "status": "idea",
        "isShared": False,
        "ownerId": owner_id,
        "ownerName": "",
        "collaborators": [],
        "createdAt": "2024-01-01T00:00:00.000Z",
        "updatedAt": updated_at,
    }
    idea.update(fields)
    return idea


def save(client: TestClient, headers: dict, ideas: list[dict]):
    res = client.post("/ideas", json={"ideas": ideas}, headers=headers)
    assert res.status_code == 200, res.text
    assert res.json() == {"success": True}

from app.services import identity

from helpers import ANON_HEADERS, register


def test_signup_returns_user(client):
    res = client.post("/signup", json={"email": "Ann@Example.com", "password": "secret123", "name": "Ann"})
    assert res.status_code == 200
    user = res.json()["user"]
    assert user["email"] == "ann@example.com"
    assert user["name"] == "Ann"
    assert user["id"]


def test_signup_requires_email_and_password(client):
    res = client.post("/signup", json={"name": "Ann"})
    assert res.status_code == 400
    assert "error" in res.json()


def test_signup_duplicate_email_is_rejected(client, alice):
    res = client.post("/signup", json={"email": "alice@example.com", "password": "secret123", "name": "Other"})
    assert res.status_code == 400
    assert res.json()["error"]


def test_login_with_wrong_password(client, alice):
    res = client.post("/login", json={"email": "alice@example.com", "password": "wrong-password"})
    assert res.status_code == 401


def test_me_resolves_session(client, alice):
    user_id, headers = alice
    res = client.get("/me", headers=headers)
    assert res.json() == {"id": user_id, "name": "Alice", "email": "alice@example.com"}


def test_protected_route_without_token(client):
    res = client.get("/ideas")
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}


def test_protected_route_with_anon_key(client):
    res = client.get("/following", headers=ANON_HEADERS)
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}


def test_protected_route_with_garbage_token(client):
    res = client.get("/feed/following", headers={"Authorization": "Bearer not-a-jwt"})
    assert res.status_code == 401
    assert res.json() == {"error": "Unauthorized"}


def test_reset_password_never_leaks_existence(client, alice):
    known = client.post("/reset-password", json={"email": "alice@example.com"})
    unknown = client.post("/reset-password", json={"email": "nobody@example.com"})
    assert known.status_code == unknown.status_code == 200
    assert known.json() == unknown.json() == {"success": True}


def test_reset_password_confirm(client, db, alice):
    token = identity.request_password_reset(db, "alice@example.com")

    res = client.post("/reset-password/confirm", json={"token": token, "new_password": "brand-new-pass"})
    assert res.status_code == 200

    assert client.post("/login", json={"email": "alice@example.com", "password": "brand-new-pass"}).status_code == 200
    assert client.post("/login", json={"email": "alice@example.com", "password": "secret123"}).status_code == 401


def test_reset_token_is_not_a_session(client, db, alice):
    token = identity.request_password_reset(db, "alice@example.com")
    res = client.get("/ideas", headers={"Authorization": f"Bearer {token}"})
    assert res.status_code == 401


def test_user_search(client, alice, bob, carol):
    _, headers = alice
    res = client.get("/users/search", params={"q": "BO"}, headers=headers)
    assert res.status_code == 200
    assert [u["name"] for u in res.json()["users"]] == ["Bob"]


def test_user_search_excludes_caller_and_caps_results(client, alice):
    _, headers = alice
    for i in range(12):
        register(client, f"user{i}@example.com", f"User {i}")

    res = client.get("/users/search", params={"q": "example.com"}, headers=headers)
    users = res.json()["users"]
    assert len(users) == 10
    assert all(u["email"] != "alice@example.com" for u in users)
    assert set(users[0]) == {"id", "name", "email"}


def test_user_search_is_public(client, alice):
    res = client.get("/users/search", params={"q": "alice"})
    assert res.status_code == 200
    assert res.json()["users"][0]["email"] == "alice@example.com"


def test_empty_user_search_lists_users_without_caller(client, alice, bob, carol):
    _, headers = alice
    res = client.get("/users/search", params={"q": ""}, headers=headers)
    assert res.status_code == 200
    assert [u["name"] for u in res.json()["users"]] == ["Bob", "Carol"]

import pytest

from app.client.store import IdeaBoardStore


class FakeAPI:
    """In-memory stand-in for IdeaBoardAPI that records what the store sends."""

    def __init__(self):
        self.saved = []
        self.server_ideas = []
        self.following = []
        self.public_feed_calls = 0
        self.bugs = []

    def login(self, email, password):
        return {"access_token": "t", "user": {"id": "u1", "name": "Alice", "email": email}}

    def signup(self, email, password, name):
        return {"id": "u1", "email": email, "name": name}

    def logout(self):
        pass

    def get_ideas(self):
        return {"userIdeas": list(self.server_ideas), "sharedIdeas": []}

    def save_ideas(self, ideas):
        self.saved.append([dict(i) for i in ideas])
        self.server_ideas = list(ideas)

    def get_following(self):
        return list(self.following)

    def get_following_feed(self):
        return []

    def get_public_feed(self):
        self.public_feed_calls += 1
        return [i for i in self.server_ideas if i.get("isShared")]

    def follow(self, user_id):
        self.following.append(user_id)

    def unfollow(self, user_id):
        self.following.remove(user_id)

    def add_collaborator(self, idea_id, user_id, name):
        pass

    def remove_collaborator(self, idea_id, user_id):
        pass

    def search_users(self, query):
        return [{"id": "u2", "name": "Bob", "email": "bob@example.com"}]

    def list_bugs(self):
        return list(self.bugs)

    def create_bug(self, title, description, user_info=None):
        bug = {"id": f"b{len(self.bugs) + 1}", "title": title, "description": description,
               "status": "open", "userInfo": user_info}
        self.bugs.append(bug)
        return bug


@pytest.fixture
def api():
    return FakeAPI()


@pytest.fixture
def store(api):
    s = IdeaBoardStore(api)
    s.login("alice@example.com", "pw")
    return s


def test_login_loads_without_saving(api, store):
    assert store.state.loaded is True
    assert store.state.session.user_id == "u1"
    assert api.saved == []


def test_save_before_load_is_refused(api):
    s = IdeaBoardStore(api)
    with pytest.raises(RuntimeError):
        s.save()


def test_add_idea_prepends_and_saves(api, store):
    first = store.add_idea(title="One")
    second = store.add_idea(title="Two", priority="high")

    assert [i["id"] for i in store.state.user_ideas] == [second["id"], first["id"]]
    assert second["ownerId"] == "u1"
    assert second["ownerName"] == "Alice"
    assert second["createdAt"] == second["updatedAt"]
    assert api.saved[-1] == store.state.user_ideas


def test_toggling_share_refreshes_feeds(api, store):
    idea = store.add_idea(title="One")
    calls = api.public_feed_calls

    updated = store.update_idea(idea["id"], isShared=True)

    assert api.public_feed_calls == calls + 1
    assert [i["id"] for i in store.state.public_feed] == [idea["id"]]
    assert updated["updatedAt"] >= idea["updatedAt"]
    assert updated["createdAt"] == idea["createdAt"]


def test_id_and_owner_cannot_be_edited(store):
    idea = store.add_idea(title="One")
    updated = store.update_idea(idea["id"], id="other", ownerId="someone", title="Renamed")
    assert updated["id"] == idea["id"]
    assert updated["ownerId"] == "u1"
    assert updated["title"] == "Renamed"


def test_delete_idea(api, store):
    idea = store.add_idea(title="One")
    store.delete_idea(idea["id"])
    assert store.state.user_ideas == []
    assert api.saved[-1] == []


def test_collaborators_are_tracked_locally(store):
    idea = store.add_idea(title="One")
    store.add_collaborator(idea["id"], "u2", "Bob")
    store.add_collaborator(idea["id"], "u2", "Bob")
    assert store.state.user_ideas[0]["collaborators"] == [{"id": "u2", "name": "Bob"}]

    store.remove_collaborator(idea["id"], "u2")
    assert store.state.user_ideas[0]["collaborators"] == []


def test_follow_and_unfollow_refresh_following(store):
    store.follow("u2")
    assert store.state.following == ["u2"]
    store.unfollow("u2")
    assert store.state.following == []


def test_short_search_queries_return_nothing(store):
    assert store.search_users("b") == []
    assert store.search_users("bo")[0]["name"] == "Bob"


def test_logout_resets_state(store):
    store.add_idea(title="One")
    store.logout()
    assert store.state.session is None
    assert store.state.user_ideas == []
    assert store.state.loaded is False


def test_editing_a_shared_idea_does_not_refresh_feeds(api, store):
    idea = store.add_idea(title="One")
    store.update_idea(idea["id"], isShared=True)
    calls = api.public_feed_calls

    store.update_idea(idea["id"], title="Renamed")

    assert api.public_feed_calls == calls


def test_filter_ideas(store):
    store.add_idea(title="Dark mode", tags=["ui"], status="planned")
    store.add_idea(title="Export", description="CSV download", priority="high")

    assert [i["title"] for i in store.filter_ideas("DARK")] == ["Dark mode"]
    assert [i["title"] for i in store.filter_ideas("csv")] == ["Export"]
    assert [i["title"] for i in store.filter_ideas("UI")] == ["Dark mode"]
    assert [i["title"] for i in store.filter_ideas(status="planned")] == ["Dark mode"]
    assert [i["title"] for i in store.filter_ideas(priority="high")] == ["Export"]
    assert store.filter_ideas("dark", priority="high") == []
    assert len(store.filter_ideas()) == 2


def test_report_bug_uses_session_identity_and_reloads(api, store):
    bug = store.report_bug("Crash", "On save")

    assert bug["userInfo"] == {"name": "Alice", "email": "alice@example.com"}
    assert store.state.bugs == [bug]


def test_bug_filters_and_counts(api, store):
    api.bugs = [
        {"id": "b1", "status": "open"},
        {"id": "b2", "status": "closed"},
        {"id": "b3", "status": "open"},
    ]
    store.load_bugs()

    assert [b["id"] for b in store.filter_bugs("open")] == ["b1", "b3"]
    assert len(store.filter_bugs()) == 3
    assert store.bug_counts() == {"all": 3, "open": 2, "in-progress": 0, "closed": 1}

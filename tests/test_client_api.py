from unittest.mock import MagicMock

import pytest

from app.client.api import APIError, IdeaBoardAPI


def _response(status_code, body):
    res = MagicMock()
    res.status_code = status_code
    res.ok = status_code < 400
    res.reason = "Bad Request" if status_code == 400 else "OK"
    res.json.return_value = body
    return res


@pytest.fixture
def http():
    return MagicMock()


def test_anon_key_is_sent_until_login(http):
    api = IdeaBoardAPI("http://api.test/", anon_key="anon", session=http)
    http.request.return_value = _response(200, {"ideas": []})

    api.get_public_feed()
    assert http.request.call_args.kwargs["headers"] == {"Authorization": "Bearer anon"}
    assert http.request.call_args.args == ("GET", "http://api.test/feed/public")

    http.request.return_value = _response(200, {"access_token": "jwt", "user": {}})
    api.login("a@x.com", "pw")
    http.request.return_value = _response(200, {"following": ["u2"]})

    assert api.get_following() == ["u2"]
    assert http.request.call_args.kwargs["headers"] == {"Authorization": "Bearer jwt"}


def test_error_message_is_surfaced(http):
    api = IdeaBoardAPI("http://api.test", session=http)
    http.request.return_value = _response(400, {"error": "Cannot follow yourself"})

    with pytest.raises(APIError) as exc:
        api.follow("me")

    assert exc.value.status_code == 400
    assert exc.value.message == "Cannot follow yourself"
    assert http.request.call_args.kwargs["json"] == {"targetUserId": "me"}


def test_non_json_error_falls_back_to_reason(http):
    api = IdeaBoardAPI("http://api.test", session=http)
    res = _response(400, None)
    res.json.side_effect = ValueError("no json")
    http.request.return_value = res

    with pytest.raises(APIError) as exc:
        api.list_bugs()
    assert exc.value.message == "Bad Request"

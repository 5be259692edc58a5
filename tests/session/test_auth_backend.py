"""
Unit tests for the GoTrue HTTP auth backend.

requests is replaced with a mock session; no network access.
"""

import json
import time
from unittest.mock import MagicMock

import pytest
import requests

from cinefile.errors import AuthError
from cinefile.session.auth_backend import HttpAuthBackend
from cinefile.storage.connection import DatabaseManager
from cinefile.storage.kv_store import RecordStore


def make_response(status=200, body=None, reason="OK"):
    response = MagicMock()
    response.status_code = status
    response.ok = status < 400
    response.reason = reason
    response.content = json.dumps(body).encode() if body is not None else b""
    response.json.return_value = body
    return response


def session_body(expires_in=3600, access_token="access-1"):
    return {
        "access_token": access_token,
        "refresh_token": "refresh-1",
        "token_type": "bearer",
        "expires_in": expires_in,
        "user": {"id": "uid-1", "email": "a@x.com"},
    }


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def record_store():
    manager = DatabaseManager(":memory:")
    yield RecordStore(manager)
    manager.close()


@pytest.fixture
def backend(http, record_store):
    return HttpAuthBackend("https://project.example.co/", "anon-key", storage=record_store, http=http)


class TestSignIn:

    def test_sign_in_posts_password_grant(self, backend, http):
        http.request.return_value = make_response(body=session_body())

        session = backend.sign_in_with_password("a@x.com", "secret1")

        method, url = http.request.call_args.args
        kwargs = http.request.call_args.kwargs
        assert method == "POST"
        assert url == "https://project.example.co/auth/v1/token"
        assert kwargs["params"] == {"grant_type": "password"}
        assert kwargs["json"] == {"email": "a@x.com", "password": "secret1"}
        assert kwargs["headers"]["apikey"] == "anon-key"
        assert session.user_id == "uid-1"
        assert session.expires_at > time.time()

    def test_sign_in_notifies_and_persists(self, backend, http, record_store):
        http.request.return_value = make_response(body=session_body())
        events = []
        backend.on_auth_state_change(lambda event, session: events.append(event))

        backend.sign_in_with_password("a@x.com", "secret1")

        assert events == ["SIGNED_IN"]
        assert record_store.get("auth_session")["access_token"] == "access-1"

    def test_sign_in_error_message_from_body(self, backend, http):
        http.request.return_value = make_response(
            status=400,
            body={"error": "invalid_grant", "error_description": "Invalid login credentials"},
            reason="Bad Request",
        )
        with pytest.raises(AuthError) as exc_info:
            backend.sign_in_with_password("a@x.com", "wrong")
        assert exc_info.value.message == "Invalid login credentials"
        assert exc_info.value.status_code == 400

    def test_network_error(self, backend, http):
        http.request.side_effect = requests.ConnectionError("unreachable")
        with pytest.raises(AuthError, match="Network error"):
            backend.sign_in_with_password("a@x.com", "secret1")


class TestSignUp:

    def test_confirmation_pending(self, backend, http):
        http.request.return_value = make_response(body={"id": "uid-1", "email": "a@x.com"})
        assert backend.sign_up("a@x.com", "secret1") is None
        assert backend.get_session() is None

    def test_immediate_session(self, backend, http):
        http.request.return_value = make_response(body=session_body())
        assert backend.sign_up("a@x.com", "secret1").user_email == "a@x.com"


class TestSessionLifecycle:

    def test_sign_out_clears_even_on_failure(self, backend, http, record_store):
        http.request.return_value = make_response(body=session_body())
        backend.sign_in_with_password("a@x.com", "secret1")
        events = []
        backend.on_auth_state_change(lambda event, session: events.append((event, session)))

        http.request.return_value = make_response(status=500, body={"msg": "oops"}, reason="Server Error")
        with pytest.raises(AuthError):
            backend.sign_out()

        assert backend.get_session() is None
        assert record_store.get("auth_session") is None
        assert events == [("SIGNED_OUT", None)]

    def test_session_restored_from_storage(self, http, record_store):
        first = HttpAuthBackend("https://project.example.co", "anon-key", storage=record_store, http=http)
        http.request.return_value = make_response(body=session_body())
        first.sign_in_with_password("a@x.com", "secret1")

        second = HttpAuthBackend("https://project.example.co", "anon-key", storage=record_store, http=http)
        assert second.get_session().access_token == "access-1"

    def test_expired_session_refreshed(self, backend, http):
        http.request.return_value = make_response(body=session_body(expires_in=0))
        backend.sign_in_with_password("a@x.com", "secret1")
        events = []
        backend.on_auth_state_change(lambda event, session: events.append(event))

        http.request.return_value = make_response(body=session_body(access_token="access-2"))
        session = backend.get_session()

        assert session.access_token == "access-2"
        assert http.request.call_args.kwargs["params"] == {"grant_type": "refresh_token"}
        assert events == ["TOKEN_REFRESHED"]

    def test_failed_refresh_signs_out(self, backend, http):
        http.request.return_value = make_response(body=session_body(expires_in=0))
        backend.sign_in_with_password("a@x.com", "secret1")
        events = []
        backend.on_auth_state_change(lambda event, session: events.append(event))

        http.request.return_value = make_response(status=400, body={"msg": "Invalid Refresh Token"})
        assert backend.get_session() is None
        assert events == ["SIGNED_OUT"]

    def test_unsubscribe(self, backend, http):
        events = []
        subscription = backend.on_auth_state_change(lambda event, session: events.append(event))
        subscription.unsubscribe()
        http.request.return_value = make_response(body=session_body())
        backend.sign_in_with_password("a@x.com", "secret1")
        assert events == []


class TestAccountOperations:

    def test_reset_password(self, backend, http):
        http.request.return_value = make_response(body={})
        backend.reset_password_for_email("a@x.com", redirect_to="https://app.example.com/auth/reset-password")
        kwargs = http.request.call_args.kwargs
        assert http.request.call_args.args[1].endswith("/auth/v1/recover")
        assert kwargs["params"] == {"redirect_to": "https://app.example.com/auth/reset-password"}
        assert kwargs["json"] == {"email": "a@x.com"}

    def test_update_user_requires_session(self, backend):
        with pytest.raises(AuthError, match="session missing"):
            backend.update_user(password="newsecret")

    def test_update_user_sends_bearer_token(self, backend, http):
        http.request.return_value = make_response(body=session_body())
        backend.sign_in_with_password("a@x.com", "secret1")
        events = []
        backend.on_auth_state_change(lambda event, session: events.append(event))

        http.request.return_value = make_response(
            body={"id": "uid-1", "email": "a@x.com", "user_metadata": {"username": "ann"}}
        )
        user = backend.update_user(data={"username": "ann"})

        kwargs = http.request.call_args.kwargs
        assert http.request.call_args.args[0] == "PUT"
        assert kwargs["headers"]["Authorization"] == "Bearer access-1"
        assert kwargs["json"] == {"data": {"username": "ann"}}
        assert user["user_metadata"]["username"] == "ann"
        assert backend.get_session().user["user_metadata"]["username"] == "ann"
        assert events == ["USER_UPDATED"]

    def test_requires_url_and_key(self):
        with pytest.raises(ValueError):
            HttpAuthBackend("", "key")

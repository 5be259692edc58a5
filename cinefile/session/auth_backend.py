"""
Hosted authentication backend.

`AuthBackend` describes the operations a RemoteSessionStore consumes,
plus the auth state subscription. `HttpAuthBackend` talks to a
GoTrue-compatible REST service (the auth API used by Supabase projects)
with `requests`.

There is no retry and no cancellation: a failed call raises AuthError and
must be re-initiated by the user.
"""

import logging
import time
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

import requests
from pydantic import ValidationError

from cinefile.errors import AuthError
from cinefile.models import AuthSession
from cinefile.storage.keys import AUTH_SESSION_KEY
from cinefile.storage.kv_store import RecordStore

logger = logging.getLogger(__name__)

SIGNED_IN = "SIGNED_IN"
SIGNED_OUT = "SIGNED_OUT"
TOKEN_REFRESHED = "TOKEN_REFRESHED"
USER_UPDATED = "USER_UPDATED"

AuthStateCallback = Callable[[str, Optional[AuthSession]], None]

# Sessions this close to expiry are refreshed before being handed out.
EXPIRY_MARGIN_SECONDS = 10


class AuthSubscription:
    """Handle returned by `on_auth_state_change`."""

    def __init__(self, backend: "AuthBackend", callback: AuthStateCallback):
        self._backend = backend
        self.callback = callback

    def unsubscribe(self) -> None:
        self._backend._remove_subscription(self)


class AuthBackend(ABC):
    """Operations offered by a hosted auth service."""

    def __init__(self):
        self._subscriptions: List[AuthSubscription] = []

    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthSubscription:
        """Register `callback(event, session)`; session is None after sign-out."""
        subscription = AuthSubscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def _remove_subscription(self, subscription: AuthSubscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def _notify(self, event: str, session: Optional[AuthSession]) -> None:
        logger.debug("Auth state change: %s", event)
        for subscription in list(self._subscriptions):
            subscription.callback(event, session)

    @abstractmethod
    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        ...

    @abstractmethod
    def sign_up(self, email: str, password: str) -> Optional[AuthSession]:
        """Create an account; returns None when e-mail confirmation is pending."""

    @abstractmethod
    def sign_out(self) -> None:
        ...

    @abstractmethod
    def reset_password_for_email(self, email: str, redirect_to: Optional[str] = None) -> None:
        ...

    @abstractmethod
    def update_user(self, password: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        ...

    @abstractmethod
    def get_session(self) -> Optional[AuthSession]:
        ...


def _error_message(response: requests.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        for field in ("error_description", "msg", "message", "error"):
            if body.get(field):
                return str(body[field])
    return response.reason or f"Request failed with status {response.status_code}"


class HttpAuthBackend(AuthBackend):
    """
    GoTrue REST client.

    Args:
        url: Project URL; endpoints live under '<url>/auth/v1'
        api_key: Public (anon) API key sent as the 'apikey' header
        storage: Optional RecordStore used to keep the session across restarts
        timeout: Socket timeout in seconds for each request
        http: Optional requests.Session to use
    """

    def __init__(
        self,
        url: str,
        api_key: str,
        storage: Optional[RecordStore] = None,
        timeout: float = 10,
        http: Optional[requests.Session] = None,
    ):
        super().__init__()
        if not url or not api_key:
            raise ValueError("Auth URL and API key are required")
        self.url = url.rstrip("/")
        self.api_key = api_key
        self.storage = storage
        self.timeout = timeout
        self.http = http or requests.Session()
        self._session: Optional[AuthSession] = None
        self._loaded = False

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        body = self._request(
            "POST", "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        session = self._parse_session(body)
        self._store_session(session)
        self._notify(SIGNED_IN, session)
        return session

    def sign_up(self, email: str, password: str) -> Optional[AuthSession]:
        body = self._request("POST", "/signup", json={"email": email, "password": password})
        if "access_token" not in body:
            logger.info("Sign-up for '%s' awaits e-mail confirmation", email)
            return None
        session = self._parse_session(body)
        self._store_session(session)
        self._notify(SIGNED_IN, session)
        return session

    def sign_out(self) -> None:
        session = self._current()
        try:
            if session is not None:
                self._request("POST", "/logout", token=session.access_token)
        finally:
            self._store_session(None)
            self._notify(SIGNED_OUT, None)

    def reset_password_for_email(self, email: str, redirect_to: Optional[str] = None) -> None:
        params = {"redirect_to": redirect_to} if redirect_to else None
        self._request("POST", "/recover", params=params, json={"email": email})

    def update_user(self, password: Optional[str] = None, data: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        session = self.get_session()
        if session is None:
            raise AuthError("Auth session missing")
        payload: Dict[str, Any] = {}
        if password is not None:
            payload["password"] = password
        if data is not None:
            payload["data"] = data
        user = self._request("PUT", "/user", json=payload, token=session.access_token)
        session = session.model_copy(update={"user": user})
        self._store_session(session)
        self._notify(USER_UPDATED, session)
        return user

    def get_session(self) -> Optional[AuthSession]:
        session = self._current()
        if session is None:
            return None
        if session.expires_at is None or session.expires_at > time.time() + EXPIRY_MARGIN_SECONDS:
            return session
        if not session.refresh_token:
            self._store_session(None)
            self._notify(SIGNED_OUT, None)
            return None
        try:
            body = self._request(
                "POST", "/token",
                params={"grant_type": "refresh_token"},
                json={"refresh_token": session.refresh_token},
            )
            refreshed = self._parse_session(body)
        except AuthError as e:
            logger.warning("Session refresh failed: %s", e.message)
            self._store_session(None)
            self._notify(SIGNED_OUT, None)
            return None
        self._store_session(refreshed)
        self._notify(TOKEN_REFRESHED, refreshed)
        return refreshed

    def _current(self) -> Optional[AuthSession]:
        if not self._loaded:
            self._loaded = True
            if self.storage is not None:
                record = self.storage.get(AUTH_SESSION_KEY)
                if record is not None:
                    try:
                        self._session = AuthSession.model_validate(record)
                    except ValidationError as e:
                        logger.warning("Discarding malformed stored auth session: %s", e)
                        self.storage.remove(AUTH_SESSION_KEY)
        return self._session

    def _store_session(self, session: Optional[AuthSession]) -> None:
        self._loaded = True
        self._session = session
        if self.storage is None:
            return
        if session is None:
            self.storage.remove(AUTH_SESSION_KEY)
        else:
            self.storage.put(AUTH_SESSION_KEY, session.model_dump())

    @staticmethod
    def _parse_session(body: Dict[str, Any]) -> AuthSession:
        if "expires_at" not in body and body.get("expires_in") is not None:
            body = {**body, "expires_at": time.time() + float(body["expires_in"])}
        try:
            return AuthSession.model_validate(body)
        except ValidationError as e:
            raise AuthError(f"Unexpected auth response: {e}") from e

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
        token: Optional[str] = None,
    ) -> Dict[str, Any]:
        headers = {"apikey": self.api_key}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        try:
            r = self.http.request(
                method,
                f"{self.url}/auth/v1{path}",
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise AuthError(f"Network error: {e}") from e
        if not r.ok:
            raise AuthError(_error_message(r), status_code=r.status_code)
        if not r.content:
            return {}
        try:
            body = r.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}

"""
Session API endpoints (sign-in, sign-up, sign-out, profile).
"""

from fastapi import APIRouter, Depends, HTTPException

from cinefile.api.dependencies import get_session_store
from cinefile.api.models.session import (
    CredentialsRequest,
    PasswordResetRequest,
    PasswordUpdateRequest,
    SessionStateResponse,
    UsernameUpdateRequest,
)
from cinefile.errors import AuthError, CredentialsValidationError
from cinefile.session import SessionStore
from cinefile.validation import validate_credentials

router = APIRouter(prefix="/api/session", tags=["session"])


def _state(store: SessionStore) -> SessionStateResponse:
    state = store.state
    return SessionStateResponse(user=state.identity, loading=state.loading, error=state.error)


def _authenticate(store: SessionStore, body: CredentialsRequest, sign_up: bool) -> SessionStateResponse:
    try:
        validate_credentials(body.email, body.password)
    except CredentialsValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    operation = store.sign_up if sign_up else store.sign_in
    try:
        operation(body.email, body.password)
    except AuthError as e:
        raise HTTPException(status_code=401, detail=e.message)
    if store.error:
        raise HTTPException(status_code=400, detail=store.error)
    return _state(store)


@router.get("", response_model=SessionStateResponse)
def get_session(store: SessionStore = Depends(get_session_store)):
    """Current identity and flags."""
    return _state(store)


@router.post("/sign-in", response_model=SessionStateResponse)
def sign_in(body: CredentialsRequest, store: SessionStore = Depends(get_session_store)):
    return _authenticate(store, body, sign_up=False)


@router.post("/sign-up", response_model=SessionStateResponse)
def sign_up(body: CredentialsRequest, store: SessionStore = Depends(get_session_store)):
    """Create an account. With a hosted backend the user may need to confirm by e-mail first."""
    return _authenticate(store, body, sign_up=True)


@router.post("/sign-out", response_model=SessionStateResponse)
def sign_out(store: SessionStore = Depends(get_session_store)):
    try:
        store.sign_out()
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return _state(store)


@router.post("/restore", response_model=SessionStateResponse)
def restore_session(store: SessionStore = Depends(get_session_store)):
    """Reload the persisted session."""
    store.restore_session()
    return _state(store)


@router.put("/username", response_model=SessionStateResponse)
def update_username(body: UsernameUpdateRequest, store: SessionStore = Depends(get_session_store)):
    if store.user is None:
        raise HTTPException(status_code=401, detail="Not signed in")
    try:
        store.update_username(body.username)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return _state(store)


@router.post("/password-reset")
def reset_password(body: PasswordResetRequest, store: SessionStore = Depends(get_session_store)):
    """Send password reset instructions."""
    try:
        store.reset_password(body.email, body.redirect_to)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return {"message": "Password reset instructions have been sent to your email"}


@router.put("/password", response_model=SessionStateResponse)
def update_password(body: PasswordUpdateRequest, store: SessionStore = Depends(get_session_store)):
    try:
        store.update_password(body.password)
    except AuthError as e:
        raise HTTPException(status_code=400, detail=e.message)
    return _state(store)

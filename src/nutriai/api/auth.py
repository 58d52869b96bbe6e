"""Authentication endpoints and the bearer-token dependency."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Header, Request

from nutriai.api.models import (
    LoginRequest,
    SignUpRequest,
    serialize_session,
    serialize_user,
)
from nutriai.domain.auth import AuthUser

if TYPE_CHECKING:
    from nutriai.containers import AppContainer

router = APIRouter(prefix="/auth", tags=["auth"])


def bearer_token(authorization: str | None = Header(default=None)) -> str | None:
    """Extract the access token from an ``Authorization: Bearer`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_user(
    request: Request, access_token: str | None = Depends(bearer_token)
) -> AuthUser:
    """Resolve the authenticated user or fail with 401."""
    container: AppContainer = request.app.state.container
    return container.auth_service.current_user(access_token)


@router.post("/signup")
async def sign_up(payload: SignUpRequest, request: Request) -> dict[str, object]:
    """Create an account."""
    container: AppContainer = request.app.state.container
    user = container.auth_service.sign_up(
        payload.name, payload.email, payload.password
    )
    return {"user": serialize_user(user)}


@router.post("/login")
async def log_in(payload: LoginRequest, request: Request) -> dict[str, object]:
    """Log in with email and password."""
    container: AppContainer = request.app.state.container
    session = container.auth_service.log_in(payload.email, payload.password)
    return serialize_session(session)


@router.get("/session")
async def current_session(
    user: AuthUser = Depends(require_user),
) -> dict[str, object]:
    """Return the user behind the bearer token."""
    return {"user": serialize_user(user)}


@router.post("/logout")
async def log_out(
    request: Request,
    user: AuthUser = Depends(require_user),
    access_token: str | None = Depends(bearer_token),
) -> dict[str, str]:
    """Sign out and drop the user's chat session."""
    container: AppContainer = request.app.state.container
    container.chat_sessions.discard(user.id)
    if access_token:
        container.auth_service.log_out(access_token)
    return {"status": "ok"}

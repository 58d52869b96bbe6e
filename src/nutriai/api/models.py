"""Pydantic models for API request and response payloads."""

from pydantic import BaseModel, Field

from nutriai.domain.auth import AuthSession, AuthUser
from nutriai.domain.profile import UserData
from nutriai.services.workspace import UserState


class SignUpRequest(BaseModel):
    """Sign-up form payload."""

    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)


class LoginRequest(BaseModel):
    """Login form payload."""

    email: str = Field(min_length=3)
    password: str = Field(min_length=1)


class ProfileUpdateRequest(UserData):
    """Edited biometrics, optionally with a new display name."""

    name: str | None = None


class WeightRequest(BaseModel):
    """New body weight entry."""

    weight: float = Field(gt=0)


class ShoppingItemToggleRequest(BaseModel):
    """Name of the shopping list item to toggle."""

    name: str


class ChatMessageRequest(BaseModel):
    """A message typed by the user."""

    text: str = Field(min_length=1)


def serialize_user(user: AuthUser) -> dict[str, object]:
    return {"id": user.id, "email": user.email, "name": user.name}


def serialize_session(session: AuthSession) -> dict[str, object]:
    return {
        "access_token": session.access_token,
        "refresh_token": session.refresh_token,
        "expires_at": session.expires_at,
        "user": serialize_user(session.user),
    }


def serialize_state(state: UserState, loading: str | None = None) -> dict[str, object]:
    """Render a user's profile and workspace for the client."""
    return {
        "profile": state.profile.model_dump(mode="json", by_alias=True),
        "workspace": state.workspace.model_dump(mode="json", by_alias=True),
        "loading": loading,
    }

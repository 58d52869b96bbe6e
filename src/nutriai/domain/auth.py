"""Authentication domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AuthUser:
    """Authenticated user identity."""

    id: str
    email: str
    name: str


@dataclass(frozen=True)
class AuthSession:
    """Tokens issued by a successful login."""

    access_token: str
    refresh_token: str
    user: AuthUser
    expires_at: int | None = None

"""Supabase auth adapter."""

from dataclasses import dataclass
from typing import Any

from supabase import Client

from nutriai.domain.auth import AuthSession, AuthUser
from nutriai.services.auth import AuthClient, AuthStateCallback, AuthSubscription


@dataclass
class SupabaseAuthClient(AuthClient):
    """Supabase implementation of sign up, login and session lookup."""

    client: Client

    def sign_up(self, name: str, email: str, password: str) -> AuthUser:
        """Register a user with the display name stored in user metadata."""
        response = self.client.auth.sign_up(
            {
                "email": email,
                "password": password,
                "options": {"data": {"name": name}},
            }
        )
        if response.user is None:
            raise RuntimeError("Supabase did not return the created user")
        return _to_auth_user(response.user)

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Log in with email and password."""
        response = self.client.auth.sign_in_with_password(
            {"email": email, "password": password}
        )
        if response.session is None or response.user is None:
            raise RuntimeError("Supabase did not return a session")
        return _to_auth_session(response.session, response.user)

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user owning an access token."""
        response = self.client.auth.get_user(access_token)
        if response is None or response.user is None:
            return None
        return _to_auth_user(response.user)

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        self.client.auth.admin.sign_out(access_token)

    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthSubscription:
        """Forward Supabase auth events as (event name, session)."""

        def _listener(event: Any, session: Any) -> None:
            event_name = str(getattr(event, "value", event))
            user = getattr(session, "user", None)
            mapped = _to_auth_session(session, user) if session and user else None
            callback(event_name, mapped)

        return self.client.auth.on_auth_state_change(_listener)


def _to_auth_user(user: Any) -> AuthUser:
    metadata = getattr(user, "user_metadata", None) or {}
    return AuthUser(
        id=str(user.id),
        email=getattr(user, "email", None) or "",
        name=str(metadata.get("name") or ""),
    )


def _to_auth_session(session: Any, user: Any) -> AuthSession:
    return AuthSession(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
        expires_at=getattr(session, "expires_at", None),
        user=_to_auth_user(user),
    )

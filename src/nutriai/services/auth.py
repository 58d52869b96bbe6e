"""Authentication against the backend-as-a-service."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from nutriai import localization
from nutriai.domain.auth import AuthSession, AuthUser
from nutriai.errors import (
    InvalidCredentialsError,
    NotAuthenticatedError,
    UserFacingError,
    describe_error,
    is_invalid_credentials,
)

logger = logging.getLogger(__name__)

AuthStateCallback = Callable[[str, AuthSession | None], None]


class AuthSubscription(Protocol):
    """Handle returned by an auth state subscription."""

    def unsubscribe(self) -> None:
        """Stop receiving auth state events."""


class AuthClient(Protocol):
    """Interface for the auth provider."""

    def sign_up(self, name: str, email: str, password: str) -> AuthUser:
        """Register a user and return it."""

    def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """Log in and return the issued session."""

    def get_user(self, access_token: str) -> AuthUser | None:
        """Return the user owning an access token, if valid."""

    def sign_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""

    def on_auth_state_change(self, callback: AuthStateCallback) -> AuthSubscription:
        """Register a callback for session changes."""


@dataclass
class AuthService:
    """Maps auth provider calls to the application's error handling."""

    client: AuthClient

    def sign_up(self, name: str, email: str, password: str) -> AuthUser:
        """Create an account."""
        try:
            return self.client.sign_up(name, email, password)
        except Exception as exc:
            logger.exception("Sign up failed")
            raise UserFacingError(
                describe_error(exc, localization.ACTION_SIGNUP)
            ) from exc

    def log_in(self, email: str, password: str) -> AuthSession:
        """Log in with email and password."""
        try:
            return self.client.sign_in_with_password(email, password)
        except Exception as exc:
            if is_invalid_credentials(exc):
                logger.info("Rejected login")
                raise InvalidCredentialsError(
                    localization.INVALID_CREDENTIALS
                ) from exc
            logger.exception("Login failed")
            raise UserFacingError(
                describe_error(exc, localization.ACTION_LOGIN)
            ) from exc

    def current_user(self, access_token: str | None) -> AuthUser:
        """Resolve the user for an access token or raise."""
        if not access_token:
            raise NotAuthenticatedError(localization.NOT_AUTHENTICATED)
        try:
            user = self.client.get_user(access_token)
        except Exception as exc:
            logger.info("Access token rejected: %s", exc)
            raise NotAuthenticatedError(localization.NOT_AUTHENTICATED) from exc
        if user is None:
            raise NotAuthenticatedError(localization.NOT_AUTHENTICATED)
        return user

    def log_out(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        try:
            self.client.sign_out(access_token)
        except Exception as exc:
            logger.exception("Logout failed")
            raise UserFacingError(
                describe_error(exc, localization.ACTION_LOGOUT)
            ) from exc

    def subscribe(self, callback: AuthStateCallback) -> AuthSubscription:
        return self.client.on_auth_state_change(callback)

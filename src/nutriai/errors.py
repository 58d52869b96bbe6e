"""User-facing error types and mapping from upstream failures."""

import openai

from nutriai import localization


class UserFacingError(Exception):
    """An error whose message is shown to the user as-is."""

    status_code = 502

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InvalidCredentialsError(UserFacingError):
    """Login rejected by the auth provider."""

    status_code = 401


class NotAuthenticatedError(UserFacingError):
    """Missing, invalid or expired access token."""

    status_code = 401


class RequestInProgressError(UserFacingError):
    """The user already has an outstanding request."""

    status_code = 409


class MissingPrerequisiteError(UserFacingError):
    """The action needs data the user does not have yet."""

    status_code = 400


class NotFoundError(UserFacingError):
    """The referenced item does not exist."""

    status_code = 404


def describe_error(exc: BaseException, action: str) -> str:
    """Map an upstream failure to a single localized message."""
    if isinstance(exc, openai.AuthenticationError) or "API key not valid" in str(exc):
        return localization.INVALID_API_KEY
    detail = str(exc).strip()
    return localization.generic_error(action, detail or None)


def is_invalid_credentials(exc: BaseException) -> bool:
    """Return True when an auth failure means wrong email or password."""
    return "invalid login credentials" in str(exc).lower()

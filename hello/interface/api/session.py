"""Session cookie helpers shared by routes."""

import logging

from fastapi import HTTPException, Response, status

from hello.config import Settings
from hello.domain.error import InvalidSessionError, StaleSessionError
from hello.util.jwt import LOGIN_STATE_LIFETIME

logger = logging.getLogger(__name__)

SESSION_COOKIE = "auth_token"
LOGIN_STATE_COOKIE = "login_state"
LOGIN_STATE_PATH = "/auth/callback"
FAILURE_PATH = "/auth/failure"

# Token present but unusable; never treated as anonymous
SESSION_ERRORS = (InvalidSessionError, StaleSessionError)


def session_failure(error: Exception) -> HTTPException:
    """Build the redirect to the failure page for a rejected session."""
    logger.warning(f"Session rejected: {error}")
    return HTTPException(
        status_code=status.HTTP_303_SEE_OTHER,
        detail="Session is no longer valid",
        headers={"Location": FAILURE_PATH},
    )


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Bind the session to the response.

    Staging and production (cross-subdomain): samesite="none" + secure.
    Local (same-origin): samesite="lax", plain HTTP allowed.
    """
    response.set_cookie(
        key=SESSION_COOKIE,
        value=token,
        httponly=True,
        secure=settings.is_deployed,
        samesite="none" if settings.is_deployed else "lax",
        domain=settings.auth.cookie_domain,
        path="/",
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Delete the session cookie with the domain/path it was set with."""
    response.delete_cookie(
        key=SESSION_COOKIE,
        domain=settings.auth.cookie_domain,
        path="/",
    )


def set_login_state_cookie(response: Response, token: str, settings: Settings) -> None:
    """Keep the login handshake until the provider redirects back.

    Only sent to the callback path; lax is enough for the provider's
    top-level redirect.
    """
    response.set_cookie(
        key=LOGIN_STATE_COOKIE,
        value=token,
        httponly=True,
        secure=settings.is_deployed,
        samesite="lax",
        path=LOGIN_STATE_PATH,
        max_age=int(LOGIN_STATE_LIFETIME.total_seconds()),
    )


def clear_login_state_cookie(response: Response) -> None:
    response.delete_cookie(key=LOGIN_STATE_COOKIE, path=LOGIN_STATE_PATH)

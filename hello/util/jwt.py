"""Signed tokens (HS256 JWT via PyJWT): sessions and login state."""

from datetime import datetime, timedelta, timezone
from typing import Any, Literal

import jwt
from pydantic import BaseModel, ValidationError

from hello.config import AuthSettings

# Long enough to sign in at the provider, short enough to be useless if stolen
LOGIN_STATE_LIFETIME = timedelta(minutes=10)


class TokenPayload(BaseModel):
    """Claims carried by a session token."""

    identity_id: str  # "<uid>@<provider>"
    provider: str
    exp: datetime


class LoginStatePayload(BaseModel):
    """Claims carried by the login state cookie."""

    purpose: Literal["login"]
    provider: str
    state: str
    code_verifier: str | None = None
    exp: datetime


class JWTError(Exception):
    """Token could not be verified."""

    pass


def _encode(
    claims: dict[str, Any],
    settings: AuthSettings,
    lifetime: timedelta,
    now: datetime | None,
) -> str:
    issued_at = now or datetime.now(timezone.utc)
    claims = {**claims, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _decode(token: str, settings: AuthSettings, required: list[str]) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            options={"require": ["exp", *required]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError("Invalid token") from e


def create_token(
    identity_id: str,
    provider: str,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    """Sign a session token for an identity.

    Args:
        identity_id: Identity the session is bound to
        provider: Provider the identity signed in with
        settings: Secret, algorithm and lifetime
        now: Issue time; defaults to the current UTC time

    Returns:
        Encoded token
    """
    return _encode(
        {"identity_id": identity_id, "provider": provider},
        settings,
        timedelta(days=settings.jwt_expiry_days),
        now,
    )


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check signature and expiry, then read the claims.

    Raises:
        JWTError: If the token is expired, forged, malformed or lacks claims
    """
    claims = _decode(token, settings, ["identity_id"])
    try:
        return TokenPayload(**claims)
    except ValidationError as e:
        raise JWTError("Invalid token claims") from e


def create_login_state_token(
    provider: str,
    state: str,
    code_verifier: str | None,
    settings: AuthSettings,
    now: datetime | None = None,
) -> str:
    """Sign the state (and PKCE verifier) a login callback must match."""
    claims = {"purpose": "login", "provider": provider, "state": state}
    if code_verifier is not None:
        claims["code_verifier"] = code_verifier
    return _encode(claims, settings, LOGIN_STATE_LIFETIME, now)


def verify_login_state_token(token: str, settings: AuthSettings) -> LoginStatePayload:
    """Read a login state cookie; session tokens are not accepted here.

    Raises:
        JWTError: If the token is expired, forged or not a login state
    """
    claims = _decode(token, settings, ["purpose", "state"])
    try:
        return LoginStatePayload(**claims)
    except ValidationError as e:
        raise JWTError("Invalid login state claims") from e

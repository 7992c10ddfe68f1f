"""Twitter OAuth adapter."""

from .client import (
    MockTwitterOAuthClient,
    RealTwitterOAuthClient,
    TwitterOAuthClient,
    TwitterOAuthError,
)

__all__ = [
    "TwitterOAuthClient",
    "TwitterOAuthError",
    "RealTwitterOAuthClient",
    "MockTwitterOAuthClient",
]

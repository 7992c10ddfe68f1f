"""Facebook OAuth adapter."""

from .client import (
    FacebookOAuthClient,
    FacebookOAuthError,
    MockFacebookOAuthClient,
    RealFacebookOAuthClient,
)

__all__ = [
    "FacebookOAuthClient",
    "FacebookOAuthError",
    "RealFacebookOAuthClient",
    "MockFacebookOAuthClient",
]

"""Domain services."""

from .auth_service import AuthService, OAuthClient
from .authorization_service import AuthorizationService
from .identity_service import IdentityService
from .jwt_service import JWTService
from .session_service import SessionService
from .share_service import ShareService, SocialClient

__all__ = [
    "AuthService",
    "AuthorizationService",
    "IdentityService",
    "JWTService",
    "OAuthClient",
    "SessionService",
    "ShareService",
    "SocialClient",
]

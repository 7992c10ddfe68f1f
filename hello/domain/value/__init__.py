"""Domain value objects for Hello Social."""

from hello.domain.value.identifiers import IdentityId, compose_identity_id
from hello.domain.value.types import (
    AuthProvider,
    Credential,
    LoginHandshake,
    LoginPayload,
    Profile,
    ProfileLinks,
    PublishResult,
    ShareRequest,
)

__all__ = [
    # Identifiers
    "IdentityId",
    "compose_identity_id",
    # Types
    "AuthProvider",
    "Credential",
    "LoginHandshake",
    "LoginPayload",
    "Profile",
    "ProfileLinks",
    "PublishResult",
    "ShareRequest",
]

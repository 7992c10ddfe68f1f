"""Domain value objects for Hello Social.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum
from typing import Any

from pydantic import Field, field_validator

from hello.domain.value.common import ValueObject


class AuthProvider(str, Enum):
    """Supported identity providers."""

    TWITTER = "twitter"
    FACEBOOK = "facebook"

    @classmethod
    def from_name(cls, name: str) -> "AuthProvider | None":
        """Return the provider for a name, or None when it is not supported."""
        try:
            return cls(name)
        except ValueError:
            return None


class Credential(ValueObject):
    """Token pair issued by a provider for API calls on the user's behalf."""

    token: str
    secret: str | None = None


class ProfileLinks(ValueObject):
    """Links derived from a provider profile."""

    profile_link: str | None = None
    portrait_link: str | None = None


class Profile(ValueObject):
    """Provider-supplied profile, refreshed on every login."""

    name: str | None = None
    location: str | None = None
    email: str | None = None
    profile_link: str | None = None
    portrait_link: str | None = None


class LoginPayload(ValueObject):
    """Result of a successful provider callback.

    The profile map is kept as the provider shaped it; keys differ between
    providers (e.g. Twitter's "nickname", Facebook's "urls").
    """

    provider: str
    provider_uid: str
    credential: Credential
    profile: dict[str, Any] = Field(default_factory=dict)

    @field_validator("provider", "provider_uid")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Provider name and uid make up the identity key."""
        if not v:
            raise ValueError("must not be empty")
        return v


class LoginHandshake(ValueObject):
    """What a browser must bring back from the provider's sign-in page.

    Travels in a short-lived signed cookie between the login redirect and
    the callback, so a callback only completes in the browser that started it.
    """

    provider: AuthProvider
    state: str
    code_verifier: str | None = None  # PKCE, for providers that use it


class ShareRequest(ValueObject):
    """A single outbound HTTP call that publishes a message."""

    provider: AuthProvider
    method: str = "POST"
    url: str
    headers: dict[str, str] = Field(default_factory=dict)
    form: dict[str, str] | None = None
    body: dict[str, Any] | None = None


class PublishResult(ValueObject):
    """Confirmation of a published message."""

    provider: AuthProvider
    post_id: str
    url: str
    message: str

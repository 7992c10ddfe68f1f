"""Provider rules interface."""

from abc import ABC, abstractmethod
from typing import Any

from hello.domain.value import (
    AuthProvider,
    Credential,
    LoginPayload,
    ProfileLinks,
    PublishResult,
    ShareRequest,
)


class ProviderRules(ABC):
    """Everything that differs between identity providers.

    Adding a provider means adding one implementation of this class and
    registering it; no other code branches on provider names.
    """

    provider: AuthProvider

    @abstractmethod
    def build_profile_links(self, payload: LoginPayload) -> ProfileLinks:
        """Derive profile and portrait links from a login payload.

        Args:
            payload: Login payload as returned by the provider callback

        Returns:
            Links; either may be None when the provider did not supply enough data
        """
        pass

    @abstractmethod
    def build_share_request(self, credential: Credential, message: str) -> ShareRequest:
        """Describe the HTTP call that publishes a message.

        Args:
            credential: Identity's provider credential
            message: Text to publish

        Returns:
            Share request for the outbound social client
        """
        pass

    @abstractmethod
    def parse_share_response(self, data: dict[str, Any], message: str) -> PublishResult:
        """Turn the provider's reply into a publish confirmation.

        Args:
            data: Decoded JSON reply
            message: The message that was published

        Returns:
            Publish result with post ID and canonical URL

        Raises:
            PublishFailureError: If the reply does not identify the new post
        """
        pass

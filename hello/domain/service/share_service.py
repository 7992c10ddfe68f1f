"""Share domain service."""

from typing import Any

import logfire

from hello.domain.error import ProviderMismatchError, UnsupportedProviderError
from hello.domain.model import Identity
from hello.domain.provider import ProviderRegistry, rules_for
from hello.domain.value import PublishResult, ShareRequest


class SocialClient:
    """Outbound client that executes share requests."""

    async def send(self, request: ShareRequest) -> dict[str, Any]:
        """Send a share request to the provider.

        Args:
            request: Provider-neutral description of the HTTP call

        Returns:
            Decoded JSON reply

        Raises:
            CredentialRejectedError: If the provider refuses the access token
            PublishFailureError: If the provider rejects the call
        """
        raise NotImplementedError


class ShareService:
    """Publishes messages to the feed of the identity's own provider."""

    def __init__(
        self, social_client: SocialClient, provider_rules: ProviderRegistry
    ) -> None:
        """Initialize share service.

        Args:
            social_client: Outbound social HTTP client
            provider_rules: Rules per supported provider
        """
        self.social_client = social_client
        self.provider_rules = provider_rules

    async def share(
        self, identity: Identity, requested_provider: str, message: str
    ) -> PublishResult:
        """Publish a message on behalf of an identity.

        Args:
            identity: Signed-in identity
            requested_provider: Provider named by the request
            message: Text to publish

        Returns:
            Publish confirmation

        Raises:
            ProviderMismatchError: If the request names another provider
            UnsupportedProviderError: If the identity's provider cannot publish
            CredentialRejectedError: If the stored credential is refused
            PublishFailureError: If the provider call fails
        """
        with logfire.span(
            "share_service.share",
            identity_id=identity.id,
            provider=identity.provider,
        ):
            if requested_provider != identity.provider:
                logfire.warn(
                    "Share provider mismatch",
                    identity_id=identity.id,
                    expected=identity.provider,
                    requested=requested_provider,
                )
                raise ProviderMismatchError(identity.provider, requested_provider)

            rules = rules_for(self.provider_rules, identity.provider)
            if rules is None:
                raise UnsupportedProviderError(identity.provider)

            request = rules.build_share_request(identity.credential, message)
            data = await self.social_client.send(request)
            result = rules.parse_share_response(data, message)

            logfire.info(
                "Message published",
                identity_id=identity.id,
                provider=identity.provider,
                post_id=result.post_id,
            )
            return result

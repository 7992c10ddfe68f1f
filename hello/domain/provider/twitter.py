"""Twitter provider rules."""

from typing import Any

from hello.domain.error import PublishFailureError
from hello.domain.provider.base import ProviderRules
from hello.domain.value import (
    AuthProvider,
    Credential,
    LoginPayload,
    ProfileLinks,
    PublishResult,
    ShareRequest,
)


class TwitterRules(ProviderRules):
    """Profile links and tweet publishing for Twitter."""

    provider = AuthProvider.TWITTER

    def __init__(
        self,
        site_url: str = "https://twitter.com",
        api_url: str = "https://api.twitter.com/2",
    ) -> None:
        self.site_url = site_url
        self.api_url = api_url

    def build_profile_links(self, payload: LoginPayload) -> ProfileLinks:
        nickname = payload.profile.get("nickname")
        return ProfileLinks(
            profile_link=f"{self.site_url}/{nickname}" if nickname else None,
            portrait_link=payload.profile.get("image"),
        )

    def build_share_request(self, credential: Credential, message: str) -> ShareRequest:
        return ShareRequest(
            provider=self.provider,
            url=f"{self.api_url}/tweets",
            headers={"Authorization": f"Bearer {credential.token}"},
            body={"text": message},
        )

    def parse_share_response(self, data: dict[str, Any], message: str) -> PublishResult:
        tweet_id = (data.get("data") or {}).get("id")
        if not tweet_id:
            raise PublishFailureError(self.provider.value, "response has no tweet id")

        return PublishResult(
            provider=self.provider,
            post_id=str(tweet_id),
            url=f"{self.site_url}/i/web/status/{tweet_id}",
            message=message,
        )

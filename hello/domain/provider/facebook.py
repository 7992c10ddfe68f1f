"""Facebook provider rules."""

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


class FacebookRules(ProviderRules):
    """Profile links and feed publishing for Facebook."""

    provider = AuthProvider.FACEBOOK

    def __init__(
        self,
        api_version: str = "v19.0",
        graph_url: str = "https://graph.facebook.com",
        site_url: str = "https://www.facebook.com",
    ) -> None:
        self.api_version = api_version
        self.graph_url = graph_url
        self.site_url = site_url

    def build_profile_links(self, payload: LoginPayload) -> ProfileLinks:
        urls = payload.profile.get("urls") or {}
        return ProfileLinks(
            profile_link=urls.get("Facebook") or payload.profile.get("link"),
            portrait_link=f"{self.graph_url}/{payload.provider_uid}/picture",
        )

    def build_share_request(self, credential: Credential, message: str) -> ShareRequest:
        return ShareRequest(
            provider=self.provider,
            url=f"{self.graph_url}/{self.api_version}/me/feed",
            form={"message": message, "access_token": credential.token},
        )

    def parse_share_response(self, data: dict[str, Any], message: str) -> PublishResult:
        post_id = data.get("id")
        if not post_id:
            raise PublishFailureError(self.provider.value, "response has no post id")

        return PublishResult(
            provider=self.provider,
            post_id=str(post_id),
            url=f"{self.site_url}/{post_id}",
            message=message,
        )

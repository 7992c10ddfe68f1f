"""Outbound social publishing providers."""

from dishka import Scope, provide

from hello.adapter.social.client import RealSocialClient
from hello.domain.service import SocialClient
from hello.util.di.base import ProviderBase


class SocialProvider(ProviderBase):
    """Social publishing component base."""

    __mock_component__ = "social"


class ProdSocialProvider(SocialProvider):
    """Production social provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_social_client(self) -> SocialClient:
        """Provide HTTP social client."""
        return RealSocialClient()

"""Login client registry."""

from dishka import Scope, provide

from hello.adapter.facebook.client import FacebookOAuthClient
from hello.adapter.twitter.client import TwitterOAuthClient
from hello.domain.service.auth_service import OAuthClient
from hello.domain.value import AuthProvider
from hello.util.di.base import ProviderBase


class OAuthAggregatorProvider(ProviderBase):
    """Collects each provider's login client, mock or real, for AuthService."""

    scope = Scope.APP

    @provide(scope=Scope.APP)
    def get_oauth_clients(
        self,
        twitter_oauth_client: TwitterOAuthClient,
        facebook_oauth_client: FacebookOAuthClient,
    ) -> dict[AuthProvider, OAuthClient]:
        """Provide the login client for every supported provider."""
        return {
            AuthProvider.TWITTER: twitter_oauth_client,
            AuthProvider.FACEBOOK: facebook_oauth_client,
        }

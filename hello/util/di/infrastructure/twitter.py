"""Twitter infrastructure providers."""

from dishka import Scope, provide

from hello.adapter.twitter.client import RealTwitterOAuthClient, TwitterOAuthClient
from hello.config import Settings, require_setting
from hello.util.di.base import ProviderBase


class TwitterProvider(ProviderBase):
    """Twitter login component."""

    __mock_component__ = "twitter"


class ProdTwitterProvider(TwitterProvider):
    """Twitter login against the real OAuth 2.0 endpoints."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_twitter_oauth_client(self, settings: Settings) -> TwitterOAuthClient:
        """Provide Twitter OAuth client.

        Raises:
            ConfigurationError: If the client credentials are missing
        """
        twitter = settings.auth.twitter
        strict = settings.is_deployed
        return RealTwitterOAuthClient(
            client_id=require_setting(
                twitter.client_id, "AUTH__TWITTER__CLIENT_ID", strict
            ),
            client_secret=require_setting(
                twitter.client_secret, "AUTH__TWITTER__CLIENT_SECRET", strict
            ),
            redirect_uri=settings.api.callback_url("twitter"),
        )

"""Facebook infrastructure providers."""

from dishka import Scope, provide

from hello.adapter.facebook.client import FacebookOAuthClient, RealFacebookOAuthClient
from hello.config import Settings, require_setting
from hello.util.di.base import ProviderBase


class FacebookProvider(ProviderBase):
    """Facebook login component."""

    __mock_component__ = "facebook"


class ProdFacebookProvider(FacebookProvider):
    """Facebook Login against the Graph API."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_facebook_oauth_client(self, settings: Settings) -> FacebookOAuthClient:
        """Provide Facebook OAuth client.

        Raises:
            ConfigurationError: If the app credentials are missing
        """
        facebook = settings.auth.facebook
        strict = settings.is_deployed
        return RealFacebookOAuthClient(
            app_id=require_setting(facebook.app_id, "AUTH__FACEBOOK__APP_ID", strict),
            app_secret=require_setting(
                facebook.app_secret, "AUTH__FACEBOOK__APP_SECRET", strict
            ),
            redirect_uri=settings.api.callback_url("facebook"),
            api_version=facebook.api_version,
        )

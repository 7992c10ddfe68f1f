"""Facebook Login client (OAuth 2.0 authorization code flow, Graph API)."""

from urllib.parse import urlencode

import logfire

from hello.adapter.error import ProviderError
from hello.adapter.http import fetch_json
from hello.domain.service.auth_service import OAuthClient
from hello.domain.value import AuthProvider, Credential, LoginHandshake, LoginPayload

SCOPES = "public_profile,email,user_location,user_link"
PROFILE_FIELDS = "id,name,email,location,link"


class FacebookOAuthError(ProviderError):
    """Facebook OAuth error."""

    pass


class FacebookOAuthClient(OAuthClient):
    """DI key for the Facebook login client."""

    pass


class RealFacebookOAuthClient(FacebookOAuthClient):
    """Talks to www.facebook.com and graph.facebook.com.

    Facebook has no PKCE for confidential web apps; the app secret
    authenticates the code exchange. The state is checked against the
    browser's login handshake before this client is called.
    """

    def __init__(
        self,
        app_id: str,
        app_secret: str,
        redirect_uri: str,
        api_version: str = "v19.0",
    ) -> None:
        """Initialize Facebook OAuth client.

        Args:
            app_id: Facebook app ID
            app_secret: Facebook app secret
            redirect_uri: Callback URL registered with Facebook
            api_version: Graph API version
        """
        self.app_id = app_id
        self.app_secret = app_secret
        self.redirect_uri = redirect_uri

        self.authorize_url = f"https://www.facebook.com/{api_version}/dialog/oauth"
        graph = f"https://graph.facebook.com/{api_version}"
        self.token_url = f"{graph}/oauth/access_token"
        self.user_info_url = f"{graph}/me"

    async def initiate_authorization(self, handshake: LoginHandshake) -> str:
        query = urlencode(
            {
                "client_id": self.app_id,
                "redirect_uri": self.redirect_uri,
                "state": handshake.state,
                "response_type": "code",
                "scope": SCOPES,
            }
        )
        logfire.info("Facebook authorization started")
        return f"{self.authorize_url}?{query}"

    async def complete_authorization(
        self, code: str, handshake: LoginHandshake
    ) -> LoginPayload:
        """Exchange the code and fetch the signed-in user's profile.

        Raises:
            FacebookOAuthError: If either call fails
        """
        tokens = await fetch_json(
            "GET",
            self.token_url,
            error=FacebookOAuthError,
            action="Token exchange",
            params={
                "client_id": self.app_id,
                "client_secret": self.app_secret,
                "redirect_uri": self.redirect_uri,
                "code": code,
            },
        )
        access_token = tokens["access_token"]

        user = await fetch_json(
            "GET",
            self.user_info_url,
            error=FacebookOAuthError,
            action="User info request",
            params={"fields": PROFILE_FIELDS, "access_token": access_token},
        )

        logfire.info("Facebook login completed", user_id=user["id"])

        # Facebook user tokens have no secret half
        return LoginPayload(
            provider=AuthProvider.FACEBOOK.value,
            provider_uid=str(user["id"]),
            credential=Credential(token=access_token),
            profile={
                "name": user.get("name"),
                "email": user.get("email"),
                "location": user.get("location"),  # {"id", "name"} when shared
                "link": user.get("link"),
            },
        )


class MockFacebookOAuthClient(FacebookOAuthClient):
    """Deterministic Facebook login for tests.

    The authorization code doubles as the Facebook user ID; the code
    "denied" fails like a cancelled login.
    """

    async def initiate_authorization(self, handshake: LoginHandshake) -> str:
        return (
            "https://www.facebook.com/dialog/oauth"
            f"?state={handshake.state}&mock=true"
        )

    async def complete_authorization(
        self, code: str, handshake: LoginHandshake
    ) -> LoginPayload:
        if code == "denied":
            raise FacebookOAuthError("User denied authorization")

        return LoginPayload(
            provider=AuthProvider.FACEBOOK.value,
            provider_uid=code,
            credential=Credential(token=f"mock-token-{code}"),
            profile={
                "name": "Mock Facebook User",
                "email": "mock@facebook.com",
                "location": {"id": "1", "name": "Dublin, Ireland"},
                "link": f"https://www.facebook.com/app_scoped_user_id/{code}/",
            },
        )

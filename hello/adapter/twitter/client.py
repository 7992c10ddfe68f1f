"""Twitter login client (OAuth 2.0 authorization code flow with PKCE)."""

import hashlib
import secrets
from base64 import urlsafe_b64encode
from urllib.parse import urlencode

import logfire

from hello.adapter.error import ProviderError
from hello.adapter.http import fetch_json
from hello.domain.service.auth_service import OAuthClient
from hello.domain.value import AuthProvider, Credential, LoginHandshake, LoginPayload

# tweet.write lets the share page post on the user's behalf;
# offline.access yields the refresh token stored as the credential secret
SCOPES = "tweet.read tweet.write users.read offline.access"
USER_FIELDS = "id,name,username,location,description,profile_image_url"


class TwitterOAuthError(ProviderError):
    """Twitter OAuth error."""

    pass


class TwitterOAuthClient(OAuthClient):
    """DI key for the Twitter login client."""

    pass


def _b64url(raw: bytes) -> str:
    return urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def code_challenge(verifier: str) -> str:
    """S256 PKCE challenge for a verifier."""
    return _b64url(hashlib.sha256(verifier.encode("ascii")).digest())


class RealTwitterOAuthClient(TwitterOAuthClient):
    """Talks to twitter.com and api.twitter.com.

    The PKCE verifier rides in the login handshake, so nothing is held here
    between the redirect and the callback.
    """

    authorize_url = "https://twitter.com/i/oauth2/authorize"
    token_url = "https://api.twitter.com/2/oauth2/token"
    user_info_url = "https://api.twitter.com/2/users/me"

    def __init__(self, client_id: str, client_secret: str, redirect_uri: str) -> None:
        """Initialize Twitter OAuth client.

        Args:
            client_id: OAuth 2.0 client ID
            client_secret: OAuth 2.0 client secret
            redirect_uri: Callback URL registered with Twitter
        """
        self.client_id = client_id
        self.client_secret = client_secret
        self.redirect_uri = redirect_uri

    def new_code_verifier(self) -> str:
        return _b64url(secrets.token_bytes(32))

    async def initiate_authorization(self, handshake: LoginHandshake) -> str:
        if not handshake.code_verifier:
            raise TwitterOAuthError("Login handshake has no PKCE verifier")

        query = urlencode(
            {
                "response_type": "code",
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
                "scope": SCOPES,
                "state": handshake.state,
                "code_challenge": code_challenge(handshake.code_verifier),
                "code_challenge_method": "S256",
            }
        )
        logfire.info("Twitter authorization started")
        return f"{self.authorize_url}?{query}"

    async def complete_authorization(
        self, code: str, handshake: LoginHandshake
    ) -> LoginPayload:
        """Exchange the code and fetch the signed-in user's profile.

        Raises:
            TwitterOAuthError: On a handshake without verifier or any failed call
        """
        if not handshake.code_verifier:
            raise TwitterOAuthError("Login handshake has no PKCE verifier")

        tokens = await self._exchange_code_for_token(code, handshake.code_verifier)
        user = await self._get_user_info(tokens["access_token"])

        logfire.info("Twitter login completed", user_id=user["id"])

        return LoginPayload(
            provider=AuthProvider.TWITTER.value,
            provider_uid=str(user["id"]),
            credential=Credential(
                token=tokens["access_token"],
                secret=tokens.get("refresh_token"),
            ),
            profile={
                "name": user.get("name"),
                "nickname": user.get("username"),
                "location": user.get("location"),
                "image": user.get("profile_image_url"),
                "description": user.get("description"),
                "email": user.get("email"),  # Only with elevated access
            },
        )

    async def _exchange_code_for_token(self, code: str, verifier: str) -> dict:
        # Confidential client: credentials go in Basic auth
        return await fetch_json(
            "POST",
            self.token_url,
            error=TwitterOAuthError,
            action="Token exchange",
            auth=(self.client_id, self.client_secret),
            data={
                "code": code,
                "grant_type": "authorization_code",
                "client_id": self.client_id,
                "redirect_uri": self.redirect_uri,
                "code_verifier": verifier,
            },
        )

    async def _get_user_info(self, access_token: str) -> dict:
        body = await fetch_json(
            "GET",
            self.user_info_url,
            error=TwitterOAuthError,
            action="User info request",
            params={"user.fields": USER_FIELDS},
            headers={"Authorization": f"Bearer {access_token}"},
        )
        return body["data"]

    async def refresh_credential(self, credential: Credential) -> Credential | None:
        """Trade the stored refresh token for a new access token.

        Twitter rotates refresh tokens, so the reply's refresh token replaces
        the stored one.

        Raises:
            TwitterOAuthError: If Twitter refuses the refresh
        """
        if not credential.secret:
            return None

        tokens = await fetch_json(
            "POST",
            self.token_url,
            error=TwitterOAuthError,
            action="Token refresh",
            auth=(self.client_id, self.client_secret),
            data={
                "grant_type": "refresh_token",
                "refresh_token": credential.secret,
                "client_id": self.client_id,
            },
        )
        logfire.info("Twitter access token refreshed")
        return Credential(
            token=tokens["access_token"],
            secret=tokens.get("refresh_token", credential.secret),
        )


class MockTwitterOAuthClient(TwitterOAuthClient):
    """Deterministic Twitter login for tests.

    The authorization code doubles as the Twitter user ID, so tests can
    sign in as several users; the code "denied" fails like a cancelled login.
    Refreshing appends "-refreshed" to the token; a "revoked" refresh token
    is refused.
    """

    def new_code_verifier(self) -> str:
        return "mock-verifier"

    async def initiate_authorization(self, handshake: LoginHandshake) -> str:
        return (
            "https://twitter.com/i/oauth2/authorize"
            f"?state={handshake.state}&mock=true"
        )

    async def complete_authorization(
        self, code: str, handshake: LoginHandshake
    ) -> LoginPayload:
        if code == "denied":
            raise TwitterOAuthError("User denied authorization")

        return LoginPayload(
            provider=AuthProvider.TWITTER.value,
            provider_uid=code,
            credential=Credential(token=f"mock-token-{code}", secret="mock-refresh"),
            profile={
                "name": "Mock Twitter User",
                "nickname": f"mockuser{code}",
                "location": "Internet",
                "image": "https://example.com/avatar.jpg",
            },
        )

    async def refresh_credential(self, credential: Credential) -> Credential | None:
        if not credential.secret:
            return None
        if credential.secret == "revoked":
            raise TwitterOAuthError("Token refresh failed: 400")
        return Credential(token=f"{credential.token}-refreshed", secret=credential.secret)

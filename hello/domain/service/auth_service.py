"""Provider login handshake."""

import secrets

import logfire

from hello.domain.error import LoginStateMismatchError, UnsupportedProviderError
from hello.domain.value import AuthProvider, Credential, LoginHandshake, LoginPayload


class OAuthClient:
    """One provider's side of the login redirect and callback.

    Clients keep no per-login state; everything the callback needs comes
    back in the LoginHandshake.
    """

    def new_code_verifier(self) -> str | None:
        """PKCE verifier for a new login, or None if the provider has no PKCE."""
        return None

    async def initiate_authorization(self, handshake: LoginHandshake) -> str:
        """Build the provider's sign-in URL.

        Args:
            handshake: State (and verifier) for this login

        Returns:
            URL to redirect the browser to
        """
        raise NotImplementedError

    async def complete_authorization(
        self, code: str, handshake: LoginHandshake
    ) -> LoginPayload:
        """Turn the callback's code into a credential and profile.

        Args:
            code: Authorization code from the callback
            handshake: The verified handshake this login started with

        Returns:
            Login payload for the identity upsert

        Raises:
            ProviderError: If the provider rejects the exchange
        """
        raise NotImplementedError

    async def refresh_credential(self, credential: Credential) -> Credential | None:
        """Exchange a credential for a fresh one.

        Returns:
            The new credential, or None when the provider cannot refresh it

        Raises:
            ProviderError: If the provider refuses the refresh
        """
        return None


class AuthService:
    """Routes login steps to the right provider's client."""

    def __init__(self, oauth_clients: dict[AuthProvider, OAuthClient]) -> None:
        self.oauth_clients = oauth_clients

    def _client(self, provider: AuthProvider) -> OAuthClient:
        client = self.oauth_clients.get(provider)
        if client is None:
            raise UnsupportedProviderError(provider.value)
        return client

    async def initiate_login(
        self, provider: AuthProvider
    ) -> tuple[str, LoginHandshake]:
        """Start a login with a fresh state.

        Returns:
            The provider's sign-in URL and the handshake the browser must keep

        Raises:
            UnsupportedProviderError: If no client is configured for the provider
            ProviderError: If the client cannot build the URL
        """
        with logfire.span("auth_service.initiate_login", provider=provider.value):
            client = self._client(provider)
            handshake = LoginHandshake(
                provider=provider,
                state=secrets.token_urlsafe(32),
                code_verifier=client.new_code_verifier(),
            )
            url = await client.initiate_authorization(handshake)
            return url, handshake

    async def complete_login(
        self,
        provider: AuthProvider,
        code: str,
        state: str,
        handshake: LoginHandshake | None,
    ) -> LoginPayload:
        """Finish a provider login from its callback parameters.

        The callback's state must equal the one kept by this browser.

        Raises:
            LoginStateMismatchError: If there is no handshake or it does not match
            UnsupportedProviderError: If no client is configured for the provider
            ProviderError: If the handshake fails
        """
        with logfire.span("auth_service.complete_login", provider=provider.value):
            if (
                handshake is None
                or handshake.provider != provider
                or not secrets.compare_digest(handshake.state, state)
            ):
                logfire.warn("Login callback state mismatch", provider=provider.value)
                raise LoginStateMismatchError(provider.value)

            payload = await self._client(provider).complete_authorization(
                code, handshake
            )
            logfire.info(
                "Provider login completed",
                provider=payload.provider,
                provider_uid=payload.provider_uid,
            )
            return payload

    async def refresh_credential(
        self, provider: AuthProvider, credential: Credential
    ) -> Credential | None:
        """Fresh credential from the provider, or None if it cannot refresh.

        Raises:
            UnsupportedProviderError: If no client is configured for the provider
            ProviderError: If the provider refuses the refresh
        """
        with logfire.span("auth_service.refresh_credential", provider=provider.value):
            refreshed = await self._client(provider).refresh_credential(credential)
            if refreshed is None:
                logfire.info("Provider cannot refresh credentials", provider=provider.value)
            return refreshed

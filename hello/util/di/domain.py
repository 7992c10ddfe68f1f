"""Domain service providers."""

from dishka import Scope, provide

from hello.config import AuthSettings, IdentitySettings, Settings
from hello.domain.provider import ProviderRegistry, build_provider_registry
from hello.domain.repository import IdentityRepository
from hello.domain.service import (
    AuthorizationService,
    AuthService,
    IdentityService,
    JWTService,
    OAuthClient,
    SessionService,
    ShareService,
    SocialClient,
)
from hello.domain.value import AuthProvider
from hello.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services, one set per request.

    Services that touch the identity repository share the request's
    database session, so a request reads its own writes.
    """

    scope = Scope.REQUEST

    @provide(scope=Scope.APP)
    def get_provider_rules(self, settings: Settings) -> ProviderRegistry:
        return build_provider_registry(
            facebook_api_version=settings.auth.facebook.api_version
        )

    @provide
    def get_auth_service(
        self, oauth_clients: dict[AuthProvider, OAuthClient]
    ) -> AuthService:
        return AuthService(oauth_clients=oauth_clients)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_service(
        self,
        identity_repository: IdentityRepository,
        provider_rules: ProviderRegistry,
        identity_settings: IdentitySettings,
    ) -> IdentityService:
        return IdentityService(
            identity_repository=identity_repository,
            provider_rules=provider_rules,
            identity_settings=identity_settings,
        )

    @provide
    def get_session_service(
        self, jwt_service: JWTService, identity_repository: IdentityRepository
    ) -> SessionService:
        return SessionService(
            jwt_service=jwt_service, identity_repository=identity_repository
        )

    @provide
    def get_authorization_service(self) -> AuthorizationService:
        return AuthorizationService()

    @provide
    def get_share_service(
        self, social_client: SocialClient, provider_rules: ProviderRegistry
    ) -> ShareService:
        return ShareService(social_client=social_client, provider_rules=provider_rules)

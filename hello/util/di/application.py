"""Application layer DI providers."""

from dishka import Scope, provide

from hello.application.usecase.auth import GetCurrentIdentityUseCase, LoginUseCase
from hello.application.usecase.home import GetHomeUseCase
from hello.application.usecase.identity import (
    GetFavoriteUseCase,
    ListRecentUseCase,
    UpdateFavoriteUseCase,
)
from hello.application.usecase.share import ShareMessageUseCase
from hello.config import SharingSettings
from hello.domain.service import (
    AuthorizationService,
    AuthService,
    IdentityService,
    JWTService,
    SessionService,
    ShareService,
)
from hello.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        identity_service: IdentityService,
        jwt_service: JWTService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            identity_service=identity_service,
            jwt_service=jwt_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_identity_use_case(
        self, session_service: SessionService
    ) -> GetCurrentIdentityUseCase:
        """Provide get current identity use case."""
        return GetCurrentIdentityUseCase(session_service=session_service)

    # Home
    @provide(scope=Scope.REQUEST)
    def get_home_use_case(
        self, session_service: SessionService, sharing_settings: SharingSettings
    ) -> GetHomeUseCase:
        """Provide home page use case."""
        return GetHomeUseCase(
            session_service=session_service, sharing_settings=sharing_settings
        )

    # Identity use cases
    @provide(scope=Scope.REQUEST)
    def get_get_favorite_use_case(
        self,
        session_service: SessionService,
        authorization_service: AuthorizationService,
        identity_service: IdentityService,
    ) -> GetFavoriteUseCase:
        """Provide get favorite use case."""
        return GetFavoriteUseCase(
            session_service=session_service,
            authorization_service=authorization_service,
            identity_service=identity_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_update_favorite_use_case(
        self,
        session_service: SessionService,
        authorization_service: AuthorizationService,
        identity_service: IdentityService,
    ) -> UpdateFavoriteUseCase:
        """Provide update favorite use case."""
        return UpdateFavoriteUseCase(
            session_service=session_service,
            authorization_service=authorization_service,
            identity_service=identity_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_list_recent_use_case(
        self, identity_service: IdentityService
    ) -> ListRecentUseCase:
        """Provide list recent favorites use case."""
        return ListRecentUseCase(identity_service=identity_service)

    # Share use cases
    @provide(scope=Scope.REQUEST)
    def get_share_message_use_case(
        self,
        session_service: SessionService,
        authorization_service: AuthorizationService,
        share_service: ShareService,
        auth_service: AuthService,
        identity_service: IdentityService,
    ) -> ShareMessageUseCase:
        """Provide share message use case."""
        return ShareMessageUseCase(
            session_service=session_service,
            authorization_service=authorization_service,
            share_service=share_service,
            auth_service=auth_service,
            identity_service=identity_service,
        )

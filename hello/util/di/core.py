"""Configuration providers."""

from dishka import Scope, provide

from hello.config import (
    AuthSettings,
    IdentitySettings,
    Settings,
    SharingSettings,
    load_settings,
)
from hello.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Settings from the environment, split into the sections services need."""

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        return load_settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_identity_settings(self, settings: Settings) -> IdentitySettings:
        return settings.identity

    @provide(scope=Scope.APP)
    def provide_sharing_settings(self, settings: Settings) -> SharingSettings:
        return settings.sharing

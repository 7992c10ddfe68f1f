"""Per-provider rules for profile links and publishing."""

from hello.domain.provider.base import ProviderRules
from hello.domain.provider.facebook import FacebookRules
from hello.domain.provider.twitter import TwitterRules
from hello.domain.value import AuthProvider

ProviderRegistry = dict[AuthProvider, ProviderRules]


def build_provider_registry(facebook_api_version: str = "v19.0") -> ProviderRegistry:
    """Rules for every supported provider."""
    return {
        AuthProvider.TWITTER: TwitterRules(),
        AuthProvider.FACEBOOK: FacebookRules(api_version=facebook_api_version),
    }


def rules_for(registry: ProviderRegistry, name: str) -> ProviderRules | None:
    """Look up rules by provider name; unrecognized names yield None."""
    provider = AuthProvider.from_name(name)
    if provider is None:
        return None
    return registry.get(provider)


__all__ = [
    "FacebookRules",
    "ProviderRegistry",
    "ProviderRules",
    "TwitterRules",
    "build_provider_registry",
    "rules_for",
]

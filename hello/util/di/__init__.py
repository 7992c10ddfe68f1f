"""Dependency injection module.

Every provider class in PROVIDERS is either concrete (used as-is) or a
component base whose subclasses are its production and mock
implementations. Mock implementations live under tests/di and register
themselves by subclassing, so production code never imports them.
"""

from typing import Type

from dishka import Provider

from hello.util.di.application import ProdApplicationProvider
from hello.util.di.base import Component, ProviderBase
from hello.util.di.core import ProdConfigProvider
from hello.util.di.domain import ProdDomainProvider
from hello.util.di.infrastructure import (
    FacebookProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
    SocialProvider,
    TwitterProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    TwitterProvider,
    FacebookProvider,
    SocialProvider,
    PersistenceProvider,
    OAuthAggregatorProvider,
]


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Pick the implementation of a provider class.

    Args:
        base: Entry from PROVIDERS
        use_mock: Prefer the mock implementation of a component

    Returns:
        Provider class (not instantiated)

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = base.__subclasses__()
    if not implementations:
        return base

    for impl in implementations:
        if impl.__is_mock__ == use_mock:
            return impl

    kind = "mock" if use_mock else "production"
    raise ValueError(f"No {kind} implementation for {base.__mock_component__}")


def mockable_components() -> set[Component]:
    """Names of all components that have implementations to choose from."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__subclasses__() and base.__mock_component__
    }


def build_providers(mock: set[Component] | None = None) -> list[Provider]:
    """Instantiate one provider per PROVIDERS entry.

    Args:
        mock: Components to replace with their mock implementation

    Returns:
        Provider instances ready for make_async_container
    """
    mock = mock or set()
    return [
        get_provider(base, use_mock=base.__mock_component__ in mock)()
        for base in PROVIDERS
    ]


__all__ = [
    "Component",
    "PROVIDERS",
    "ProviderBase",
    "build_providers",
    "get_provider",
    "mockable_components",
]

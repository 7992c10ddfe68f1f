"""Base classes for dependency injection providers."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a mock and a production implementation
Component = Literal["persistence", "twitter", "facebook", "social"]


class ProviderBase(Provider):
    """Base for all DI providers.

    A provider class with subclasses is a swappable component: its
    subclasses are the implementations, told apart by ``__is_mock__``.
    A provider class without subclasses is always used as-is.

    Attributes:
        __mock_component__: Component name, for swappable components
        __is_mock__: Whether this implementation is the test double
        __depends_on__: Components that must also be real when this one is
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
    __depends_on__: ClassVar[frozenset[str]] = frozenset()

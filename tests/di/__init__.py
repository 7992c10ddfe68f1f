"""Mock providers for testing."""

from .container import build_test_container
from .facebook import MockFacebookProvider
from .persistence import MockPersistenceProvider
from .social import MockSocialProvider
from .twitter import MockTwitterProvider

__all__ = [
    "MockFacebookProvider",
    "MockPersistenceProvider",
    "MockSocialProvider",
    "MockTwitterProvider",
    "build_test_container",
]

"""Infrastructure providers."""

# Import bases
from .facebook import FacebookProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider
from .social import SocialProvider
from .twitter import TwitterProvider

# Import implementations (needed for __subclasses__())
from .facebook import ProdFacebookProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .social import ProdSocialProvider  # noqa: F401
from .twitter import ProdTwitterProvider  # noqa: F401

__all__ = [
    "FacebookProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdFacebookProvider",
    "ProdPersistenceProvider",
    "ProdSocialProvider",
    "ProdTwitterProvider",
    "SocialProvider",
    "TwitterProvider",
]

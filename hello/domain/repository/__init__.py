"""Repository interfaces for Hello Social domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from hello.domain.repository.identity import IdentityRepository

__all__ = [
    "IdentityRepository",
]

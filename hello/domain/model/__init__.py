"""Domain model entities for Hello Social."""

from hello.domain.model.identity import Identity

__all__ = [
    "Identity",
]

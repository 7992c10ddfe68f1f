"""Share use cases."""

from .share_message import ShareMessageUseCase

__all__ = ["ShareMessageUseCase"]

"""Home page use cases."""

from .get_home import GetHomeUseCase

__all__ = ["GetHomeUseCase"]

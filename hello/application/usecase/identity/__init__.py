"""Identity use cases."""

from .get_favorite import GetFavoriteUseCase
from .list_recent import ListRecentUseCase
from .update_favorite import UpdateFavoriteUseCase

__all__ = ["GetFavoriteUseCase", "ListRecentUseCase", "UpdateFavoriteUseCase"]

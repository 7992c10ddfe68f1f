"""Identity favorite routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Query, status
from pydantic import BaseModel

from hello.application.usecase.identity import (
    GetFavoriteUseCase,
    ListRecentUseCase,
    UpdateFavoriteUseCase,
)
from hello.application.usecase.identity.get_favorite import (
    FavoriteResponse,
    GetFavoriteRequest,
)
from hello.application.usecase.identity.list_recent import (
    ListRecentRequest,
    ListRecentResponse,
)
from hello.application.usecase.identity.update_favorite import (
    FavoriteValue,
    UpdateFavoriteRequest,
)
from hello.domain.error import (
    ForbiddenError,
    NotFoundError,
    PersistenceFailureError,
    UnauthenticatedError,
)
from hello.interface.api.session import SESSION_ERRORS, session_failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/identities", tags=["identities"], route_class=DishkaRoute)


class UpdateFavoriteAPIRequest(BaseModel):
    """API request for editing a favorite."""

    favorite_value: FavoriteValue


@router.get("/recent", response_model=ListRecentResponse)
async def list_recent_favorites(
    list_recent_use_case: FromDishka[ListRecentUseCase],
    limit: int | None = Query(default=None, ge=1, le=100),
) -> ListRecentResponse:
    """Public feed of the most recently edited favorites."""
    return await list_recent_use_case.execute(ListRecentRequest(limit=limit))


@router.get("/{identity_id}/favorite", response_model=FavoriteResponse)
async def get_favorite(
    identity_id: str,
    get_favorite_use_case: FromDishka[GetFavoriteUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FavoriteResponse:
    """Current favorite for the edit form. Owner or administrator only.

    Raises:
        HTTPException: 403 if not logged in or not permitted, 404 if missing
    """
    try:
        return await get_favorite_use_case.execute(
            GetFavoriteRequest(token=auth_token, identity_id=identity_id)
        )
    except SESSION_ERRORS as e:
        raise session_failure(e)
    except (UnauthenticatedError, ForbiddenError) as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.put("/{identity_id}/favorite", response_model=FavoriteResponse)
async def update_favorite(
    identity_id: str,
    request: UpdateFavoriteAPIRequest,
    update_favorite_use_case: FromDishka[UpdateFavoriteUseCase],
    auth_token: str | None = Cookie(default=None),
) -> FavoriteResponse:
    """Edit a favorite. Owner or administrator only.

    Example:
        PUT /identities/12345@twitter/favorite
        Cookie: auth_token=...

        Request:
        {
            "favorite_value": "Green"
        }

        Response:
        {
            "identity_id": "12345@twitter",
            "favorite_value": "Green",
            "edited_at": "2025-01-15T12:34:56Z"
        }

    Raises:
        HTTPException: 403 if not logged in or not permitted, 404 if missing,
            500 if the write fails
    """
    try:
        return await update_favorite_use_case.execute(
            UpdateFavoriteRequest(
                token=auth_token,
                identity_id=identity_id,
                favorite_value=request.favorite_value,
            )
        )
    except SESSION_ERRORS as e:
        raise session_failure(e)
    except (UnauthenticatedError, ForbiddenError) as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except PersistenceFailureError as e:
        logger.error(f"Failed to update favorite: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update favorite",
        )

"""Home page route."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie

from hello.application.usecase.home import GetHomeUseCase
from hello.application.usecase.home.get_home import GetHomeRequest, GetHomeResponse
from hello.interface.api.session import SESSION_ERRORS, session_failure

router = APIRouter(tags=["home"], route_class=DishkaRoute)


@router.get("/", response_model=GetHomeResponse)
async def home(
    get_home_use_case: FromDishka[GetHomeUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetHomeResponse:
    """Login options for visitors; profile, edit and share for identities.

    Example (signed in):
        {
            "authenticated": true,
            "identity": {"identity_id": "12345@twitter", ...},
            "edit_link": "/identities/12345@twitter/favorite",
            "share_link": "/share/twitter",
            "share_message": "My favorite color is Blue! Thanks http://example.com",
            "logout_link": "/auth/logout"
        }
    """
    try:
        return await get_home_use_case.execute(GetHomeRequest(token=auth_token))
    except SESSION_ERRORS as e:
        raise session_failure(e)

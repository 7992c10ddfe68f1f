"""Authentication routes: provider login, session info and logout."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from hello.adapter.error import ProviderError
from hello.application.usecase.auth import GetCurrentIdentityUseCase, LoginUseCase
from hello.application.usecase.auth.get_current_identity import (
    GetCurrentIdentityRequest,
    GetCurrentIdentityResponse,
)
from hello.application.usecase.auth.login import LoginRequest, LoginResponse
from hello.config import Settings
from hello.domain.error import DomainError
from hello.domain.service import AuthService, JWTService
from hello.domain.value import AuthProvider
from hello.interface.api.session import (
    FAILURE_PATH,
    SESSION_ERRORS,
    clear_login_state_cookie,
    clear_session_cookie,
    session_failure,
    set_login_state_cookie,
    set_session_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)

FAILURE_MESSAGE = "Something went wrong with the authorization process"


class InitiateLoginRequest(BaseModel):
    provider: str


class InitiateLoginResponse(BaseModel):
    authorization_url: str


class LogoutResponse(BaseModel):
    success: bool
    message: str


class AuthFailureResponse(BaseModel):
    """Login failure page."""

    message: str
    home: str = "/"


def _redirect(url: str) -> RedirectResponse:
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


async def _start_login(
    auth_service: AuthService, jwt_service: JWTService, provider_name: str
) -> tuple[str, str]:
    """Provider sign-in URL and the signed handshake for the login state cookie.

    Raises:
        HTTPException: 400 for unknown providers, 502 if the provider fails
    """
    provider = AuthProvider.from_name(provider_name)
    if provider is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unsupported provider: {provider_name}",
        )

    logger.info(f"Starting {provider.value} login")
    try:
        url, handshake = await auth_service.initiate_login(provider)
    except ProviderError as e:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to initiate login: {e}",
        )

    return url, jwt_service.create_login_state(handshake)


@router.post("/login", response_model=InitiateLoginResponse)
async def initiate_login(
    request: InitiateLoginRequest,
    response: Response,
    auth_service: FromDishka[AuthService],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
) -> InitiateLoginResponse:
    """Sign-in URL for a provider, for clients that redirect themselves.

    Example:
        POST /auth/login
        {"provider": "twitter"}

        Response:
        {"authorization_url": "https://twitter.com/i/oauth2/authorize?..."}
    """
    url, login_state = await _start_login(auth_service, jwt_service, request.provider)
    set_login_state_cookie(response, login_state, settings)
    return InitiateLoginResponse(authorization_url=url)


@router.get("/login/{provider}")
async def login_redirect(
    provider: str,
    auth_service: FromDishka[AuthService],
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
) -> RedirectResponse:
    """Target of the home page's "Sign in with ..." links."""
    url, login_state = await _start_login(auth_service, jwt_service, provider)
    response = _redirect(url)
    set_login_state_cookie(response, login_state, settings)
    return response


@router.get("/callback/{provider}")
async def oauth_callback(
    provider: str,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
    code: str | None = None,
    state: str | None = None,
    error: str | None = None,
    login_state: str | None = Cookie(default=None),
) -> RedirectResponse:
    """Finish a provider login.

    On success the identity is stored, the session cookie is set and the
    browser goes to the frontend. Anything else, including a user who
    cancels on the provider's page or a callback whose state this browser
    never asked for, lands on /auth/failure with no session. The login
    state cookie is single-use either way.

    Example:
        GET /auth/callback/twitter?code=abc123&state=xyz789
        -> 302 http://localhost:3000, Set-Cookie: auth_token=...
    """
    login = await _complete_login(
        login_use_case, provider, code, state, error, login_state
    )

    # Cookies have to be set on the response that is returned
    if login is None:
        response = _redirect(FAILURE_PATH)
    else:
        logger.info(f"Login successful for identity: {login.identity_id}")
        response = _redirect(settings.api.frontend_url)
        set_session_cookie(response, login.token, settings)

    clear_login_state_cookie(response)
    return response


async def _complete_login(
    login_use_case: LoginUseCase,
    provider: str,
    code: str | None,
    state: str | None,
    error: str | None,
    login_state: str | None,
) -> LoginResponse | None:
    """Run the login for a callback, or None if it cannot complete."""
    auth_provider = AuthProvider.from_name(provider)
    if auth_provider is None:
        logger.warning(f"Callback for unsupported provider: {provider}")
        return None

    if error or not code or not state:
        logger.warning(f"{provider} callback without a code: error={error}")
        return None

    try:
        return await login_use_case.execute(
            LoginRequest(
                provider=auth_provider,
                code=code,
                state=state,
                login_state=login_state,
            )
        )
    except (ProviderError, DomainError) as e:
        logger.error(f"{provider} login failed: {e}")
    except Exception:
        logger.exception(f"Unexpected error during {provider} callback")
    return None


@router.get("/failure", response_model=AuthFailureResponse)
async def auth_failure(
    response: Response,
    settings: FromDishka[Settings],
) -> AuthFailureResponse:
    """Login failure page; always leaves the visitor signed out."""
    clear_session_cookie(response, settings)
    return AuthFailureResponse(message=FAILURE_MESSAGE)


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    clear_session_cookie(response, settings)
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/logout")
async def logout_redirect(settings: FromDishka[Settings]) -> RedirectResponse:
    """Logout link on the home page."""
    response = _redirect("/")
    clear_session_cookie(response, settings)
    return response


@router.get("/me", response_model=GetCurrentIdentityResponse)
async def get_current_identity(
    get_current_identity_use_case: FromDishka[GetCurrentIdentityUseCase],
    auth_token: str | None = Cookie(default=None),
) -> GetCurrentIdentityResponse:
    """The signed-in identity, or authenticated=false without a cookie.

    A cookie that is forged, expired or names a deleted identity sends
    the browser to /auth/failure instead.

    Example:
        {"authenticated": true, "identity": {"identity_id": "12345@twitter", ...}}
    """
    try:
        return await get_current_identity_use_case.execute(
            GetCurrentIdentityRequest(token=auth_token)
        )
    except SESSION_ERRORS as e:
        raise session_failure(e)

"""Share routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from pydantic import BaseModel, Field

from hello.application.usecase.share import ShareMessageUseCase
from hello.application.usecase.share.share_message import (
    ShareMessageRequest,
    ShareMessageResponse,
)
from hello.domain.error import (
    ProviderMismatchError,
    PublishFailureError,
    SignInExpiredError,
    UnauthenticatedError,
    UnsupportedProviderError,
)
from hello.interface.api.session import SESSION_ERRORS, session_failure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/share", tags=["share"], route_class=DishkaRoute)


class ShareAPIRequest(BaseModel):
    """API request for publishing a message."""

    message: str = Field(min_length=1, max_length=5000)


@router.post("/{provider}", response_model=ShareMessageResponse)
async def share_message(
    provider: str,
    request: ShareAPIRequest,
    share_message_use_case: FromDishka[ShareMessageUseCase],
    auth_token: str | None = Cookie(default=None),
) -> ShareMessageResponse:
    """Publish a message to the signed-in identity's feed.

    The provider in the URL must be the one the identity signed in with.

    Example:
        POST /share/twitter
        Cookie: auth_token=...

        Request:
        {
            "message": "My favorite color is Blue! Thanks http://example.com"
        }

        Response:
        {
            "provider": "twitter",
            "post_id": "1234567890",
            "url": "https://twitter.com/i/web/status/1234567890",
            "message": "My favorite color is Blue! Thanks http://example.com"
        }

    Raises:
        HTTPException: 403 if not logged in, 400 on provider mismatch or an
            unsupported provider, 401 if the provider sign-in has expired
            for good, 502 if the provider rejects the post
    """
    try:
        return await share_message_use_case.execute(
            ShareMessageRequest(
                token=auth_token, provider=provider, message=request.message
            )
        )
    except SESSION_ERRORS as e:
        raise session_failure(e)
    except UnauthenticatedError as e:
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail=str(e))
    except (ProviderMismatchError, UnsupportedProviderError) as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SignInExpiredError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except PublishFailureError as e:
        logger.error(f"Share failed: {str(e)}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to publish to {e.provider}",
        )

"""Outbound social client that executes share requests."""

from typing import Any

import httpx
import logfire

from hello.domain.error import CredentialRejectedError, PublishFailureError
from hello.domain.service.share_service import SocialClient
from hello.domain.value import ShareRequest


# Graph API error code for an expired or revoked access token
GRAPH_INVALID_TOKEN = 190


def _credential_rejected(response: httpx.Response) -> bool:
    """Twitter answers 401; the Graph API answers 400 with error code 190."""
    if response.status_code == 401:
        return True
    try:
        body = response.json()
    except ValueError:
        return False
    error = body.get("error") if isinstance(body, dict) else None
    return isinstance(error, dict) and error.get("code") == GRAPH_INVALID_TOKEN


class RealSocialClient(SocialClient):
    """Sends share requests over HTTP. No retries."""

    def __init__(self, timeout: float = 30.0) -> None:
        self.timeout = timeout

    async def send(self, request: ShareRequest) -> dict[str, Any]:
        """Send a share request.

        Args:
            request: Share request built by the provider rules

        Returns:
            Decoded JSON reply

        Raises:
            CredentialRejectedError: If the provider refuses the access token
            PublishFailureError: On transport errors, non-2xx replies or non-JSON bodies
        """
        provider = request.provider.value

        try:
            async with httpx.AsyncClient() as client:
                response = await client.request(
                    request.method,
                    request.url,
                    headers=request.headers,
                    data=request.form,
                    json=request.body,
                    timeout=self.timeout,
                )
        except httpx.HTTPError as e:
            logfire.error("Share request HTTP error", provider=provider, error=str(e))
            raise PublishFailureError(provider, f"HTTP error: {e}")

        if response.is_error and _credential_rejected(response):
            logfire.warn(
                "Share credential rejected",
                provider=provider,
                status_code=response.status_code,
            )
            raise CredentialRejectedError(provider)

        if response.is_error:
            logfire.error(
                "Share request rejected",
                provider=provider,
                status_code=response.status_code,
                error=response.text,
            )
            raise PublishFailureError(provider, f"status {response.status_code}")

        try:
            return response.json()
        except ValueError:
            raise PublishFailureError(provider, "reply is not JSON")


class MockSocialClient(SocialClient):
    """Records share requests and answers like the provider would.

    Tokens listed in ``expired_tokens`` are refused like an expired login.
    """

    def __init__(self) -> None:
        self.sent: list[ShareRequest] = []
        self.fail = False
        self.expired_tokens: set[str] = set()

    async def send(self, request: ShareRequest) -> dict[str, Any]:
        """Record the request and return a canned reply.

        Raises:
            CredentialRejectedError: If the request carries an expired token
            PublishFailureError: If ``fail`` is set
        """
        self.sent.append(request)
        if _access_token(request) in self.expired_tokens:
            raise CredentialRejectedError(request.provider.value)
        if self.fail:
            raise PublishFailureError(request.provider.value, "status 503")

        post_id = str(1000 + len(self.sent))
        if request.body is not None:
            # Twitter API v2 shape
            return {"data": {"id": post_id, "text": request.body.get("text")}}
        # Graph API shape
        return {"id": f"10{post_id}_{post_id}"}


def _access_token(request: ShareRequest) -> str | None:
    bearer = request.headers.get("Authorization", "")
    if bearer.startswith("Bearer "):
        return bearer.removeprefix("Bearer ")
    return (request.form or {}).get("access_token")

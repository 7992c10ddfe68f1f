"""JSON-over-HTTP calls shared by the provider login clients."""

from typing import Any

import httpx
import logfire

from hello.adapter.error import ProviderError

DEFAULT_TIMEOUT = 30.0


async def fetch_json(
    method: str,
    url: str,
    *,
    error: type[ProviderError],
    action: str,
    timeout: float = DEFAULT_TIMEOUT,
    **kwargs: Any,
) -> Any:
    """Make one request and decode the JSON reply.

    Args:
        method: HTTP method
        url: Endpoint
        error: Provider-specific error to raise
        action: What the call does, for logs and error messages
        timeout: Seconds before giving up
        **kwargs: Passed to httpx (params, data, headers, auth)

    Returns:
        Decoded JSON body

    Raises:
        ProviderError: ``error`` on transport failures and non-200 replies
    """
    try:
        async with httpx.AsyncClient() as client:
            response = await client.request(method, url, timeout=timeout, **kwargs)
    except httpx.HTTPError as e:
        logfire.error(f"{action} HTTP error", url=url, error=str(e))
        raise error(f"HTTP error during {action.lower()}: {e}")

    if response.status_code != 200:
        logfire.error(
            f"{action} failed",
            url=url,
            status_code=response.status_code,
            error=response.text,
        )
        raise error(f"{action} failed: {response.status_code}")

    return response.json()

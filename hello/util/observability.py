"""Logfire setup and instrumentation.

Services log through logfire directly:

    logfire.info("Favorite updated", identity_id=identity.id)

    with logfire.span("identity_service.upsert", provider=payload.provider):
        ...
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from hello.config import ObservabilitySettings, Settings


def _sends_to_logfire(observability: ObservabilitySettings) -> bool:
    """Explicit OBSERVABILITY__SEND_TO_LOGFIRE wins; otherwise send iff a token is set."""
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire once at startup, before the app is created.

    Args:
        settings: Application settings
    """
    observability = settings.observability
    send_to_logfire = _sends_to_logfire(observability)

    logfire.configure(
        service_name="hello-social",
        service_version="0.1.0",
        environment=settings.environment,
        token=observability.logfire_token,
        send_to_logfire=send_to_logfire,
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Observability configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request, tagged with method and path.

    The session cookie is never recorded.
    """

    def _request_attributes(request, attributes):
        return {
            **attributes,
            "method": request.method,
            "path": request.url.path,
            "signed_in": "auth_token" in request.cookies,
        }

    logfire.instrument_fastapi(app, request_attributes_mapper=_request_attributes)


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace identity queries; span context is appended to SQL as comments."""
    logfire.instrument_sqlalchemy(engine=engine.sync_engine, enable_commenter=True)


def instrument_httpx() -> None:
    """Trace outbound OAuth and publish calls."""
    logfire.instrument_httpx()

"""FastAPI application."""

from dishka import AsyncContainer
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from hello.config import Settings
from hello.interface.api.routes import auth, health, home, identities, share
from hello.util.di.container import create_container, setup_di
from hello.util.observability import instrument_fastapi, instrument_httpx

ROUTERS = (
    health.router,
    home.router,
    auth.router,
    identities.router,
    share.router,
)


def create_app(container: AsyncContainer | None = None) -> FastAPI:
    """Build the app around a DI container.

    Logfire must already be configured: start_app.py does it for the
    server and tests/conftest.py for tests.

    Args:
        container: DI container; the production container when omitted
    """
    settings = Settings()

    app_instance = FastAPI(
        title="Hello Social API",
        description="Sign in with Twitter or Facebook, pick a favorite color, share it",
        version="0.1.0",
    )

    instrument_httpx()
    instrument_fastapi(app_instance)

    # The session cookie must travel with cross-origin frontend requests
    app_instance.add_middleware(
        CORSMiddleware,
        allow_origins=sorted({settings.api.frontend_url, "http://localhost:3000"}),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Origin"],
        max_age=600,
    )

    setup_di(app_instance, container or create_container())

    for router in ROUTERS:
        app_instance.include_router(router)

    return app_instance


# Imported by uvicorn from start_app.py
app = create_app()

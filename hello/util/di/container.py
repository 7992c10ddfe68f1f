"""Production container and FastAPI wiring."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from hello.util.di import build_providers


def create_container() -> AsyncContainer:
    """Container with every component's production implementation."""
    return make_async_container(*build_providers(), FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app and close it on shutdown."""
    setup_dishka(container, app)

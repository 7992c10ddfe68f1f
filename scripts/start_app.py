#!/usr/bin/env python3
"""Serve the API with uvicorn, with startup failures reported to Logfire."""

import sys

import logfire
import uvicorn

from hello.config import Settings
from hello.util.logging import setup_logging
from hello.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    # Configure before the app module is imported by uvicorn
    configure_logfire(settings)
    setup_logging(settings)

    logfire.info("Starting API", environment=settings.environment, port=settings.port)

    try:
        uvicorn.run(
            "hello.interface.api.app:app",
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )
    except Exception as e:
        logfire.error(
            "API failed to start",
            error=str(e),
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())

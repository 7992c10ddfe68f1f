"""Standard library logging setup.

Routes log through ``logging.getLogger(__name__)``; services log through
logfire. Records from the standard loggers are also forwarded to logfire
so both end up in the same trace.
"""

import logging
import sys

import logfire

from hello.config import Settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def _level_for(settings: Settings) -> int:
    if settings.debug:
        return logging.DEBUG
    if settings.environment == "test":
        return logging.WARNING
    return logging.INFO


def setup_logging(settings: Settings) -> None:
    """Log to stdout at a level chosen by DEBUG and ENVIRONMENT.

    Args:
        settings: Application settings
    """
    level = _level_for(settings)

    stdout = logging.StreamHandler(sys.stdout)
    stdout.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    logging.basicConfig(
        level=level,
        handlers=[stdout, logfire.LogfireLoggingHandler()],
        force=True,
    )

    # Transport chatter; logfire already traces outbound calls
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        f"Logging configured: environment={settings.environment}, "
        f"level={logging.getLevelName(level)}"
    )

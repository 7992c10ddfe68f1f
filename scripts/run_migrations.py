#!/usr/bin/env python3
"""Apply Alembic migrations before the app starts.

Usage:
    python scripts/run_migrations.py            # upgrade to head
    python scripts/run_migrations.py <revision> # upgrade to a revision
"""

import sys

import logfire
from alembic import command
from alembic.config import Config

from hello.config import Settings
from hello.util.logging import setup_logging
from hello.util.observability import configure_logfire


def main(argv: list[str]) -> int:
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)

    revision = argv[1] if len(argv) > 1 else "head"

    with logfire.span("run_migrations", revision=revision):
        try:
            command.upgrade(Config("alembic.ini"), revision)
        except Exception as e:
            logfire.error(
                "Database migration failed",
                revision=revision,
                error=str(e),
                _exc_info=sys.exc_info(),
            )
            # Fail the deploy rather than serve a stale schema
            raise

    logfire.info("Database migrated", revision=revision)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))

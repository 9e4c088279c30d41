#!/usr/bin/env python3
"""Apply Alembic migrations, reporting failures to Logfire."""

import sys
import logfire
from alembic import command
from alembic.config import Config

from intralink.config import Settings
from intralink.util.logging import setup_logging
from intralink.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info("Starting database migrations", environment=settings.environment)

        command.upgrade(Config("alembic.ini"), "head")

        logfire.info("Database migrations completed successfully")
        return 0

    except Exception as e:
        logfire.error(
            "Database migration failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        # Fail the deploy rather than serve a stale schema
        raise


if __name__ == "__main__":
    sys.exit(main())

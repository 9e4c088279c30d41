#!/usr/bin/env python3
"""Start the IntraLink API with Logfire tracking of startup errors."""

import sys
import logfire
import uvicorn

from intralink.config import Settings
from intralink.util.logging import setup_logging
from intralink.util.observability import configure_logfire


def main() -> int:
    """Start the application and log any startup errors to Logfire."""
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    try:
        logfire.info(
            "Starting IntraLink API", host=settings.host, port=settings.port
        )

        # Importing the app module builds the DI container
        uvicorn.run(
            "intralink.interface.api.app:app",
            host=settings.host,
            port=settings.port,
            log_level="debug" if settings.debug else "info",
        )

        return 0

    except Exception as e:
        logfire.error(
            "Application startup failed",
            error=str(e),
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise


if __name__ == "__main__":
    sys.exit(main())

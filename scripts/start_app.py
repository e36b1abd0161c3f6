#!/usr/bin/env python3
"""Serve the API with uvicorn.

Logging and Logfire are configured before the app factory runs, so errors
raised while the container or routes are built are reported too.
"""

import sys

import logfire
import uvicorn

from reviewbot.config import Settings
from reviewbot.util.logging import setup_logging
from reviewbot.util.observability import configure_logfire


def main() -> int:
    settings = Settings()

    setup_logging(settings)
    configure_logfire(settings)

    logfire.info(
        "Starting auth API",
        environment=settings.environment,
        port=settings.port,
        git_sha=settings.git_sha,
    )

    try:
        uvicorn.run(
            "reviewbot.interface.api.app:create_app",
            factory=True,
            host="0.0.0.0",
            port=settings.port,
            log_level="debug" if settings.debug else "info",
            # Keeps the uvicorn.access level set by setup_logging
            log_config=None,
        )
    except Exception as e:
        logfire.error(
            "Auth API failed to start",
            error_type=type(e).__name__,
            _exc_info=sys.exc_info(),
        )
        raise

    return 0


if __name__ == "__main__":
    sys.exit(main())

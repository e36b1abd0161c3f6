"""Logfire setup and instrumentation hooks.

Domain services emit their own spans, e.g.::

    with logfire.span("session_service.bind", user_id=str(user_id)):
        ...

Plaintext passwords, credential hashes and session tokens must never appear
in span attributes. The scrubber below is a backstop for attribute names
that slip through.
"""

import logfire
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine

from reviewbot.config import Settings

# Attribute names redacted by Logfire in addition to its defaults
_SCRUBBED_ATTRIBUTES = [
    "credential_hash",
    "current_password",
    "new_password",
    "token_hash",
    "session_id",
]


def _send_to_logfire(settings: Settings) -> bool:
    observability = settings.observability
    if observability.send_to_logfire is not None:
        return observability.send_to_logfire
    return bool(observability.logfire_token)


def configure_logfire(settings: Settings) -> None:
    """Configure Logfire for the API and the management scripts.

    Without a token (and without ``OBSERVABILITY__SEND_TO_LOGFIRE=true``)
    spans only go to the console.

    Args:
        settings: Application settings
    """
    send_to_logfire = _send_to_logfire(settings)

    logfire.configure(
        service_name="reviewbot-auth",
        service_version=settings.git_sha,
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
        token=settings.observability.logfire_token,
        scrubbing=logfire.ScrubbingOptions(extra_patterns=_SCRUBBED_ATTRIBUTES),
        console=logfire.ConsoleOptions(
            colors="auto",
            span_style="show-parents",
            include_timestamps=True,
            verbose=settings.debug,
        ),
    )

    logfire.info(
        "Logfire configured",
        environment=settings.environment,
        send_to_logfire=send_to_logfire,
    )


def instrument_fastapi(app: FastAPI) -> None:
    """Trace every request.

    Headers are left out because the Cookie header carries the session
    token. Parsed endpoint arguments are dropped too: the OAuth callbacks
    receive the authorization code as one.

    Args:
        app: FastAPI application instance
    """

    def _request_attributes(request, attributes):
        attributes = {**attributes, "values": {}}
        attributes["method"] = request.method
        attributes["path"] = request.url.path
        return attributes

    logfire.instrument_fastapi(
        app,
        capture_headers=False,
        request_attributes_mapper=_request_attributes,
    )


def instrument_sqlalchemy(engine: AsyncEngine) -> None:
    """Trace queries against the identity and session tables.

    Args:
        engine: SQLAlchemy async engine
    """
    logfire.instrument_sqlalchemy(engine=engine.sync_engine)


def instrument_httpx() -> None:
    """Trace token exchanges and profile fetches against OAuth providers."""
    logfire.instrument_httpx()

"""Session cookie helpers."""

from typing import Literal

from fastapi import Response

from reviewbot.config import Settings


def _samesite(settings: Settings) -> Literal["lax", "strict", "none"]:
    # Browsers drop SameSite=None cookies that are not secure
    if settings.session.samesite == "none" and not settings.is_production:
        return "lax"
    return settings.session.samesite


def set_session_cookie(response: Response, token: str, settings: Settings) -> None:
    """Attach the HTTP-only session cookie to a response.

    The cookie is marked secure in production.
    """
    response.set_cookie(
        key=settings.session.cookie_name,
        value=token,
        httponly=True,
        secure=settings.is_production,
        samesite=_samesite(settings),
        path="/",
        max_age=settings.session.max_age_seconds,
    )


def clear_session_cookie(response: Response, settings: Settings) -> None:
    """Remove the session cookie from the client."""
    response.delete_cookie(
        key=settings.session.cookie_name,
        path="/",
        httponly=True,
        secure=settings.is_production,
        samesite=_samesite(settings),
    )

"""Domain value objects."""

from reviewbot.domain.value.identifiers import SessionToken, UserId
from reviewbot.domain.value.types import (
    AuthProvider,
    Email,
    OAuthProviderInfo,
    normalize_email,
)

__all__ = [
    # Identifiers
    "UserId",
    "SessionToken",
    # Types
    "AuthProvider",
    "Email",
    "OAuthProviderInfo",
    "normalize_email",
]

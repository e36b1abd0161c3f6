"""Domain value objects.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules.
"""

import re
from enum import Enum

from pydantic import field_validator

from reviewbot.domain.value.common import RootValueObject, ValueObject

_EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(value: str) -> str:
    """Canonical form used for storage and lookups (case-insensitive)."""
    return value.strip().lower()


class AuthProvider(str, Enum):
    """Flow that created an identity.

    LOCAL is email + password; the others are OAuth providers.
    """

    LOCAL = "local"
    GOOGLE = "google"
    DISCORD = "discord"

    @property
    def is_oauth(self) -> bool:
        """Whether this provider authenticates through an OAuth redirect."""
        return self is not AuthProvider.LOCAL


class Email(RootValueObject[str]):
    """Syntactically valid, normalised email address."""

    @field_validator("root")
    @classmethod
    def validate_email_format(cls, v: str) -> str:
        """Validate shape and normalise case."""
        v = normalize_email(v)
        if len(v) > 255 or not _EMAIL_PATTERN.match(v):
            raise ValueError("Please provide a valid email address")
        return v


class OAuthProviderInfo(ValueObject):
    """Profile returned by an OAuth provider after a completed callback.

    ``email`` is whatever the provider reported; it is not verified here.
    """

    provider: AuthProvider
    provider_user_id: str  # Durable account key issued by the provider
    email: str | None = None
    display_name: str | None = None
    avatar_url: str | None = None

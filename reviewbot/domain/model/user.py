"""User aggregate root.

A user is one identity reachable through up to three origins: a local
password, a Google account and a Discord account.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from reviewbot.domain.model.common import DomainModel
from reviewbot.domain.value import AuthProvider, UserId, normalize_email

_PROVIDER_ID_FIELDS = {
    AuthProvider.GOOGLE: "google_id",
    AuthProvider.DISCORD: "discord_id",
}


def provider_id_field(provider: AuthProvider) -> str:
    """Name of the user field holding the account ID for an OAuth provider.

    Raises:
        ValueError: If the provider is not an OAuth provider
    """
    try:
        return _PROVIDER_ID_FIELDS[provider]
    except KeyError:
        raise ValueError(f"{provider.value} has no provider ID field")


class User(DomainModel):
    """User aggregate root.

    ``auth_provider`` records which flow created the account. It does not
    restrict which providers may be linked later.
    """

    id: UserId
    email: str = Field(min_length=3, max_length=255)
    credential_hash: Optional[str] = None  # None for OAuth-only accounts
    google_id: Optional[str] = None
    discord_id: Optional[str] = None
    auth_provider: AuthProvider = AuthProvider.LOCAL
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @field_validator("email")
    @classmethod
    def normalize(cls, v: str) -> str:
        """Emails are compared case-insensitively."""
        return normalize_email(v)

    @property
    def has_password(self) -> bool:
        """Whether the account can log in locally."""
        return bool(self.credential_hash)

    def provider_id(self, provider: AuthProvider) -> Optional[str]:
        """Linked account ID for an OAuth provider, if any."""
        return getattr(self, provider_id_field(provider))

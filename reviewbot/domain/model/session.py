"""Session binding entity."""

from datetime import datetime

from reviewbot.domain.model.common import DomainModel
from reviewbot.domain.value import SessionToken, UserId


class Session(DomainModel):
    """Association between an opaque session token and a user.

    Only a digest of the token is persisted; the raw value lives in the
    client's cookie.
    """

    token: SessionToken
    user_id: UserId
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        """Whether the binding has outlived its TTL."""
        return now >= self.expires_at

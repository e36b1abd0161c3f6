"""Domain model entities."""

from reviewbot.domain.model.session import Session
from reviewbot.domain.model.user import User, provider_id_field

__all__ = [
    "Session",
    "User",
    "provider_id_field",
]

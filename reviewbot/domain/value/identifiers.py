"""Strongly typed identifiers for domain entities."""

from typing import NewType
from uuid import UUID

UserId = NewType("UserId", UUID)

# Opaque session token handed to the client as a cookie value
SessionToken = NewType("SessionToken", str)

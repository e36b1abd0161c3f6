"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

import hashlib
from typing import Any, Dict
from uuid import UUID

from reviewbot.domain.model import Session, User
from reviewbot.domain.value import AuthProvider, SessionToken, UserId


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Rows selected without the ``password`` column map to a user with no
    credential hash.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(UUID(row["id"]) if isinstance(row["id"], str) else row["id"]),
        email=row["email"],
        credential_hash=row.get("password"),
        google_id=row.get("google_id"),
        discord_id=row.get("discord_id"),
        auth_provider=AuthProvider(row["auth_provider"]),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict.

    Args:
        user: User domain model

    Returns:
        Dict suitable for database insertion/update
    """
    return {
        "id": user.id,
        "email": user.email,
        "password": user.credential_hash,
        "google_id": user.google_id,
        "discord_id": user.discord_id,
        "auth_provider": user.auth_provider.value,
        "created_at": user.created_at,
        "updated_at": user.updated_at,
    }


def hash_session_token(token: SessionToken) -> str:
    """Digest stored in place of the raw session token."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


def session_to_dict(session: Session) -> Dict[str, Any]:
    """Convert Session domain model to database dict.

    Args:
        session: Session binding

    Returns:
        Dict suitable for database insertion
    """
    return {
        "token_hash": hash_session_token(session.token),
        "user_id": session.user_id,
        "created_at": session.created_at,
        "expires_at": session.expires_at,
    }

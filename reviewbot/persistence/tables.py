"""SQLAlchemy table definitions.

Tables are used with SQLAlchemy core; rows are converted to domain models
by the functions in ``reviewbot.persistence.mappers``.
"""

from sqlalchemy import Column, ForeignKey, Index, MetaData, String, Table, func
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("email", String(255), nullable=False, unique=True),
    Column("password", String(255), nullable=True),  # argon2 hash, never plaintext
    Column("google_id", String(255), nullable=True, unique=True),
    Column("discord_id", String(255), nullable=True, unique=True),
    Column("auth_provider", String(20), nullable=False, server_default="local"),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    ),
    Column(
        "updated_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    ),
)

# ============================================================================
# SESSIONS TABLE
# ============================================================================
sessions_table = Table(
    "sessions",
    metadata,
    # SHA-256 hex digest of the cookie value
    Column("token_hash", String(64), primary_key=True),
    Column(
        "user_id",
        UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column(
        "created_at",
        TIMESTAMP(timezone=True),
        nullable=False,
        server_default=func.now(),
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
)

Index("idx_sessions_user_id", sessions_table.c.user_id)
Index("idx_sessions_expires_at", sessions_table.c.expires_at)

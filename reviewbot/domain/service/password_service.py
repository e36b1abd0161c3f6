"""Credential hashing domain service."""

import asyncio

import logfire
from argon2 import PasswordHasher, extract_parameters
from argon2.exceptions import InvalidHashError, VerificationError

from reviewbot.config import PasswordSettings
from reviewbot.domain.error import ValidationError

from .base import Service


class PasswordService(Service):
    """Hashes and verifies local passwords with argon2id.

    Hashing is CPU-bound and slow, so both operations run on a
    worker thread and the calling coroutine is suspended until they finish.
    A cancelled caller does not interrupt the thread; the result is simply
    dropped and nothing is written.
    """

    def __init__(self, password_settings: PasswordSettings) -> None:
        """Initialize password service.

        Args:
            password_settings: Cost parameters and password policy
        """
        self.password_settings = password_settings
        self._hasher = PasswordHasher(
            time_cost=password_settings.time_cost,
            memory_cost=password_settings.memory_cost,
            parallelism=password_settings.parallelism,
        )

    def validate_strength(self, password: str) -> None:
        """Reject passwords shorter than the configured minimum.

        Raises:
            ValidationError: If the password is too short
        """
        min_length = self.password_settings.min_length
        if not password or len(password) < min_length:
            raise ValidationError(
                f"Password must be at least {min_length} characters long"
            )

    async def hash_password(self, password: str) -> str:
        """Hash a plaintext password.

        Args:
            password: Plaintext password

        Returns:
            Encoded argon2 hash (salt and parameters included)

        Raises:
            ValidationError: If the password is empty
        """
        if not password:
            raise ValidationError("Password is required")

        with logfire.span("password_service.hash_password"):
            return await asyncio.shield(asyncio.to_thread(self._hasher.hash, password))

    async def verify_password(self, password: str, credential_hash: str) -> bool:
        """Check a plaintext password against a stored hash.

        The comparison happens inside argon2 and does not leak a prefix match
        through timing.

        Args:
            password: Plaintext password
            credential_hash: Stored hash

        Returns:
            True if the password matches
        """
        if not password or not credential_hash:
            return False

        with logfire.span("password_service.verify_password"):
            return await asyncio.shield(
                asyncio.to_thread(self._verify, password, credential_hash)
            )

    def needs_rehash(self, credential_hash: str) -> bool:
        """Whether a hash was produced with outdated cost parameters."""
        try:
            return self._hasher.check_needs_rehash(credential_hash)
        except InvalidHashError:
            return False

    @staticmethod
    def is_hashed(value: str) -> bool:
        """Whether a value is an encoded argon2 hash rather than plaintext."""
        try:
            extract_parameters(value)
        except InvalidHashError:
            return False
        return True

    def _verify(self, password: str, credential_hash: str) -> bool:
        try:
            return self._hasher.verify(credential_hash, password)
        except VerificationError:
            return False
        except InvalidHashError:
            logfire.warn("Stored credential hash is malformed")
            return False

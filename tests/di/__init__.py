"""Mock providers for testing."""

from .container import build_test_container
from .discord import MockDiscordProvider
from .google import MockGoogleProvider
from .persistence import MockPersistenceProvider

__all__ = [
    "MockDiscordProvider",
    "MockGoogleProvider",
    "MockPersistenceProvider",
    "build_test_container",
]

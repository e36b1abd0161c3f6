"""Infrastructure providers.

Production subclasses are imported here so that ``get_provider`` can find
them through ``__subclasses__()``.
"""

from .discord import DiscordProvider, ProdDiscordProvider
from .google import GoogleProvider, ProdGoogleProvider
from .oauth import OAuthAggregatorProvider
from .persistence import PersistenceProvider, ProdPersistenceProvider

__all__ = [
    "DiscordProvider",
    "GoogleProvider",
    "OAuthAggregatorProvider",
    "PersistenceProvider",
    "ProdDiscordProvider",
    "ProdGoogleProvider",
    "ProdPersistenceProvider",
]

"""Dependency injection wiring.

Mockable components (``persistence``, ``google``, ``discord``) are declared
as a base provider with a production subclass here and a mock subclass
under ``tests/di``. Which one is used is decided when the container is
built.
"""

from typing import Type

from reviewbot.util.di.application import ProdApplicationProvider
from reviewbot.util.di.base import Component, ProviderBase
from reviewbot.util.di.core import ProdConfigProvider, ProdRequestProvider
from reviewbot.util.di.domain import ProdDomainProvider
from reviewbot.util.di.infrastructure import (
    DiscordProvider,
    GoogleProvider,
    OAuthAggregatorProvider,
    PersistenceProvider,
)

PROVIDERS: list[Type[ProviderBase]] = [
    ProdConfigProvider,
    ProdRequestProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    PersistenceProvider,
    GoogleProvider,
    DiscordProvider,
    # Needs both OAuth clients
    OAuthAggregatorProvider,
]


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation slot."""
    return {
        base.__mock_component__ for base in PROVIDERS if base.__mock_component__
    }


def get_provider(
    base: Type[ProviderBase], use_mock: bool = False
) -> Type[ProviderBase]:
    """Resolve a provider entry to the class to instantiate.

    Concrete providers (no subclasses) are returned as is. For a component
    base the subclass whose ``__is_mock__`` matches ``use_mock`` is picked.

    Raises:
        ValueError: If the component has no implementation of that kind
    """
    implementations = {impl.__is_mock__: impl for impl in base.__subclasses__()}
    if not implementations:
        return base

    try:
        return implementations[use_mock]
    except KeyError:
        kind = "mock" if use_mock else "production"
        raise ValueError(
            f"No {kind} implementation for {base.__mock_component__ or base.__name__}"
        )


__all__ = [
    "Component",
    "ProviderBase",
    "PROVIDERS",
    "get_provider",
    "mockable_components",
]

"""Container construction for the API, the scripts and the tests."""

from collections.abc import Collection

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider

from reviewbot.util.di import PROVIDERS, Component, get_provider


def build_container(mocked: Collection[Component] = ()) -> AsyncContainer:
    """Build a container, swapping in mocks for the named components.

    Mock providers must have been imported (``tests.di`` does this) before
    a component can be mocked.

    Args:
        mocked: Components to serve from their mock provider

    Returns:
        Configured DI container
    """
    providers = [
        get_provider(base, use_mock=base.__mock_component__ in mocked)()
        for base in PROVIDERS
    ]
    return make_async_container(*providers, FastapiProvider())


def create_container() -> AsyncContainer:
    """Production container: PostgreSQL and the real OAuth providers."""
    return build_container()

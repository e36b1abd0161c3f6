"""Provider base class and component names."""

from typing import ClassVar, Literal

from dishka import Provider

# Components with a swappable (production / mock) implementation
Component = Literal["persistence", "google", "discord"]


class ProviderBase(Provider):
    """Dishka provider carrying mock-selection metadata.

    Attributes:
        __mock_component__: Component this provider implements; None for
            providers that are never mocked
        __is_mock__: Whether this is the mock implementation
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False

"""Marker base for domain services."""


class Service:
    """Stateless coordinator over repositories and other services.

    Services own the business rules; repositories only store and fetch.
    """

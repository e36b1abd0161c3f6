"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class ConfigurationError(UtilError):
    """A required setting is missing or still holds its placeholder value.

    Raised while the container builds a component, so a misconfigured
    deployment fails on the first request that needs it.
    """

    def __init__(self, setting: str, reason: str = "must be configured"):
        self.setting = setting
        super().__init__(f"{setting} {reason}")

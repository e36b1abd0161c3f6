"""Infrastructure layer errors."""


class AdapterError(Exception):
    """Base infrastructure error."""

    pass


class OAuthError(AdapterError):
    """OAuth provider rejected the flow or could not be reached."""

    pass

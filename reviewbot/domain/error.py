"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed email, weak password or otherwise user-correctable input."""

    pass


class DuplicateIdentityError(DomainError):
    """Raised when a unique field (email or provider ID) is already taken."""

    def __init__(self, field: str, value: str):
        self.field = field
        self.value = value
        super().__init__(f"An account with this {field} already exists")


class AuthenticationFailure(DomainError):
    """Bad credentials or missing session.

    The message does not say which check failed; callers log the root cause
    separately.
    """

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message)


class MissingEmailError(DomainError):
    """OAuth profile carried no email and matched no existing identity."""

    def __init__(self, provider: str):
        self.provider = provider
        super().__init__(f"No email provided by {provider}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class StoreUnavailableError(DomainError):
    """The identity or session store could not be reached."""

    pass

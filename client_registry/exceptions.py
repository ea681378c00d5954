"""Exceptions raised by the client registry."""


class RegistryError(RuntimeError):
    """Base class for client registry errors."""

    def __init__(self, reason: str) -> None:
        """Initialize with a human-readable ``reason``."""
        super(RegistryError, self).__init__(reason)
        self.reason = reason


class NotFound(RegistryError):
    """A requested resource (e.g. a user) does not exist."""


class Forbidden(RegistryError):
    """The acting principal is not authorized to perform the action."""


class UnprocessableInput(RegistryError):
    """The request was well-formed, but contained invalid data."""


class Conflict(RegistryError):
    """The request conflicts with existing state, e.g. a reused client ID."""


class Unavailable(RegistryError):
    """A backing service (e.g. the database) failed."""

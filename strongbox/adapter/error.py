"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class TransportError(AdapterError):
    """A registry or daemon request failed.

    Carries the HTTP status code when the remote answered with an error.
    """

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)

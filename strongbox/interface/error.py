"""Interface layer errors."""


class InterfaceError(Exception):
    """Base interface error."""

    pass


class UsageError(InterfaceError):
    """The command was invoked with invalid arguments."""

    pass

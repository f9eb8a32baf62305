"""Errors raised while wiring the client together."""


class UtilError(Exception):
    """Base utility error."""

    pass


class DependencyInjectionError(UtilError):
    """A provider component has no implementation for the requested mode."""

    def __init__(self, component: str, mock: bool):
        self.component = component
        self.mock = mock
        kind = "mock" if mock else "production"
        super().__init__(f"No {kind} implementation for {component}")

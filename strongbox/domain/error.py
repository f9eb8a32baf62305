"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ParseError(DomainError):
    """Malformed path expression or segment text."""

    pass


class ValidationError(DomainError):
    """Syntactically valid input that is semantically illegal.

    For example a wildcard credential name or an empty set of alternatives.
    """

    pass


class DecodeError(DomainError):
    """Envelope body could not be decoded into a known variant."""

    pass


class BusinessRuleViolationError(DomainError):
    """Business rule violation error."""

    pass


class InviteTransitionError(BusinessRuleViolationError):
    """Raised when an invite transition is applied in the wrong state."""

    def __init__(self, transition: str, state: str):
        self.transition = transition
        self.state = state
        super().__init__(f"Cannot {transition} an invite in state {state}")


class NotFoundError(DomainError):
    """Raised when a lookup returns zero or ambiguous matches."""

    def __init__(self, resource: str, identifier: str | None = None):
        self.resource = resource
        self.identifier = identifier
        if identifier is None:
            super().__init__(f"{resource} not found")
        else:
            super().__init__(f"{resource} not found: {identifier}")

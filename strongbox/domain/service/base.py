"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the client-side rules that span several registry
    entities, such as resolving names before a write.
    """

    pass

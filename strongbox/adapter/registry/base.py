"""Shared helpers for registry clients."""

from typing import Any

from strongbox.adapter.registry.dispatcher import Dispatcher
from strongbox.domain.error import DecodeError
from strongbox.domain.model import Envelope, unwrap_body
from strongbox.domain.value import EntityKind


class RegistryClient:
    """Base class for clients of one registry resource."""

    def __init__(self, dispatcher: Dispatcher) -> None:
        self.dispatcher = dispatcher

    @staticmethod
    def decode_one(kind: EntityKind, raw: Any, *variants: type) -> Envelope:
        """Decode one envelope, requiring one of ``variants`` as its body."""
        return unwrap_body(kind, raw, *variants)

    @staticmethod
    def decode_many(kind: EntityKind, raw: Any, *variants: type) -> list[Envelope]:
        """Decode a JSON array of envelopes.

        Raises:
            DecodeError: If the response is not an array or any item is invalid
        """
        if not isinstance(raw, list):
            raise DecodeError(f"Expected a list of {kind.value} envelopes")
        return [unwrap_body(kind, item, *variants) for item in raw]

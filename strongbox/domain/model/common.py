"""Base model for envelope bodies and envelopes."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for registry entities.

    Bodies never change in place: a new version of an entity is a new body
    wrapped in the next envelope version.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

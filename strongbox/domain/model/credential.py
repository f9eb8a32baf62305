"""Credential bodies.

Two body versions exist on the wire. V1 represents an unset credential by an
``undefined`` value; V2 carries an explicit state and a version counter.
Both address the credential by org, project, path expression and lowercase
name.
"""

from typing import Literal

from pydantic import Field, model_validator

from strongbox.domain.model.common import DomainModel
from strongbox.domain.value import (
    CredentialState,
    OrgId,
    PathExp,
    ProjectId,
)
from strongbox.domain.value.common import ValueObject


class CredentialValue(ValueObject):
    """Typed credential value.

    The ``undefined`` type is the unset marker produced by unset flows.
    """

    type: Literal["string", "number", "undefined"]
    value: str | int | float | None = None

    @model_validator(mode="after")
    def validate_value_type(self) -> "CredentialValue":
        """Ensure the value matches its declared type."""
        if self.type == "undefined":
            if self.value is not None:
                raise ValueError("An undefined credential value cannot hold data")
        elif self.type == "string":
            if not isinstance(self.value, str):
                raise ValueError("A string credential value must be a string")
        elif isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise ValueError("A number credential value must be numeric")
        return self

    @classmethod
    def string(cls, value: str) -> "CredentialValue":
        return cls(type="string", value=value)

    @classmethod
    def number(cls, value: int | float) -> "CredentialValue":
        return cls(type="number", value=value)

    @classmethod
    def unset(cls) -> "CredentialValue":
        return cls(type="undefined")

    @property
    def is_unset(self) -> bool:
        return self.type == "undefined"

    def __str__(self) -> str:
        return "" if self.value is None else str(self.value)


class CredentialV1Body(DomainModel):
    """Version 1 credential body."""

    type: Literal["credential"] = "credential"
    org_id: OrgId
    project_id: ProjectId
    name: str
    path_exp: PathExp
    value: CredentialValue

    @property
    def state(self) -> CredentialState:
        return CredentialState.UNSET if self.value.is_unset else CredentialState.SET


class CredentialV2Body(DomainModel):
    """Version 2 credential body with explicit state.

    Invariant: ``state`` is unset if and only if ``value`` is absent.
    """

    type: Literal["credential-v2"] = "credential-v2"
    org_id: OrgId
    project_id: ProjectId
    name: str
    path_exp: PathExp
    value: CredentialValue | None = None
    state: CredentialState
    credential_version: int = Field(default=1, ge=1)

    @model_validator(mode="after")
    def validate_state_value_pairing(self) -> "CredentialV2Body":
        """Pair the state with the presence of a value."""
        if self.state == CredentialState.UNSET:
            if self.value is not None:
                raise ValueError("An unset credential cannot carry a value")
        elif self.value is None or self.value.is_unset:
            raise ValueError("A set credential requires a value")
        return self


def build_credential_body(
    org_id: OrgId,
    project_id: ProjectId,
    name: str,
    path_exp: PathExp,
    value: CredentialValue,
) -> CredentialV2Body:
    """Build a credential body, deriving its state from the produced value.

    An unset marker becomes ``state=unset`` with no value; anything else is
    ``state=set`` with the value.
    """
    if value.is_unset:
        return CredentialV2Body(
            org_id=org_id,
            project_id=project_id,
            name=name,
            path_exp=path_exp,
            value=None,
            state=CredentialState.UNSET,
        )
    return CredentialV2Body(
        org_id=org_id,
        project_id=project_id,
        name=name,
        path_exp=path_exp,
        value=value,
        state=CredentialState.SET,
    )

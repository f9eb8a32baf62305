"""Org, project, team and user bodies.

Orgs, projects and teams are immutable for the purposes of this client, so
their identifiers are derived from their content. Users are mutable.
"""

from typing import Literal

from strongbox.domain.model.common import DomainModel
from strongbox.domain.value import OrgId


class OrgBody(DomainModel):
    """Organization body."""

    type: Literal["org"] = "org"
    name: str


class ProjectBody(DomainModel):
    """Project body, scoped to an org."""

    type: Literal["project"] = "project"
    name: str
    org_id: OrgId


class TeamBody(DomainModel):
    """Team body, scoped to an org."""

    type: Literal["team"] = "team"
    name: str
    org_id: OrgId


class UserBody(DomainModel):
    """Registered user body."""

    type: Literal["user"] = "user"
    username: str
    name: str
    email: str

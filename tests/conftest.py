"""Test configuration and fixtures."""

from dataclasses import dataclass

import pytest

from strongbox.adapter.registry import InMemoryRegistry
from strongbox.config import AddressDefaults
from strongbox.domain.model import (
    OrgEnvelope,
    ProjectEnvelope,
    TeamEnvelope,
    UserEnvelope,
)
from strongbox.domain.value import ProgressEvent


@dataclass
class SeededRegistry:
    """Handles to the entities seeded by :func:`seed_registry`."""

    registry: InMemoryRegistry
    org: OrgEnvelope
    project: ProjectEnvelope
    team: TeamEnvelope
    admin: UserEnvelope
    invitee: UserEnvelope


def seed_registry(registry: InMemoryRegistry) -> SeededRegistry:
    """Seed an org ``acme`` with project ``api``, team ``ops`` and two users.

    The admin is logged in.
    """
    org = registry.add_org("acme")
    project = registry.add_project(org.id, "api")
    team = registry.add_team(org.id, "ops")
    admin = registry.add_user("admin", "Ada Admin", "admin@acme.test")
    invitee = registry.add_user("newbie", "Nia Newbie", "newbie@acme.test")
    registry.login(admin.id)
    return SeededRegistry(
        registry=registry,
        org=org,
        project=project,
        team=team,
        admin=admin,
        invitee=invitee,
    )


class ProgressRecorder:
    """Progress callback that records every event it receives."""

    def __init__(self) -> None:
        self.events: list[ProgressEvent] = []

    def __call__(self, event: ProgressEvent) -> None:
        self.events.append(event)


@pytest.fixture
def defaults() -> AddressDefaults:
    """Addressing defaults with a default environment, org and project."""
    return AddressDefaults(org="acme", project="api", environment=["dev-alice"])


@pytest.fixture
def progress() -> ProgressRecorder:
    return ProgressRecorder()

"""Org and project resolution service."""

from typing import Sequence

import logfire

from strongbox.domain.error import NotFoundError
from strongbox.domain.model import OrgEnvelope, ProjectEnvelope, TeamEnvelope
from strongbox.domain.repository import (
    OrgRepository,
    ProjectRepository,
    TeamRepository,
)
from strongbox.domain.value import OrgId

from .base import Service


class OrgService(Service):
    """Domain service resolving org, project and team names to entities."""

    def __init__(
        self,
        org_repository: OrgRepository,
        project_repository: ProjectRepository,
        team_repository: TeamRepository,
    ) -> None:
        """Initialize org service.

        Args:
            org_repository: Org repository
            project_repository: Project repository
            team_repository: Team repository
        """
        self.org_repository = org_repository
        self.project_repository = project_repository
        self.team_repository = team_repository

    async def resolve_org(self, name: str) -> OrgEnvelope:
        """Resolve an org by name.

        Raises:
            NotFoundError: If no org has this name
        """
        with logfire.span("org_service.resolve_org", org=name):
            org = await self.org_repository.get_by_name(name)
            if org is None:
                logfire.warn("Org not found", org=name)
                raise NotFoundError("Org")
            return org

    async def resolve_project(self, org_id: OrgId, name: str) -> ProjectEnvelope:
        """Resolve a project by name within an org.

        Raises:
            NotFoundError: Unless exactly one project matches
        """
        with logfire.span(
            "org_service.resolve_project", org_id=str(org_id), project=name
        ):
            projects = await self.project_repository.list(org_id, name=name)
            if len(projects) != 1:
                logfire.warn(
                    "Project not found",
                    org_id=str(org_id),
                    project=name,
                    matches=len(projects),
                )
                raise NotFoundError("Project")
            return projects[0]

    async def resolve_teams(
        self, org_id: OrgId, names: Sequence[str]
    ) -> list[TeamEnvelope]:
        """Resolve team names within an org, preserving order.

        Raises:
            NotFoundError: If any name does not match exactly one team
        """
        teams = []
        for name in names:
            matches = await self.team_repository.list(org_id, name=name)
            if len(matches) != 1:
                raise NotFoundError("Team", name)
            teams.append(matches[0])
        return teams

    async def list_orgs(self) -> list[OrgEnvelope]:
        """List every org visible to the caller."""
        return await self.org_repository.list()

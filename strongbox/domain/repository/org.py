"""Org, project and team repository interfaces."""

from abc import ABC, abstractmethod

from strongbox.domain.model import OrgEnvelope, ProjectEnvelope, TeamEnvelope
from strongbox.domain.value import OrgId


class OrgRepository(ABC):
    """Registry access to organizations."""

    @abstractmethod
    async def get_by_name(self, name: str) -> OrgEnvelope | None:
        """Find an org by its exact name.

        Args:
            name: Org name

        Returns:
            The org if found, None otherwise
        """
        pass

    @abstractmethod
    async def list(self) -> list[OrgEnvelope]:
        """List all orgs visible to the caller."""
        pass


class ProjectRepository(ABC):
    """Registry access to projects."""

    @abstractmethod
    async def list(
        self, org_id: OrgId, name: str | None = None
    ) -> list[ProjectEnvelope]:
        """List projects in an org, optionally filtered by exact name.

        Args:
            org_id: Owning org
            name: Optional project name

        Returns:
            Matching projects
        """
        pass


class TeamRepository(ABC):
    """Registry access to teams."""

    @abstractmethod
    async def list(self, org_id: OrgId, name: str | None = None) -> list[TeamEnvelope]:
        """List teams in an org, optionally filtered by exact name."""
        pass

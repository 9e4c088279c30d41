"""Project repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from intralink.domain.model.project import Project
from intralink.domain.value import ProjectId, UserId


class ProjectRepository(ABC):
    """Read access to projects for join request handling."""

    @abstractmethod
    async def find_by_id(self, project_id: ProjectId) -> Optional[Project]:
        """Find a project by ID.

        Args:
            project_id: The project's unique identifier

        Returns:
            The project if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_lead(self, lead_id: UserId) -> list[Project]:
        """Find projects led by a user.

        Used to resolve which join requests a user may answer.

        Args:
            lead_id: The lead's user ID

        Returns:
            Projects led by the user
        """
        pass

    @abstractmethod
    async def claim_seat(self, project_id: ProjectId) -> bool:
        """Take one team seat for a newly accepted member.

        The increment of ``member_count`` is conditional on a free seat
        (the lead holds one), so concurrent approvals cannot overfill a team.

        Args:
            project_id: The project to join

        Returns:
            True if a seat was taken, False if the team is full or the
            project does not exist
        """
        pass

    @abstractmethod
    async def save(self, project: Project) -> Project:
        """Save or update a project (seeding and tests).

        Args:
            project: The project to save

        Returns:
            The saved project
        """
        pass

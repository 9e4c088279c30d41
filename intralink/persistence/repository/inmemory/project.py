"""In-memory project repository for testing."""

from typing import Optional

from intralink.domain.model import Project
from intralink.domain.repository import ProjectRepository
from intralink.domain.value import ProjectId, UserId


class InMemoryProjectRepository(ProjectRepository):
    """In-memory implementation of ProjectRepository for testing."""

    def __init__(self) -> None:
        self._projects: dict[ProjectId, Project] = {}

    async def find_by_id(self, project_id: ProjectId) -> Optional[Project]:
        return self._projects.get(project_id)

    async def find_by_lead(self, lead_id: UserId) -> list[Project]:
        return [p for p in self._projects.values() if p.lead_id == lead_id]

    async def claim_seat(self, project_id: ProjectId) -> bool:
        project = self._projects.get(project_id)
        if project is None:
            return False
        if (
            project.max_team_size is not None
            and project.member_count + 1 >= project.max_team_size
        ):
            return False
        self._projects[project_id] = project.model_copy(
            update={"member_count": project.member_count + 1}
        )
        return True

    async def save(self, project: Project) -> Project:
        self._projects[project.id] = project
        return project

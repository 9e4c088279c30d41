"""Project entity.

Projects are created and edited by the project CRUD feature. For the
collaboration core a project is the target of join requests, answered by
its lead. Accepting a join request takes one of its team seats.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from intralink.domain.model.common import DomainModel
from intralink.domain.value import ProjectId, ProjectStatus, TenantId, UserId


class Project(DomainModel):
    """Student project looking for team members."""

    id: ProjectId
    tenant_id: TenantId
    lead_id: UserId
    title: str = Field(min_length=1, max_length=300)
    description: str = ""
    status: ProjectStatus = ProjectStatus.OPEN
    required_skills: list[str] = Field(default_factory=list)
    max_team_size: Optional[int] = Field(default=None, ge=1)
    member_count: int = Field(default=0, ge=0)  # Accepted join requests
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @property
    def is_open(self) -> bool:
        return self.status is ProjectStatus.OPEN

"""PostgreSQL implementation of Project repository."""

from typing import Optional

from sqlalchemy import and_, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from intralink.domain.model import Project
from intralink.domain.repository import ProjectRepository
from intralink.domain.value import ProjectId, UserId
from intralink.persistence.mappers import project_to_dict, row_to_project
from intralink.persistence.tables import projects_table


class PostgresProjectRepository(ProjectRepository):
    """PostgreSQL implementation of ProjectRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_id(self, project_id: ProjectId) -> Optional[Project]:
        """Find a project by ID."""
        stmt = select(projects_table).where(projects_table.c.id == project_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_project(dict(row)) if row else None

    async def find_by_lead(self, lead_id: UserId) -> list[Project]:
        """Find projects led by a user."""
        stmt = select(projects_table).where(projects_table.c.lead_id == lead_id)
        result = await self.session.execute(stmt)
        return [row_to_project(dict(row)) for row in result.mappings().all()]

    async def claim_seat(self, project_id: ProjectId) -> bool:
        """Increment member_count while a seat is free.

        A concurrent claim on the same row waits for the first to commit and
        then re-checks the condition against the new count.
        """
        stmt = (
            update(projects_table)
            .where(
                and_(
                    projects_table.c.id == project_id,
                    or_(
                        projects_table.c.max_team_size.is_(None),
                        projects_table.c.member_count + 1
                        < projects_table.c.max_team_size,
                    ),
                )
            )
            .values(member_count=projects_table.c.member_count + 1)
            .returning(projects_table.c.member_count)
        )
        result = await self.session.execute(stmt)
        claimed = result.first() is not None
        await self.session.flush()
        return claimed

    async def save(self, project: Project) -> Project:
        """Save a project (create or update)."""
        existing = await self.find_by_id(project.id)
        project_dict = project_to_dict(project)

        if existing:
            stmt = (
                projects_table.update()
                .where(projects_table.c.id == project.id)
                .values(**project_dict)
            )
        else:
            stmt = projects_table.insert().values(**project_dict)
        await self.session.execute(stmt)
        await self.session.flush()
        return project

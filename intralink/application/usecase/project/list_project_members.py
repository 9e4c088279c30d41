"""List project members use case."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import UserSummary
from intralink.domain.model import ProjectJoinPayload
from intralink.domain.service import RequestLedgerService, UserService
from intralink.domain.value import ProjectId


class ProjectMember(BaseModel):
    """A member admitted through an approved join request."""

    request_id: str
    user: UserSummary
    skills: list[str]
    joined_at: Optional[datetime]


class ListProjectMembersRequest(BaseModel):
    """List project members request."""

    project_id: str
    user_id: str  # User ID from authenticated user


class ListProjectMembersResponse(BaseModel):
    """List project members response, in joining order."""

    project_id: str
    members: list[ProjectMember]


class ListProjectMembersUseCase(ActorUseCase):
    """Use case for listing who joined a project."""

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(
        self, request: ListProjectMembersRequest
    ) -> ListProjectMembersResponse:
        actor = await self.resolve_actor(request.user_id)
        accepted = await self.ledger_service.project_members(
            actor, ProjectId(UUID(request.project_id))
        )
        users = await self.user_service.get_many([r.requester_id for r in accepted])

        members = []
        for record in accepted:
            user = users.get(record.requester_id)
            if user is None:
                continue
            skills = (
                record.payload.skills
                if isinstance(record.payload, ProjectJoinPayload)
                else []
            )
            members.append(
                ProjectMember(
                    request_id=str(record.id),
                    user=UserSummary.from_domain(user),
                    skills=skills,
                    joined_at=record.responded_at,
                )
            )
        return ListProjectMembersResponse(project_id=request.project_id, members=members)

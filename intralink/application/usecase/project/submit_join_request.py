"""Submit project join request use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import RequestView
from intralink.domain.service import RequestLedgerService, UserService
from intralink.domain.value import RequestKind


class SubmitJoinRequest(BaseModel):
    """Submit join request."""

    project_id: str
    message: Optional[str] = None
    skills: list[str] = Field(default_factory=list)
    user_id: str  # User ID from authenticated user


class SubmitJoinRequestUseCase(ActorUseCase):
    """Use case for a learner asking to join an open project."""

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        """Initialize submit join request use case.

        Args:
            ledger_service: Request ledger domain service
            user_service: User domain service
        """
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: SubmitJoinRequest) -> RequestView:
        """Create a pending join request answered by the project lead.

        Raises:
            NotFoundError: If the project does not exist
            AuthorizationError: If the caller is not a learner, leads the
                project, or the project belongs to another college
            ConflictError: If the project is not open or a request is pending
        """
        actor = await self.resolve_actor(request.user_id)
        created = await self.ledger_service.create(
            actor,
            RequestKind.PROJECT_JOIN,
            UUID(request.project_id),
            {"message": request.message, "skills": request.skills},
        )
        [view] = await self.to_views([created], actor)
        return view

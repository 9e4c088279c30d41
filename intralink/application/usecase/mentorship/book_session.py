"""Book mentorship session use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import RequestView
from intralink.domain.service import RequestLedgerService, UserService
from intralink.domain.value import MentorshipRequestType, RequestKind


class BookSessionRequest(BaseModel):
    """Book session request.

    Payload fields are validated by the ledger so a malformed booking
    surfaces as a ValidationError.
    """

    mentor_id: str
    title: str
    request_type: MentorshipRequestType
    day_of_week: int
    time_label: str
    message: Optional[str] = None
    user_id: str  # User ID from authenticated user


class BookSessionUseCase(ActorUseCase):
    """Use case for a learner booking a weekly slot of a mentor."""

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        """Initialize book session use case.

        Args:
            ledger_service: Request ledger domain service
            user_service: User domain service
        """
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: BookSessionRequest) -> RequestView:
        """Create a pending session request occupying the chosen slot.

        Raises:
            ValidationError: If title or slot are malformed
            NotFoundError: If the mentor does not exist
            AuthorizationError: If the caller is not a learner or the target
                is not an active mentor of the caller's college
            ConflictError: If the slot is taken or a request is pending
        """
        actor = await self.resolve_actor(request.user_id)
        created = await self.ledger_service.create(
            actor,
            RequestKind.MENTORSHIP_SESSION,
            UUID(request.mentor_id),
            request.model_dump(exclude={"mentor_id", "user_id"}),
        )
        [view] = await self.to_views([created], actor)
        return view

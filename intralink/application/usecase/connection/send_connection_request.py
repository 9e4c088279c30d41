"""Send connection request use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import RequestView
from intralink.domain.service import RequestLedgerService, UserService
from intralink.domain.value import RequestKind


class SendConnectionRequest(BaseModel):
    """Send connection request."""

    target_user_id: str
    message: Optional[str] = None
    user_id: str  # User ID from authenticated user


class SendConnectionRequestUseCase(ActorUseCase):
    """Use case for asking another user of the same college to connect."""

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        """Initialize send connection request use case.

        Args:
            ledger_service: Request ledger domain service
            user_service: User domain service
        """
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: SendConnectionRequest) -> RequestView:
        """Create a pending connection request.

        Args:
            request: Send connection request

        Returns:
            The pending request

        Raises:
            NotFoundError: If the target user does not exist
            AuthorizationError: If the target is the caller or in another college
            ConflictError: If already connected or a request is pending
        """
        actor = await self.resolve_actor(request.user_id)
        created = await self.ledger_service.create(
            actor,
            RequestKind.CONNECTION,
            UUID(request.target_user_id),
            {"message": request.message},
        )
        [view] = await self.to_views([created], actor)
        return view

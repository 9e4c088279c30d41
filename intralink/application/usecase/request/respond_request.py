"""Respond to a collaboration request use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import RequestView
from intralink.domain.service import RequestLedgerService, UserService
from intralink.domain.value import Decision, RequestId, RequestKind


class RespondRequest(BaseModel):
    """Respond request."""

    request_id: str
    decision: Decision
    kind: Optional[RequestKind] = None  # Restrict to one kind (route-specific)
    user_id: str  # User ID from authenticated user


class RespondRequestUseCase(ActorUseCase):
    """Accept or reject a pending request addressed to the caller.

    Covers accepting/rejecting connections, approving/rejecting project join
    requests and accepting/rejecting mentorship sessions.
    """

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: RespondRequest) -> RequestView:
        actor = await self.resolve_actor(request.user_id)
        updated = await self.ledger_service.respond(
            actor,
            RequestId(UUID(request.request_id)),
            request.decision,
            request.kind,
        )
        [view] = await self.to_views([updated], actor)
        return view

"""Remove connection use case."""

from uuid import UUID

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import RemovalResponse
from intralink.domain.service import RequestLedgerService, UserService
from intralink.domain.value import RequestId


class RemoveConnectionRequest(BaseModel):
    """Remove connection request."""

    request_id: str
    user_id: str  # User ID from authenticated user


class RemoveConnectionUseCase(ActorUseCase):
    """Use case for deleting a connection record (either party)."""

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: RemoveConnectionRequest) -> RemovalResponse:
        actor = await self.resolve_actor(request.user_id)
        removed = await self.ledger_service.remove_connection(
            actor, RequestId(UUID(request.request_id))
        )
        return RemovalResponse(request_id=str(removed.id), kind=removed.kind)

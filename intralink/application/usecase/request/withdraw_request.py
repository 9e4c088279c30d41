"""Withdraw a pending request use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import RemovalResponse
from intralink.domain.service import RequestLedgerService, UserService
from intralink.domain.value import RequestId, RequestKind


class WithdrawRequest(BaseModel):
    """Withdraw request."""

    request_id: str
    kind: Optional[RequestKind] = None
    user_id: str  # User ID from authenticated user


class WithdrawRequestUseCase(ActorUseCase):
    """Use case for withdrawing (deleting) a pending request sent by the caller."""

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: WithdrawRequest) -> RemovalResponse:
        actor = await self.resolve_actor(request.user_id)
        removed = await self.ledger_service.withdraw(
            actor, RequestId(UUID(request.request_id)), request.kind
        )
        return RemovalResponse(request_id=str(removed.id), kind=removed.kind)

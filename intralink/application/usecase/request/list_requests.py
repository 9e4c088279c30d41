"""List incoming/outgoing requests and the request board."""

from typing import Optional

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.board import RequestBoard
from intralink.application.usecase.view import RequestView
from intralink.domain.service import RequestLedgerService, UserService
from intralink.domain.value import RequestKind


class ListRequestsRequest(BaseModel):
    """List requests request."""

    kind: Optional[RequestKind] = None
    user_id: str  # User ID from authenticated user


class ListRequestsResponse(BaseModel):
    """List requests response (newest first)."""

    requests: list[RequestView]


class ListIncomingRequestsUseCase(ActorUseCase):
    """Pending requests the caller is expected to answer."""

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: ListRequestsRequest) -> ListRequestsResponse:
        actor = await self.resolve_actor(request.user_id)
        incoming = await self.ledger_service.incoming(actor, request.kind)
        return ListRequestsResponse(requests=await self.to_views(incoming, actor))


class ListOutgoingRequestsUseCase(ActorUseCase):
    """Pending requests sent by the caller."""

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: ListRequestsRequest) -> ListRequestsResponse:
        actor = await self.resolve_actor(request.user_id)
        outgoing = await self.ledger_service.outgoing(actor, request.kind)
        return ListRequestsResponse(requests=await self.to_views(outgoing, actor))


class GetRequestBoardUseCase(ActorUseCase):
    """Initial snapshot of the caller's request board.

    Clients then keep it current with ``RequestBoard.apply`` and
    ``RequestBoard.discard`` using the results of their own mutations.
    """

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: ListRequestsRequest) -> RequestBoard:
        actor = await self.resolve_actor(request.user_id)
        incoming = await self.ledger_service.incoming(actor, request.kind)
        outgoing = await self.ledger_service.outgoing(actor, request.kind)
        active = await self.ledger_service.active(actor, request.kind)
        return RequestBoard(
            user_id=str(actor.user_id),
            incoming=await self.to_views(incoming, actor),
            outgoing=await self.to_views(outgoing, actor),
            active=await self.to_views(active, actor),
        )

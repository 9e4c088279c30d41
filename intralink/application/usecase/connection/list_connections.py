"""List connections use case."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import UserSummary, counterpart_id
from intralink.domain.service import RequestLedgerService, UserService
from intralink.domain.value import RequestKind


class ConnectionItem(BaseModel):
    """An accepted connection."""

    request_id: str
    user: UserSummary
    connected_at: Optional[datetime]


class ListConnectionsRequest(BaseModel):
    """List connections request."""

    user_id: str  # User ID from authenticated user


class ListConnectionsResponse(BaseModel):
    """List connections response."""

    connections: list[ConnectionItem]


class ListConnectionsUseCase(ActorUseCase):
    """Use case for listing the caller's accepted connections."""

    def __init__(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.ledger_service = ledger_service

    async def execute(self, request: ListConnectionsRequest) -> ListConnectionsResponse:
        actor = await self.resolve_actor(request.user_id)
        accepted = await self.ledger_service.active(actor, RequestKind.CONNECTION)
        other_ids = [counterpart_id(r, actor.user_id) for r in accepted]
        users = await self.user_service.get_many([uid for uid in other_ids if uid])

        items = []
        for record, other_id in zip(accepted, other_ids):
            user = users.get(other_id) if other_id else None
            # Skip connections whose other user has been deleted
            if user is None:
                continue
            items.append(
                ConnectionItem(
                    request_id=str(record.id),
                    user=UserSummary.from_domain(user),
                    connected_at=record.responded_at,
                )
            )
        return ListConnectionsResponse(connections=items)

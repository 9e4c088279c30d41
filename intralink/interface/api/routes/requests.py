"""Request inbox routes shared by all request kinds."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query

from intralink.application.usecase.board import RequestBoard
from intralink.application.usecase.request import (
    GetRequestBoardUseCase,
    ListIncomingRequestsUseCase,
    ListOutgoingRequestsUseCase,
    ListRequestsRequest,
    ListRequestsResponse,
    WithdrawRequest,
    WithdrawRequestUseCase,
)
from intralink.application.usecase.view import RemovalResponse
from intralink.domain.service import JWTService
from intralink.domain.value import RequestKind
from intralink.interface.api.identity import require_user_id

router = APIRouter(prefix="/requests", tags=["requests"], route_class=DishkaRoute)


@router.get("/incoming", response_model=ListRequestsResponse)
async def list_incoming_requests(
    use_case: FromDishka[ListIncomingRequestsUseCase],
    jwt_service: FromDishka[JWTService],
    kind: Optional[RequestKind] = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListRequestsResponse:
    """Pending requests waiting for the caller's answer, newest first."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(ListRequestsRequest(kind=kind, user_id=user_id))


@router.get("/outgoing", response_model=ListRequestsResponse)
async def list_outgoing_requests(
    use_case: FromDishka[ListOutgoingRequestsUseCase],
    jwt_service: FromDishka[JWTService],
    kind: Optional[RequestKind] = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListRequestsResponse:
    """Pending requests sent by the caller, newest first."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(ListRequestsRequest(kind=kind, user_id=user_id))


@router.get("/board", response_model=RequestBoard)
async def get_request_board(
    use_case: FromDishka[GetRequestBoardUseCase],
    jwt_service: FromDishka[JWTService],
    kind: Optional[RequestKind] = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> RequestBoard:
    """Incoming, outgoing and active requests in one snapshot."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(ListRequestsRequest(kind=kind, user_id=user_id))


@router.delete("/{request_id}", response_model=RemovalResponse)
async def withdraw_request(
    request_id: UUID,
    use_case: FromDishka[WithdrawRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RemovalResponse:
    """Withdraw a pending request sent by the caller."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        WithdrawRequest(request_id=str(request_id), user_id=user_id)
    )

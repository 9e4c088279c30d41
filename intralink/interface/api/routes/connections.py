"""Connection routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel, Field

from intralink.application.usecase.connection import (
    ListConnectionsRequest,
    ListConnectionsResponse,
    ListConnectionsUseCase,
    ListSuggestionsRequest,
    ListSuggestionsResponse,
    ListSuggestionsUseCase,
    RemoveConnectionRequest,
    RemoveConnectionUseCase,
    SendConnectionRequest,
    SendConnectionRequestUseCase,
)
from intralink.application.usecase.request import RespondRequest, RespondRequestUseCase
from intralink.application.usecase.view import RemovalResponse, RequestView
from intralink.domain.service import JWTService
from intralink.domain.value import Decision, RequestKind
from intralink.interface.api.identity import require_user_id

router = APIRouter(prefix="/connections", tags=["connections"], route_class=DishkaRoute)


class SendConnectionAPIRequest(BaseModel):
    """API request for sending a connection request."""

    target_user_id: UUID
    message: Optional[str] = Field(default=None, max_length=500)


@router.post(
    "/requests", response_model=RequestView, status_code=status.HTTP_201_CREATED
)
async def send_connection_request(
    request: SendConnectionAPIRequest,
    use_case: FromDishka[SendConnectionRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RequestView:
    """Ask another user of the same college to connect.

    Returns the pending request.
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        SendConnectionRequest(
            target_user_id=str(request.target_user_id),
            message=request.message,
            user_id=user_id,
        )
    )


@router.post("/requests/{request_id}/accept", response_model=RequestView)
async def accept_connection(
    request_id: UUID,
    use_case: FromDishka[RespondRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RequestView:
    """Accept a pending connection request addressed to the caller."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        RespondRequest(
            request_id=str(request_id),
            decision=Decision.ACCEPT,
            kind=RequestKind.CONNECTION,
            user_id=user_id,
        )
    )


@router.post("/requests/{request_id}/reject", response_model=RequestView)
async def reject_connection(
    request_id: UUID,
    use_case: FromDishka[RespondRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RequestView:
    """Reject a pending connection request addressed to the caller."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        RespondRequest(
            request_id=str(request_id),
            decision=Decision.REJECT,
            kind=RequestKind.CONNECTION,
            user_id=user_id,
        )
    )


@router.delete("/{request_id}", response_model=RemovalResponse)
async def remove_connection(
    request_id: UUID,
    use_case: FromDishka[RemoveConnectionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RemovalResponse:
    """Remove a connection (either party), or withdraw a pending request."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        RemoveConnectionRequest(request_id=str(request_id), user_id=user_id)
    )


@router.get("", response_model=ListConnectionsResponse)
async def list_connections(
    use_case: FromDishka[ListConnectionsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListConnectionsResponse:
    """List the caller's accepted connections."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(ListConnectionsRequest(user_id=user_id))


@router.get("/suggestions", response_model=ListSuggestionsResponse)
async def list_suggested_connections(
    use_case: FromDishka[ListSuggestionsUseCase],
    jwt_service: FromDishka[JWTService],
    limit: Optional[int] = Query(default=None, ge=1, le=100),
    auth_token: str | None = Cookie(default=None),
) -> ListSuggestionsResponse:
    """People the caller may know, ranked by mutual connections."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(ListSuggestionsRequest(limit=limit, user_id=user_id))

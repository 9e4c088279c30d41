"""Mentor discovery and session booking routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, Query, status
from pydantic import BaseModel

from intralink.application.usecase.mentorship import (
    BookSessionRequest,
    BookSessionUseCase,
    GetBookableSlotsRequest,
    GetBookableSlotsResponse,
    GetBookableSlotsUseCase,
    ListMentorsRequest,
    ListMentorsResponse,
    ListMentorsUseCase,
)
from intralink.application.usecase.request import RespondRequest, RespondRequestUseCase
from intralink.application.usecase.view import RequestView
from intralink.domain.service import JWTService, MentorSort
from intralink.domain.value import Decision, MentorshipRequestType, RequestKind
from intralink.interface.api.identity import require_user_id

router = APIRouter(prefix="/mentors", tags=["mentors"], route_class=DishkaRoute)


class BookSessionAPIRequest(BaseModel):
    """API request for booking a mentorship session.

    Slot fields are validated by the ledger (422 with a readable cause).
    """

    title: str
    request_type: MentorshipRequestType
    day_of_week: int
    time_label: str
    message: Optional[str] = None


@router.get("", response_model=ListMentorsResponse)
async def list_mentors(
    use_case: FromDishka[ListMentorsUseCase],
    jwt_service: FromDishka[JWTService],
    search: Optional[str] = Query(default=None, max_length=200),
    sort_by: MentorSort = Query(default=MentorSort.NAME),
    tenant_id: Optional[UUID] = Query(default=None),
    auth_token: str | None = Cookie(default=None),
) -> ListMentorsResponse:
    """List active mentors of the caller's college.

    ``tenant_id`` lets administrators narrow the listing to one college.
    """
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        ListMentorsRequest(
            search=search,
            sort_by=sort_by,
            tenant_id=str(tenant_id) if tenant_id else None,
            user_id=user_id,
        )
    )


@router.get("/{mentor_id}/slots", response_model=GetBookableSlotsResponse)
async def get_bookable_slots(
    mentor_id: UUID,
    use_case: FromDishka[GetBookableSlotsUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> GetBookableSlotsResponse:
    """Slots of a mentor that are still free."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        GetBookableSlotsRequest(mentor_id=str(mentor_id), user_id=user_id)
    )


@router.post(
    "/{mentor_id}/sessions",
    response_model=RequestView,
    status_code=status.HTTP_201_CREATED,
)
async def book_session(
    mentor_id: UUID,
    request: BookSessionAPIRequest,
    use_case: FromDishka[BookSessionUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RequestView:
    """Book a weekly slot of a mentor (learners only)."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        BookSessionRequest(
            mentor_id=str(mentor_id),
            title=request.title,
            request_type=request.request_type,
            day_of_week=request.day_of_week,
            time_label=request.time_label,
            message=request.message,
            user_id=user_id,
        )
    )


@router.post("/sessions/{request_id}/accept", response_model=RequestView)
async def accept_session(
    request_id: UUID,
    use_case: FromDishka[RespondRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RequestView:
    """Accept a session request (the mentor only)."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        RespondRequest(
            request_id=str(request_id),
            decision=Decision.ACCEPT,
            kind=RequestKind.MENTORSHIP_SESSION,
            user_id=user_id,
        )
    )


@router.post("/sessions/{request_id}/reject", response_model=RequestView)
async def reject_session(
    request_id: UUID,
    use_case: FromDishka[RespondRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RequestView:
    """Reject a session request (the mentor only). Frees the slot."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        RespondRequest(
            request_id=str(request_id),
            decision=Decision.REJECT,
            kind=RequestKind.MENTORSHIP_SESSION,
            user_id=user_id,
        )
    )

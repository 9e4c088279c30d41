"""Project join request routes."""

from typing import Optional
from uuid import UUID

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, status
from pydantic import BaseModel, Field

from intralink.application.usecase.project import (
    ListProjectMembersRequest,
    ListProjectMembersResponse,
    ListProjectMembersUseCase,
    SubmitJoinRequest,
    SubmitJoinRequestUseCase,
)
from intralink.application.usecase.request import RespondRequest, RespondRequestUseCase
from intralink.application.usecase.view import RequestView
from intralink.domain.service import JWTService
from intralink.domain.value import Decision, RequestKind
from intralink.interface.api.identity import require_user_id

router = APIRouter(prefix="/projects", tags=["projects"], route_class=DishkaRoute)


class JoinProjectAPIRequest(BaseModel):
    """API request for joining a project."""

    message: Optional[str] = Field(default=None, max_length=2000)
    skills: list[str] = Field(default_factory=list, max_length=20)


@router.post(
    "/{project_id}/join-requests",
    response_model=RequestView,
    status_code=status.HTTP_201_CREATED,
)
async def submit_join_request(
    project_id: UUID,
    request: JoinProjectAPIRequest,
    use_case: FromDishka[SubmitJoinRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RequestView:
    """Ask to join an open project. The project lead answers."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        SubmitJoinRequest(
            project_id=str(project_id),
            message=request.message,
            skills=request.skills,
            user_id=user_id,
        )
    )


@router.post("/join-requests/{request_id}/approve", response_model=RequestView)
async def approve_join_request(
    request_id: UUID,
    use_case: FromDishka[RespondRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RequestView:
    """Approve a join request (project lead only)."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        RespondRequest(
            request_id=str(request_id),
            decision=Decision.ACCEPT,
            kind=RequestKind.PROJECT_JOIN,
            user_id=user_id,
        )
    )


@router.post("/join-requests/{request_id}/reject", response_model=RequestView)
async def reject_join_request(
    request_id: UUID,
    use_case: FromDishka[RespondRequestUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> RequestView:
    """Reject a join request (project lead only)."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        RespondRequest(
            request_id=str(request_id),
            decision=Decision.REJECT,
            kind=RequestKind.PROJECT_JOIN,
            user_id=user_id,
        )
    )


@router.get("/{project_id}/members", response_model=ListProjectMembersResponse)
async def list_project_members(
    project_id: UUID,
    use_case: FromDishka[ListProjectMembersUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ListProjectMembersResponse:
    """Members admitted through approved join requests."""
    user_id = require_user_id(jwt_service, auth_token)
    return await use_case.execute(
        ListProjectMembersRequest(project_id=str(project_id), user_id=user_id)
    )

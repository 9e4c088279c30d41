"""Response views shared by the collaboration use cases."""

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel

from intralink.domain.model import CollaborationRequest, User
from intralink.domain.value import RequestKind, RequestStatus, UserId, UserRole


class UserSummary(BaseModel):
    """Public summary of a user."""

    user_id: str
    role: UserRole
    display_name: Optional[str]
    email: str
    avatar_url: Optional[str]

    @classmethod
    def from_domain(cls, user: User) -> "UserSummary":
        return cls(
            user_id=str(user.id),
            role=user.role,
            display_name=user.display_name,
            email=user.email,
            avatar_url=user.avatar_url,
        )


class RequestView(BaseModel):
    """A collaboration request as returned to clients.

    ``counterpart`` is the other user of the request from the caller's
    point of view, when it is known and is a user.
    """

    request_id: str
    kind: RequestKind
    requester_id: str
    target_id: str
    status: RequestStatus
    payload: dict[str, Any]
    created_at: datetime
    updated_at: datetime
    responded_at: Optional[datetime] = None
    counterpart: Optional[UserSummary] = None

    @classmethod
    def from_domain(
        cls, request: CollaborationRequest, counterpart: Optional[User] = None
    ) -> "RequestView":
        return cls(
            request_id=str(request.id),
            kind=request.kind,
            requester_id=str(request.requester_id),
            target_id=str(request.target_id),
            status=request.status,
            payload=request.payload.model_dump(mode="json", exclude={"kind"}),
            created_at=request.created_at,
            updated_at=request.updated_at,
            responded_at=request.responded_at,
            counterpart=UserSummary.from_domain(counterpart) if counterpart else None,
        )


class RemovalResponse(BaseModel):
    """Marker returned when a request record was deleted."""

    removed: bool = True
    request_id: str
    kind: RequestKind


def counterpart_id(request: CollaborationRequest, user_id: UUID) -> Optional[UserId]:
    """The other user of a request as seen by ``user_id``.

    Project join requests sent by the user have a project, not a user, as
    their target, so there is no counterpart.
    """
    if request.requester_id != user_id:
        return request.requester_id
    if request.kind is RequestKind.PROJECT_JOIN:
        return None
    return UserId(request.target_id)

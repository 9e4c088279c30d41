"""Collaboration request entity.

One entity covers the three collaboration workflows (connection, project
join, mentorship session), distinguished by ``kind``. Kind-specific data
lives in a discriminated ``payload``.

Lifecycle:
- created as ``pending`` by the requester
- moved to ``accepted`` or ``rejected`` by the responder (terminal)
- or deleted while pending by the requester (withdrawal)
- accepted/rejected connections may be deleted by either party (removal)
"""

from datetime import datetime
from typing import Annotated, Literal, Optional, Union
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from intralink.domain.model.common import DomainModel
from intralink.domain.value import (
    MentorshipRequestType,
    RequestId,
    RequestKind,
    RequestStatus,
    SlotKey,
    TenantId,
    UserId,
    validate_time_label,
)


class ConnectionPayload(DomainModel):
    """Payload of a peer connection request."""

    kind: Literal[RequestKind.CONNECTION] = RequestKind.CONNECTION
    message: Optional[str] = Field(default=None, max_length=500)


class ProjectJoinPayload(DomainModel):
    """Payload of a request to join a project."""

    kind: Literal[RequestKind.PROJECT_JOIN] = RequestKind.PROJECT_JOIN
    message: Optional[str] = Field(default=None, max_length=2000)
    skills: list[str] = Field(default_factory=list, max_length=20)

    @field_validator("skills")
    @classmethod
    def normalize_skills(cls, v: list[str]) -> list[str]:
        skills = [s.strip() for s in v if s.strip()]
        return list(dict.fromkeys(skills))


class MentorshipPayload(DomainModel):
    """Payload of a mentorship session booking."""

    kind: Literal[RequestKind.MENTORSHIP_SESSION] = RequestKind.MENTORSHIP_SESSION
    title: str = Field(min_length=1, max_length=200)
    request_type: MentorshipRequestType
    day_of_week: int = Field(ge=0, le=6)
    time_label: str
    message: Optional[str] = Field(default=None, max_length=2000)
    scheduled_for: Optional[datetime] = None  # Next occurrence, set on booking

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Session title is required")
        return v

    @field_validator("time_label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        return validate_time_label(v)

    @property
    def slot(self) -> SlotKey:
        return SlotKey(day_of_week=self.day_of_week, time_label=self.time_label)


RequestPayload = Annotated[
    Union[ConnectionPayload, ProjectJoinPayload, MentorshipPayload],
    Field(discriminator="kind"),
]


class CollaborationRequest(DomainModel):
    """A request from one user towards a user, project or mentor.

    Business rules:
    - At most one pending request per (requester, target, kind)
      (enforced by a partial unique index)
    - At most one pending/accepted mentorship session per mentor slot
      (enforced by a partial unique index)
    - Status changes are conditional on the current status being pending
    """

    id: RequestId
    kind: RequestKind
    requester_id: UserId
    target_id: UUID  # UserId for connection/mentorship, ProjectId for project join
    tenant_id: Optional[TenantId] = None
    status: RequestStatus = RequestStatus.PENDING
    payload: RequestPayload
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)
    responded_at: Optional[datetime] = None

    @model_validator(mode="after")
    def validate_payload_kind(self) -> "CollaborationRequest":
        """Payload must match the request kind."""
        if self.payload.kind != self.kind:
            raise ValueError(
                f"Payload of kind {self.payload.kind.value} "
                f"does not match request kind {self.kind.value}"
            )
        return self

    @property
    def is_pending(self) -> bool:
        return self.status is RequestStatus.PENDING

    @property
    def slot(self) -> Optional[SlotKey]:
        """Booked slot for mentorship sessions, None otherwise."""
        if isinstance(self.payload, MentorshipPayload):
            return self.payload.slot
        return None

    def involves(self, user_id: UserId) -> bool:
        """Whether the user is the requester or the (user) target."""
        return self.requester_id == user_id or self.target_id == user_id

    def counterpart_of(self, user_id: UserId) -> UserId:
        """The other user of a connection request."""
        if self.requester_id == user_id:
            return UserId(self.target_id)
        return self.requester_id

"""Mappers for converting between database rows and domain models.

Domain models are immutable pydantic models, so rows are mapped by hand
rather than through an ORM mapping.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import TypeAdapter

from intralink.domain.model import (
    AvailabilitySlot,
    CollaborationRequest,
    MentorProfile,
    Project,
    SessionFeedback,
    User,
)
from intralink.domain.model.request import RequestPayload
from intralink.domain.value import (
    FeedbackId,
    ProjectId,
    ProjectStatus,
    RequestId,
    RequestKind,
    RequestStatus,
    TenantId,
    UserId,
    UserRole,
)

_payload_adapter: TypeAdapter[RequestPayload] = TypeAdapter(RequestPayload)


def _uuid(value: Any) -> UUID:
    return UUID(value) if isinstance(value, str) else value


def _optional_uuid(value: Any) -> Optional[UUID]:
    return _uuid(value) if value is not None else None


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model."""
    tenant_id = _optional_uuid(row.get("tenant_id"))
    return User(
        id=UserId(_uuid(row["id"])),
        role=UserRole(row["role"]),
        tenant_id=TenantId(tenant_id) if tenant_id else None,
        display_name=row.get("display_name"),
        email=row["email"],
        avatar_url=row.get("avatar_url"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def user_to_dict(user: User) -> Dict[str, Any]:
    """Convert User domain model to database dict."""
    data = user.model_dump()
    data["role"] = user.role.value
    return data


def row_to_project(row: Dict[str, Any]) -> Project:
    """Convert database row to Project domain model."""
    return Project(
        id=ProjectId(_uuid(row["id"])),
        tenant_id=TenantId(_uuid(row["tenant_id"])),
        lead_id=UserId(_uuid(row["lead_id"])),
        title=row["title"],
        description=row.get("description") or "",
        status=ProjectStatus(row["status"]),
        required_skills=list(row.get("required_skills") or []),
        max_team_size=row.get("max_team_size"),
        member_count=row.get("member_count") or 0,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def project_to_dict(project: Project) -> Dict[str, Any]:
    """Convert Project domain model to database dict."""
    data = project.model_dump()
    data["status"] = project.status.value
    return data


def row_to_mentor_profile(row: Dict[str, Any]) -> MentorProfile:
    """Convert database row to MentorProfile domain model."""
    return MentorProfile(
        user_id=UserId(_uuid(row["user_id"])),
        expertise=list(row.get("expertise") or []),
        bio=row.get("bio"),
        is_active=row["is_active"],
    )


def row_to_availability(row: Dict[str, Any]) -> AvailabilitySlot:
    """Convert database row to AvailabilitySlot domain model."""
    return AvailabilitySlot(
        mentor_id=UserId(_uuid(row["mentor_id"])),
        day_of_week=row["day_of_week"],
        time_labels=list(row.get("time_labels") or []),
    )


def row_to_feedback(row: Dict[str, Any]) -> SessionFeedback:
    """Convert database row to SessionFeedback domain model."""
    return SessionFeedback(
        id=FeedbackId(_uuid(row["id"])),
        mentor_id=UserId(_uuid(row["mentor_id"])),
        learner_id=UserId(_uuid(row["learner_id"])),
        rating=row["rating"],
        comment=row.get("comment"),
        created_at=row["created_at"],
    )


def row_to_request(row: Dict[str, Any]) -> CollaborationRequest:
    """Convert database row to CollaborationRequest domain model.

    The JSONB payload is validated against the row's kind.
    """
    kind = RequestKind(row["kind"])
    tenant_id = _optional_uuid(row.get("tenant_id"))
    payload = _payload_adapter.validate_python({**(row.get("payload") or {}), "kind": kind})
    return CollaborationRequest(
        id=RequestId(_uuid(row["id"])),
        kind=kind,
        requester_id=UserId(_uuid(row["requester_id"])),
        target_id=_uuid(row["target_id"]),
        tenant_id=TenantId(tenant_id) if tenant_id else None,
        status=RequestStatus(row["status"]),
        payload=payload,
        created_at=row["created_at"],
        updated_at=row["updated_at"],
        responded_at=row.get("responded_at"),
    )


def request_to_dict(request: CollaborationRequest) -> Dict[str, Any]:
    """Convert CollaborationRequest domain model to database dict.

    Mentorship slots are copied into slot_day/slot_time for the slot index.
    """
    slot = request.slot
    return {
        "id": request.id,
        "kind": request.kind.value,
        "requester_id": request.requester_id,
        "target_id": request.target_id,
        "tenant_id": request.tenant_id,
        "status": request.status.value,
        "payload": request.payload.model_dump(mode="json"),
        "slot_day": slot.day_of_week if slot else None,
        "slot_time": slot.time_label if slot else None,
        "created_at": request.created_at,
        "updated_at": request.updated_at,
        "responded_at": request.responded_at,
    }

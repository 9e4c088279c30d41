"""Domain value objects for IntraLink."""

from intralink.domain.value.identifiers import (
    FeedbackId,
    ProjectId,
    RequestId,
    TenantId,
    UserId,
)
from intralink.domain.value.types import (
    DAY_NAMES,
    Actor,
    Decision,
    MentorshipRequestType,
    ProjectStatus,
    RequestKind,
    RequestStatus,
    SlotKey,
    UserRole,
    start_time_of,
    validate_time_label,
)

__all__ = [
    # Identifiers
    "UserId",
    "TenantId",
    "ProjectId",
    "RequestId",
    "FeedbackId",
    # Types
    "Actor",
    "DAY_NAMES",
    "Decision",
    "MentorshipRequestType",
    "ProjectStatus",
    "RequestKind",
    "RequestStatus",
    "SlotKey",
    "UserRole",
    "start_time_of",
    "validate_time_label",
]

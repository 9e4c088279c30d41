"""Domain model entities for IntraLink."""

from intralink.domain.model.mentor import AvailabilitySlot, MentorProfile, SessionFeedback
from intralink.domain.model.project import Project
from intralink.domain.model.request import (
    CollaborationRequest,
    ConnectionPayload,
    MentorshipPayload,
    ProjectJoinPayload,
    RequestPayload,
)
from intralink.domain.model.user import User

__all__ = [
    "User",
    "Project",
    "MentorProfile",
    "AvailabilitySlot",
    "SessionFeedback",
    "CollaborationRequest",
    "ConnectionPayload",
    "ProjectJoinPayload",
    "MentorshipPayload",
    "RequestPayload",
]

"""Domain value objects for IntraLink.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

import re
from datetime import time
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from intralink.domain.value.common import ValueObject
from intralink.domain.value.identifiers import TenantId, UserId


class UserRole(str, Enum):
    """Platform roles."""

    LEARNER = "learner"
    INSTRUCTOR = "instructor"
    MENTOR = "mentor"
    ADMINISTRATOR = "administrator"


class RequestKind(str, Enum):
    """Discriminator of the three collaboration workflows."""

    CONNECTION = "connection"
    PROJECT_JOIN = "project_join"
    MENTORSHIP_SESSION = "mentorship_session"


class RequestStatus(str, Enum):
    """Lifecycle status of a collaboration request.

    Withdrawn requests are deleted, so there is no withdrawn status.
    """

    PENDING = "pending"
    ACCEPTED = "accepted"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self is not RequestStatus.PENDING


class Decision(str, Enum):
    """Answer given by a responder to a pending request."""

    ACCEPT = "accept"
    REJECT = "reject"

    @property
    def resulting_status(self) -> RequestStatus:
        if self is Decision.ACCEPT:
            return RequestStatus.ACCEPTED
        return RequestStatus.REJECTED


class ProjectStatus(str, Enum):
    """Project lifecycle. Only open projects accept join requests."""

    OPEN = "open"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class MentorshipRequestType(str, Enum):
    """What a learner wants out of a mentorship session."""

    CAREER_ADVICE = "career_advice"
    SKILL_DEVELOPMENT = "skill_development"
    PROJECT_GUIDANCE = "project_guidance"
    ACADEMIC_SUPPORT = "academic_support"


DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)

# "09:00" or "09:00-10:00"
TIME_LABEL_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)(-([01]\d|2[0-3]):([0-5]\d))?$")


def validate_time_label(value: str) -> str:
    """Validate a slot time label and return it stripped."""
    value = value.strip()
    if not TIME_LABEL_PATTERN.match(value):
        raise ValueError("Time label must look like HH:MM or HH:MM-HH:MM")
    return value


def start_time_of(label: str) -> time:
    """Start time of a slot label ("09:00-10:00" -> 09:00)."""
    match = TIME_LABEL_PATTERN.match(label.strip())
    if not match:
        raise ValueError(f"Invalid time label: {label}")
    return time(hour=int(match.group(1)), minute=int(match.group(2)))


class SlotKey(ValueObject):
    """A weekly slot: day of week (0 = Sunday) plus a time label."""

    day_of_week: int = Field(ge=0, le=6)
    time_label: str

    @field_validator("time_label")
    @classmethod
    def validate_label(cls, v: str) -> str:
        return validate_time_label(v)

    @property
    def day_name(self) -> str:
        return DAY_NAMES[self.day_of_week]

    def __str__(self) -> str:
        return f"{self.day_name} at {self.time_label}"


class Actor(ValueObject):
    """Identity context of the user performing an operation.

    Passed explicitly to every collaboration operation.
    """

    user_id: UserId
    role: UserRole
    tenant_id: Optional[TenantId] = None

    @property
    def is_administrator(self) -> bool:
        return self.role is UserRole.ADMINISTRATOR

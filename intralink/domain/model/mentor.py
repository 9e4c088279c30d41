"""Mentor profile, weekly availability and session feedback.

All three are maintained by the mentor profile and session features and
are read-only inputs for mentor discovery and slot booking.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from intralink.domain.model.common import DomainModel
from intralink.domain.value import FeedbackId, SlotKey, UserId, validate_time_label


class MentorProfile(DomainModel):
    """Mentor-specific profile attached to a user with the mentor role."""

    user_id: UserId
    expertise: list[str] = Field(default_factory=list)
    bio: Optional[str] = None
    is_active: bool = True


class AvailabilitySlot(DomainModel):
    """Declared weekly availability of a mentor for one day.

    day_of_week follows 0 = Sunday .. 6 = Saturday.
    """

    mentor_id: UserId
    day_of_week: int = Field(ge=0, le=6)
    time_labels: list[str] = Field(default_factory=list)

    @field_validator("time_labels")
    @classmethod
    def validate_time_labels(cls, v: list[str]) -> list[str]:
        labels = [validate_time_label(label) for label in v]
        # Keep declared order, drop repeats
        return list(dict.fromkeys(labels))

    def slot_keys(self) -> list[SlotKey]:
        return [
            SlotKey(day_of_week=self.day_of_week, time_label=label)
            for label in self.time_labels
        ]


class SessionFeedback(DomainModel):
    """Rating left by a learner after a completed mentorship session."""

    id: FeedbackId
    mentor_id: UserId
    learner_id: UserId
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=2000)
    created_at: datetime = Field(default_factory=datetime.now)

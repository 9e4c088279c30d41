"""In-memory mentor repository for testing."""

from typing import Optional, Sequence

from intralink.domain.model import AvailabilitySlot, MentorProfile, SessionFeedback
from intralink.domain.repository import MentorRepository
from intralink.domain.value import UserId


class InMemoryMentorRepository(MentorRepository):
    """In-memory implementation of MentorRepository for testing."""

    def __init__(self) -> None:
        self._profiles: dict[UserId, MentorProfile] = {}
        self._availability: dict[tuple[UserId, int], AvailabilitySlot] = {}
        self._feedback: list[SessionFeedback] = []

    async def find_profile(self, mentor_id: UserId) -> Optional[MentorProfile]:
        return self._profiles.get(mentor_id)

    async def find_active_profiles(self) -> list[MentorProfile]:
        return [p for p in self._profiles.values() if p.is_active]

    async def find_availability(self, mentor_id: UserId) -> list[AvailabilitySlot]:
        return sorted(
            (a for (mid, _), a in self._availability.items() if mid == mentor_id),
            key=lambda a: a.day_of_week,
        )

    async def find_feedback_for_mentors(
        self, mentor_ids: Sequence[UserId]
    ) -> list[SessionFeedback]:
        wanted = set(mentor_ids)
        return [f for f in self._feedback if f.mentor_id in wanted]

    async def save_profile(self, profile: MentorProfile) -> MentorProfile:
        self._profiles[profile.user_id] = profile
        return profile

    async def save_availability(self, slot: AvailabilitySlot) -> AvailabilitySlot:
        self._availability[(slot.mentor_id, slot.day_of_week)] = slot
        return slot

    async def save_feedback(self, feedback: SessionFeedback) -> SessionFeedback:
        self._feedback.append(feedback)
        return feedback

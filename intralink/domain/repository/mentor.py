"""Mentor repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from intralink.domain.model.mentor import AvailabilitySlot, MentorProfile, SessionFeedback
from intralink.domain.value import UserId


class MentorRepository(ABC):
    """Read access to mentor profiles, availability and session feedback.

    These records belong to the mentor profile and session features.
    The ``save_*`` methods exist for seeding and tests.
    """

    @abstractmethod
    async def find_profile(self, mentor_id: UserId) -> Optional[MentorProfile]:
        """Find a mentor profile by user ID.

        Args:
            mentor_id: The mentor's user ID

        Returns:
            The profile if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_active_profiles(self) -> list[MentorProfile]:
        """Find all active mentor profiles.

        Tenant filtering happens in the visibility layer.

        Returns:
            Active mentor profiles
        """
        pass

    @abstractmethod
    async def find_availability(self, mentor_id: UserId) -> list[AvailabilitySlot]:
        """Find a mentor's declared weekly availability.

        Args:
            mentor_id: The mentor's user ID

        Returns:
            One entry per declared day, ordered by day of week
        """
        pass

    @abstractmethod
    async def find_feedback_for_mentors(
        self, mentor_ids: Sequence[UserId]
    ) -> list[SessionFeedback]:
        """Find feedback of completed sessions for several mentors (batch query).

        Args:
            mentor_ids: Mentor user IDs

        Returns:
            Feedback rows for the given mentors
        """
        pass

    @abstractmethod
    async def save_profile(self, profile: MentorProfile) -> MentorProfile:
        """Save or update a mentor profile."""
        pass

    @abstractmethod
    async def save_availability(self, slot: AvailabilitySlot) -> AvailabilitySlot:
        """Save a day of availability, replacing that day if it exists."""
        pass

    @abstractmethod
    async def save_feedback(self, feedback: SessionFeedback) -> SessionFeedback:
        """Save session feedback."""
        pass

"""Availability domain service for mentorship bookings."""

from datetime import datetime, timedelta

import logfire

from intralink.domain.repository import CollaborationRequestRepository, MentorRepository
from intralink.domain.value import SlotKey, UserId, start_time_of

from .base import Service


class AvailabilityService(Service):
    """Maps declared weekly availability and existing bookings to free slots.

    A slot is occupied by any pending or accepted mentorship session request
    for the mentor. Rejected and withdrawn sessions free their slot again.
    The read here is advisory; the slot unique index is what prevents two
    concurrent bookings of the same slot.
    """

    def __init__(
        self,
        mentor_repository: MentorRepository,
        request_repository: CollaborationRequestRepository,
    ) -> None:
        """Initialize availability service.

        Args:
            mentor_repository: Mentor repository
            request_repository: Collaboration request repository
        """
        self.mentor_repository = mentor_repository
        self.request_repository = request_repository

    async def declared_slots(self, mentor_id: UserId) -> list[SlotKey]:
        """Slots the mentor declared, ordered by day then declared order."""
        availability = await self.mentor_repository.find_availability(mentor_id)
        slots: list[SlotKey] = []
        for day in sorted(availability, key=lambda a: a.day_of_week):
            slots.extend(day.slot_keys())
        return slots

    async def occupied_slots(self, mentor_id: UserId) -> set[SlotKey]:
        """Slots consumed by pending or accepted sessions."""
        sessions = await self.request_repository.find_occupying(mentor_id)
        return {session.slot for session in sessions if session.slot is not None}

    async def bookable_slots(self, mentor_id: UserId) -> set[SlotKey]:
        """Declared slots minus occupied ones.

        Args:
            mentor_id: Mentor user ID

        Returns:
            Set of bookable (day_of_week, time_label) slots
        """
        with logfire.span(
            "availability_service.bookable_slots", mentor_id=str(mentor_id)
        ):
            occupied = await self.occupied_slots(mentor_id)
            return {
                slot
                for slot in await self.declared_slots(mentor_id)
                if slot not in occupied
            }

    async def ordered_bookable_slots(self, mentor_id: UserId) -> list[SlotKey]:
        """Bookable slots in declaration order, for display."""
        occupied = await self.occupied_slots(mentor_id)
        return [
            slot
            for slot in await self.declared_slots(mentor_id)
            if slot not in occupied
        ]

    async def is_bookable(
        self, mentor_id: UserId, day_of_week: int, time_label: str
    ) -> bool:
        """Whether the given slot is declared and not yet occupied.

        Args:
            mentor_id: Mentor user ID
            day_of_week: 0 = Sunday .. 6 = Saturday
            time_label: Slot label as declared, e.g. "09:00-10:00"

        Returns:
            True if the slot can be booked right now
        """
        slot = SlotKey(day_of_week=day_of_week, time_label=time_label)
        return slot in await self.bookable_slots(mentor_id)

    @staticmethod
    def next_occurrence(day_of_week: int, time_label: str, now: datetime) -> datetime:
        """Next future datetime of a weekly slot.

        The slot starts at the first time of its label. A slot later today
        resolves to today; one that already started resolves to next week.

        Args:
            day_of_week: 0 = Sunday .. 6 = Saturday
            time_label: "HH:MM" or "HH:MM-HH:MM"
            now: Reference time; its tzinfo is kept

        Returns:
            Start of the next occurrence
        """
        # datetime.weekday() counts from Monday = 0
        target_weekday = (day_of_week - 1) % 7
        days_ahead = (target_weekday - now.weekday()) % 7
        start = start_time_of(time_label)
        candidate = datetime.combine(
            now.date() + timedelta(days=days_ahead), start, tzinfo=now.tzinfo
        )
        if candidate <= now:
            candidate += timedelta(days=7)
        return candidate

"""PostgreSQL implementation of Mentor repository."""

from typing import Optional, Sequence

from sqlalchemy import and_, delete, insert, select
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from intralink.domain.model import AvailabilitySlot, MentorProfile, SessionFeedback
from intralink.domain.repository import MentorRepository
from intralink.domain.value import UserId
from intralink.persistence.mappers import (
    row_to_availability,
    row_to_feedback,
    row_to_mentor_profile,
)
from intralink.persistence.tables import (
    mentor_availability_table,
    mentor_profiles_table,
    session_feedback_table,
)


class PostgresMentorRepository(MentorRepository):
    """PostgreSQL implementation of MentorRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_profile(self, mentor_id: UserId) -> Optional[MentorProfile]:
        """Find a mentor profile by user ID."""
        stmt = select(mentor_profiles_table).where(
            mentor_profiles_table.c.user_id == mentor_id
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_mentor_profile(dict(row)) if row else None

    async def find_active_profiles(self) -> list[MentorProfile]:
        """Find all active mentor profiles."""
        stmt = select(mentor_profiles_table).where(
            mentor_profiles_table.c.is_active.is_(True)
        )
        result = await self.session.execute(stmt)
        return [row_to_mentor_profile(dict(row)) for row in result.mappings().all()]

    async def find_availability(self, mentor_id: UserId) -> list[AvailabilitySlot]:
        """Find a mentor's weekly availability, ordered by day."""
        stmt = (
            select(mentor_availability_table)
            .where(mentor_availability_table.c.mentor_id == mentor_id)
            .order_by(mentor_availability_table.c.day_of_week)
        )
        result = await self.session.execute(stmt)
        return [row_to_availability(dict(row)) for row in result.mappings().all()]

    async def find_feedback_for_mentors(
        self, mentor_ids: Sequence[UserId]
    ) -> list[SessionFeedback]:
        """Find feedback for several mentors (batch query)."""
        if not mentor_ids:
            return []
        stmt = select(session_feedback_table).where(
            session_feedback_table.c.mentor_id.in_(list(mentor_ids))
        )
        result = await self.session.execute(stmt)
        return [row_to_feedback(dict(row)) for row in result.mappings().all()]

    async def save_profile(self, profile: MentorProfile) -> MentorProfile:
        """Upsert a mentor profile."""
        values = profile.model_dump()
        stmt = pg_insert(mentor_profiles_table).values(**values)
        stmt = stmt.on_conflict_do_update(
            index_elements=[mentor_profiles_table.c.user_id],
            set_={
                "expertise": stmt.excluded.expertise,
                "bio": stmt.excluded.bio,
                "is_active": stmt.excluded.is_active,
            },
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return profile

    async def save_availability(self, slot: AvailabilitySlot) -> AvailabilitySlot:
        """Replace a mentor's availability for one day."""
        await self.session.execute(
            delete(mentor_availability_table).where(
                and_(
                    mentor_availability_table.c.mentor_id == slot.mentor_id,
                    mentor_availability_table.c.day_of_week == slot.day_of_week,
                )
            )
        )
        await self.session.execute(
            insert(mentor_availability_table).values(**slot.model_dump())
        )
        await self.session.flush()
        return slot

    async def save_feedback(self, feedback: SessionFeedback) -> SessionFeedback:
        """Insert session feedback."""
        await self.session.execute(
            insert(session_feedback_table).values(**feedback.model_dump())
        )
        await self.session.flush()
        return feedback

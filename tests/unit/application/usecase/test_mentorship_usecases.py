"""Unit tests for mentorship use cases."""

import pytest

from intralink.application.usecase.mentorship import (
    BookSessionRequest,
    BookSessionUseCase,
    GetBookableSlotsRequest,
    GetBookableSlotsUseCase,
    ListMentorsRequest,
    ListMentorsUseCase,
)
from intralink.domain.error import NotFoundError
from intralink.domain.repository import MentorRepository, UserRepository
from intralink.domain.service import MentorSort
from intralink.domain.value import MentorshipRequestType, UserRole
from tests.conftest import (
    COLLEGE_B,
    make_availability,
    make_mentor_profile,
    make_user,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(unit_env):
    users = await unit_env.get(UserRepository)
    mentors = await unit_env.get(MentorRepository)
    learner = await users.save(make_user("Lena"))
    mentor = await users.save(make_user("Maya", role=UserRole.MENTOR))
    await mentors.save_profile(make_mentor_profile(mentor, ["robotics"]))
    await mentors.save_availability(make_availability(mentor, 4, "16:00", "17:00"))
    return learner, mentor


class TestMentorshipUseCases:
    """Tests for listing mentors, slots and booking."""

    @pytest.mark.asyncio
    async def test_book_then_slot_disappears(self, unit_env):
        # Arrange
        learner, mentor = await _seed(unit_env)
        book = await unit_env.get(BookSessionUseCase)
        get_slots = await unit_env.get(GetBookableSlotsUseCase)

        before = await get_slots.execute(
            GetBookableSlotsRequest(mentor_id=str(mentor.id), user_id=str(learner.id))
        )
        assert [(s.day_name, s.time_label) for s in before.slots] == [
            ("Thursday", "16:00"),
            ("Thursday", "17:00"),
        ]

        # Act
        booked = await book.execute(
            BookSessionRequest(
                mentor_id=str(mentor.id),
                title="Arm kinematics",
                request_type=MentorshipRequestType.PROJECT_GUIDANCE,
                day_of_week=4,
                time_label="16:00",
                user_id=str(learner.id),
            )
        )

        # Assert
        assert booked.payload["time_label"] == "16:00"
        assert booked.payload["scheduled_for"] is not None
        after = await get_slots.execute(
            GetBookableSlotsRequest(mentor_id=str(mentor.id), user_id=str(learner.id))
        )
        assert [s.time_label for s in after.slots] == ["17:00"]

    @pytest.mark.asyncio
    async def test_slots_of_non_mentor_are_not_found(self, unit_env):
        learner, _ = await _seed(unit_env)
        users = await unit_env.get(UserRepository)
        remote = await users.save(
            make_user("Rosa", role=UserRole.MENTOR, tenant_id=COLLEGE_B)
        )
        get_slots = await unit_env.get(GetBookableSlotsUseCase)

        with pytest.raises(NotFoundError):
            await get_slots.execute(
                GetBookableSlotsRequest(
                    mentor_id=str(learner.id), user_id=str(learner.id)
                )
            )
        with pytest.raises(NotFoundError):
            await get_slots.execute(
                GetBookableSlotsRequest(mentor_id=str(remote.id), user_id=str(learner.id))
            )

    @pytest.mark.asyncio
    async def test_list_mentors(self, unit_env):
        learner, mentor = await _seed(unit_env)
        list_mentors = await unit_env.get(ListMentorsUseCase)

        response = await list_mentors.execute(
            ListMentorsRequest(
                search="robot", sort_by=MentorSort.RATING, user_id=str(learner.id)
            )
        )

        assert [m.user.user_id for m in response.mentors] == [str(mentor.id)]
        assert response.mentors[0].average_rating is None

"""Unit tests for mentorship session booking through the ledger."""

import pytest

from intralink.domain.error import AuthorizationError, ConflictError, ValidationError
from intralink.domain.repository import MentorRepository, UserRepository
from intralink.domain.service import AvailabilityService, RequestLedgerService
from intralink.domain.value import Decision, RequestKind, SlotKey, UserRole
from tests.conftest import (
    COLLEGE_B,
    make_availability,
    make_mentor_profile,
    make_user,
)
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()

MONDAY = 1


def _booking(**overrides):
    booking = {
        "title": "Portfolio review",
        "request_type": "career_advice",
        "day_of_week": MONDAY,
        "time_label": "09:00-10:00",
    }
    booking.update(overrides)
    return booking


async def _setup(unit_env, tenant_id=None):
    users = await unit_env.get(UserRepository)
    mentors = await unit_env.get(MentorRepository)
    learner = await users.save(make_user("Lena"))
    mentor_kwargs = {"tenant_id": tenant_id} if tenant_id else {}
    mentor = await users.save(make_user("Maya", role=UserRole.MENTOR, **mentor_kwargs))
    await mentors.save_profile(make_mentor_profile(mentor, ["design"]))
    await mentors.save_availability(
        make_availability(mentor, MONDAY, "09:00-10:00", "10:00-11:00")
    )
    return learner, mentor


class TestBookSession:
    """Tests for creating session requests."""

    @pytest.mark.asyncio
    async def test_booking_occupies_slot(self, unit_env):
        # Arrange
        ledger = await unit_env.get(RequestLedgerService)
        availability = await unit_env.get(AvailabilityService)
        learner, mentor = await _setup(unit_env)

        # Act
        request = await ledger.create(
            learner.as_actor(), RequestKind.MENTORSHIP_SESSION, mentor.id, _booking()
        )

        # Assert
        assert request.slot == SlotKey(day_of_week=MONDAY, time_label="09:00-10:00")
        assert request.payload.scheduled_for is not None
        assert request.payload.scheduled_for.weekday() == 0  # Monday
        assert await availability.bookable_slots(mentor.id) == {
            SlotKey(day_of_week=MONDAY, time_label="10:00-11:00")
        }

    @pytest.mark.asyncio
    async def test_taken_slot_conflicts_for_another_learner(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        users = await unit_env.get(UserRepository)
        learner, mentor = await _setup(unit_env)
        other = await users.save(make_user("Otto"))
        await ledger.create(
            learner.as_actor(), RequestKind.MENTORSHIP_SESSION, mentor.id, _booking()
        )

        with pytest.raises(ConflictError, match="slot no longer available"):
            await ledger.create(
                other.as_actor(), RequestKind.MENTORSHIP_SESSION, mentor.id, _booking()
            )

    @pytest.mark.asyncio
    async def test_rejection_frees_slot(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        users = await unit_env.get(UserRepository)
        learner, mentor = await _setup(unit_env)
        other = await users.save(make_user("Otto"))
        first = await ledger.create(
            learner.as_actor(), RequestKind.MENTORSHIP_SESSION, mentor.id, _booking()
        )

        await ledger.respond(mentor.as_actor(), first.id, Decision.REJECT)
        second = await ledger.create(
            other.as_actor(), RequestKind.MENTORSHIP_SESSION, mentor.id, _booking()
        )

        assert second.is_pending

    @pytest.mark.asyncio
    async def test_undeclared_slot_is_not_bookable(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        learner, mentor = await _setup(unit_env)

        with pytest.raises(ConflictError, match="slot no longer available"):
            await ledger.create(
                learner.as_actor(),
                RequestKind.MENTORSHIP_SESSION,
                mentor.id,
                _booking(time_label="14:00-15:00"),
            )

    @pytest.mark.asyncio
    async def test_malformed_slot_is_a_validation_error(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        learner, mentor = await _setup(unit_env)

        with pytest.raises(ValidationError, match="time_label"):
            await ledger.create(
                learner.as_actor(),
                RequestKind.MENTORSHIP_SESSION,
                mentor.id,
                _booking(time_label="9am"),
            )
        with pytest.raises(ValidationError, match="day_of_week"):
            await ledger.create(
                learner.as_actor(),
                RequestKind.MENTORSHIP_SESSION,
                mentor.id,
                _booking(day_of_week=7),
            )

    @pytest.mark.asyncio
    async def test_only_learners_book(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        users = await unit_env.get(UserRepository)
        _, mentor = await _setup(unit_env)
        instructor = await users.save(make_user("Ivan", role=UserRole.INSTRUCTOR))

        with pytest.raises(AuthorizationError, match="Only learners"):
            await ledger.create(
                instructor.as_actor(),
                RequestKind.MENTORSHIP_SESSION,
                mentor.id,
                _booking(),
            )

    @pytest.mark.asyncio
    async def test_target_must_be_active_mentor(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        users = await unit_env.get(UserRepository)
        learner, _ = await _setup(unit_env)
        peer = await users.save(make_user("Pia"))

        with pytest.raises(AuthorizationError, match="not an active mentor"):
            await ledger.create(
                learner.as_actor(), RequestKind.MENTORSHIP_SESSION, peer.id, _booking()
            )

    @pytest.mark.asyncio
    async def test_mentor_of_other_college_is_refused(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        learner, mentor = await _setup(unit_env, tenant_id=COLLEGE_B)

        with pytest.raises(AuthorizationError, match="not part of your college"):
            await ledger.create(
                learner.as_actor(), RequestKind.MENTORSHIP_SESSION, mentor.id, _booking()
            )

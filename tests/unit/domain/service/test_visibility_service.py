"""Unit tests for VisibilityService."""

import pytest

from intralink.domain.error import AuthorizationError
from intralink.domain.repository import MentorRepository, UserRepository
from intralink.domain.service import VisibilityService
from intralink.domain.value import UserRole
from tests.conftest import COLLEGE_A, COLLEGE_B, make_mentor_profile, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestInteraction:
    """Tests for can_interact / ensure_can_interact."""

    def test_same_tenant_users_can_interact(self):
        service = VisibilityService(None, None)
        alice = make_user("Alice")
        bob = make_user("Bob")

        assert service.can_interact(alice.as_actor(), bob)

    def test_cross_tenant_users_cannot_interact(self):
        service = VisibilityService(None, None)
        alice = make_user("Alice", tenant_id=COLLEGE_A)
        carol = make_user("Carol", tenant_id=COLLEGE_B)

        assert not service.can_interact(alice.as_actor(), carol)
        with pytest.raises(AuthorizationError, match="not part of your college"):
            service.ensure_can_interact(alice.as_actor(), carol)

    def test_nobody_interacts_with_themselves(self):
        service = VisibilityService(None, None)
        alice = make_user("Alice")
        admin = make_user("Root", role=UserRole.ADMINISTRATOR)

        with pytest.raises(AuthorizationError, match="yourself"):
            service.ensure_can_interact(alice.as_actor(), alice)
        assert not service.can_interact(admin.as_actor(), admin)

    def test_administrator_crosses_tenants(self):
        service = VisibilityService(None, None)
        admin = make_user("Root", role=UserRole.ADMINISTRATOR)
        carol = make_user("Carol", tenant_id=COLLEGE_B)

        assert admin.tenant_id is None
        assert service.can_interact(admin.as_actor(), carol)
        assert service.can_access_tenant(admin.as_actor(), COLLEGE_A)

    def test_administrator_target_is_reachable_from_any_tenant(self):
        service = VisibilityService(None, None)
        carol = make_user("Carol", tenant_id=COLLEGE_B)
        root = make_user("Root", role=UserRole.ADMINISTRATOR)
        ada = make_user("Ada", role=UserRole.ADMINISTRATOR, tenant_id=COLLEGE_A)

        assert root.tenant_id is None
        assert service.can_interact(carol.as_actor(), root)
        assert service.can_interact(carol.as_actor(), ada)
        service.ensure_can_interact(carol.as_actor(), root)

        # Administrators still cannot address themselves
        assert not service.can_interact(root.as_actor(), root)


class TestVisibleSets:
    """Tests for visible_candidates and visible_mentors."""

    @pytest.mark.asyncio
    async def test_candidates_are_same_tenant_minus_self(self, unit_env):
        # Arrange
        users = await unit_env.get(UserRepository)
        service = await unit_env.get(VisibilityService)
        alice = await users.save(make_user("Alice"))
        bob = await users.save(make_user("Bob"))
        await users.save(make_user("Carol", tenant_id=COLLEGE_B))

        # Act
        candidates = await service.visible_candidates(alice.as_actor())

        # Assert
        assert [u.id for u in candidates] == [bob.id]

    @pytest.mark.asyncio
    async def test_administrator_sees_every_tenant(self, unit_env):
        users = await unit_env.get(UserRepository)
        service = await unit_env.get(VisibilityService)
        admin = await users.save(make_user("Root", role=UserRole.ADMINISTRATOR))
        bob = await users.save(make_user("Bob", tenant_id=COLLEGE_A))
        carol = await users.save(make_user("Carol", tenant_id=COLLEGE_B))

        candidates = await service.visible_candidates(admin.as_actor())

        assert {u.id for u in candidates} == {bob.id, carol.id}

    @pytest.mark.asyncio
    async def test_visible_mentors_require_active_profile_and_tenant(self, unit_env):
        # Arrange
        users = await unit_env.get(UserRepository)
        mentors = await unit_env.get(MentorRepository)
        service = await unit_env.get(VisibilityService)

        learner = await users.save(make_user("Lena"))
        local = await users.save(make_user("Maya", role=UserRole.MENTOR))
        inactive = await users.save(make_user("Omar", role=UserRole.MENTOR))
        remote = await users.save(
            make_user("Rosa", role=UserRole.MENTOR, tenant_id=COLLEGE_B)
        )
        await mentors.save_profile(make_mentor_profile(local))
        await mentors.save_profile(
            make_mentor_profile(inactive).model_copy(update={"is_active": False})
        )
        await mentors.save_profile(make_mentor_profile(remote))

        # Act
        visible = await service.visible_mentors(learner.as_actor())

        # Assert
        assert [user.id for _, user in visible] == [local.id]

"""Unit tests for project join requests through the ledger."""

from uuid import uuid4

import pytest

from intralink.domain.error import AuthorizationError, ConflictError, NotFoundError
from intralink.domain.repository import (
    CollaborationRequestRepository,
    ProjectRepository,
    UserRepository,
)
from intralink.domain.service import RequestLedgerService
from intralink.domain.value import (
    Decision,
    ProjectStatus,
    RequestKind,
    RequestStatus,
    UserRole,
)
from tests.conftest import COLLEGE_B, make_project, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _setup(unit_env, **project_kwargs):
    users = await unit_env.get(UserRepository)
    projects = await unit_env.get(ProjectRepository)
    lead = await users.save(make_user("Lead"))
    learner = await users.save(make_user("Lena"))
    project = await projects.save(make_project(lead, **project_kwargs))
    return lead, learner, project


class TestSubmitJoinRequest:
    """Tests for creating join requests."""

    @pytest.mark.asyncio
    async def test_learner_requests_to_join_open_project(self, unit_env):
        # Arrange
        ledger = await unit_env.get(RequestLedgerService)
        lead, learner, project = await _setup(unit_env)

        # Act
        request = await ledger.create(
            learner.as_actor(),
            RequestKind.PROJECT_JOIN,
            project.id,
            {"message": "I can help", "skills": ["CAD", " CAD ", "welding"]},
        )

        # Assert
        assert request.target_id == project.id
        assert request.payload.skills == ["CAD", "welding"]
        incoming = await ledger.incoming(lead.as_actor(), RequestKind.PROJECT_JOIN)
        assert [r.id for r in incoming] == [request.id]

    @pytest.mark.asyncio
    async def test_non_learner_cannot_join(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        users = await unit_env.get(UserRepository)
        _, _, project = await _setup(unit_env)
        mentor = await users.save(make_user("Maya", role=UserRole.MENTOR))

        with pytest.raises(AuthorizationError, match="Only learners"):
            await ledger.create(
                mentor.as_actor(), RequestKind.PROJECT_JOIN, project.id, {}
            )

    @pytest.mark.asyncio
    async def test_other_college_project_is_refused(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        users = await unit_env.get(UserRepository)
        _, _, project = await _setup(unit_env)
        outsider = await users.save(make_user("Carol", tenant_id=COLLEGE_B))

        with pytest.raises(AuthorizationError):
            await ledger.create(
                outsider.as_actor(), RequestKind.PROJECT_JOIN, project.id, {}
            )

    @pytest.mark.asyncio
    async def test_lead_cannot_join_own_project(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        lead, _, project = await _setup(unit_env)

        with pytest.raises(AuthorizationError, match="already lead"):
            await ledger.create(lead.as_actor(), RequestKind.PROJECT_JOIN, project.id, {})

    @pytest.mark.asyncio
    async def test_closed_project_refuses_requests(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        _, learner, project = await _setup(unit_env, status=ProjectStatus.COMPLETED)

        with pytest.raises(ConflictError, match="not accepting join requests"):
            await ledger.create(
                learner.as_actor(), RequestKind.PROJECT_JOIN, project.id, {}
            )

    @pytest.mark.asyncio
    async def test_unknown_project_is_not_found(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        users = await unit_env.get(UserRepository)
        learner = await users.save(make_user("Lena"))

        with pytest.raises(NotFoundError):
            await ledger.create(
                learner.as_actor(), RequestKind.PROJECT_JOIN, uuid4(), {}
            )


class TestAnswerJoinRequest:
    """Tests for the lead's answer."""

    @pytest.mark.asyncio
    async def test_only_lead_answers(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        users = await unit_env.get(UserRepository)
        _, learner, project = await _setup(unit_env)
        other = await users.save(make_user("Otto"))
        request = await ledger.create(
            learner.as_actor(), RequestKind.PROJECT_JOIN, project.id, {}
        )

        with pytest.raises(AuthorizationError):
            await ledger.respond(other.as_actor(), request.id, Decision.ACCEPT)

    @pytest.mark.asyncio
    async def test_approved_member_is_listed(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        lead, learner, project = await _setup(unit_env)
        request = await ledger.create(
            learner.as_actor(), RequestKind.PROJECT_JOIN, project.id, {"skills": ["CAD"]}
        )

        await ledger.respond(lead.as_actor(), request.id, Decision.ACCEPT)

        members = await ledger.project_members(learner.as_actor(), project.id)
        assert [m.requester_id for m in members] == [learner.id]

    @pytest.mark.asyncio
    async def test_full_team_refuses_acceptance(self, unit_env):
        # Arrange - lead plus one member fill a team of two
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        users = await unit_env.get(UserRepository)
        lead, learner, project = await _setup(unit_env, max_team_size=2)
        second = await users.save(make_user("Sam"))
        first = await ledger.create(
            learner.as_actor(), RequestKind.PROJECT_JOIN, project.id, {}
        )
        late = await ledger.create(
            second.as_actor(), RequestKind.PROJECT_JOIN, project.id, {}
        )
        await ledger.respond(lead.as_actor(), first.id, Decision.ACCEPT)

        # Act & Assert
        with pytest.raises(ConflictError, match="team is full"):
            await ledger.respond(lead.as_actor(), late.id, Decision.ACCEPT)

        assert (await repo.find_by_id(late.id)).status is RequestStatus.PENDING
        projects = await unit_env.get(ProjectRepository)
        assert (await projects.find_by_id(project.id)).member_count == 1

        # Rejecting is still allowed
        rejected = await ledger.respond(lead.as_actor(), late.id, Decision.REJECT)
        assert rejected.status is RequestStatus.REJECTED

    @pytest.mark.asyncio
    async def test_seat_taken_by_concurrent_approval_refuses_acceptance(
        self, unit_env
    ):
        # Arrange - another approval takes the last seat after the lead loaded
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        projects = await unit_env.get(ProjectRepository)
        lead, learner, project = await _setup(unit_env, max_team_size=2)
        request = await ledger.create(
            learner.as_actor(), RequestKind.PROJECT_JOIN, project.id, {}
        )
        assert await projects.claim_seat(project.id)

        # Act & Assert
        with pytest.raises(ConflictError, match="team is full"):
            await ledger.respond(lead.as_actor(), request.id, Decision.ACCEPT)

        assert (await repo.find_by_id(request.id)).status is RequestStatus.PENDING
        assert not await projects.claim_seat(project.id)

    @pytest.mark.asyncio
    async def test_members_of_other_college_project_are_hidden(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        users = await unit_env.get(UserRepository)
        _, _, project = await _setup(unit_env)
        outsider = await users.save(make_user("Carol", tenant_id=COLLEGE_B))

        with pytest.raises(NotFoundError):
            await ledger.project_members(outsider.as_actor(), project.id)

"""Unit tests for RequestLedgerService: shared lifecycle and connections."""

from datetime import datetime
from uuid import uuid4

import pytest

from intralink.config import CollaborationSettings
from intralink.domain.error import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from intralink.domain.repository import CollaborationRequestRepository, UserRepository
from intralink.domain.service import (
    ConnectionPolicy,
    MentorshipPolicy,
    ProjectJoinPolicy,
    RequestLedgerService,
    SuggestionService,
    VisibilityService,
)
from intralink.domain.value import (
    Decision,
    RequestId,
    RequestKind,
    RequestStatus,
    UserRole,
)
from tests.conftest import COLLEGE_B, make_connection, make_user
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def _seed(unit_env, *users):
    repo = await unit_env.get(UserRepository)
    for user in users:
        await repo.save(user)


class TestCreate:
    """Tests for creating connection requests."""

    @pytest.mark.asyncio
    async def test_create_stores_pending_request(self, unit_env):
        # Arrange
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)

        # Act
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {"message": "Hi Bob"}
        )

        # Assert
        assert request.status is RequestStatus.PENDING
        assert request.requester_id == alice.id
        assert request.target_id == bob.id
        assert request.tenant_id == alice.tenant_id
        assert request.payload.message == "Hi Bob"
        assert request.responded_at is None

    @pytest.mark.asyncio
    async def test_duplicate_pending_request_conflicts(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)

        await ledger.create(alice.as_actor(), RequestKind.CONNECTION, bob.id, {})
        with pytest.raises(ConflictError, match="request already pending"):
            await ledger.create(alice.as_actor(), RequestKind.CONNECTION, bob.id, {})

        assert await repo.count_pending_by_requester(alice.id) == 1

    @pytest.mark.asyncio
    async def test_reverse_pending_request_conflicts(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)

        await ledger.create(alice.as_actor(), RequestKind.CONNECTION, bob.id, {})

        with pytest.raises(ConflictError, match="request already pending"):
            await ledger.create(bob.as_actor(), RequestKind.CONNECTION, alice.id, {})

    @pytest.mark.asyncio
    async def test_concurrent_reverse_request_is_stopped_at_insert(self, unit_env):
        # Arrange - both sides pass the read check before either inserts
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        policy = ledger.policy_for(RequestKind.CONNECTION)

        async def stale_check(actor, target, payload):
            return payload

        policy.check_create = stale_check
        first = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        # Act & Assert
        with pytest.raises(ConflictError, match="pending or accepted"):
            await ledger.create(bob.as_actor(), RequestKind.CONNECTION, alice.id, {})

        assert await repo.find_between(RequestKind.CONNECTION, alice.id, bob.id) == [
            first
        ]

    @pytest.mark.asyncio
    async def test_existing_connection_conflicts(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        await repo.save(make_connection(bob, alice))

        with pytest.raises(ConflictError, match="already connected"):
            await ledger.create(alice.as_actor(), RequestKind.CONNECTION, bob.id, {})

    @pytest.mark.asyncio
    async def test_rejected_connection_can_be_requested_again(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        await repo.save(make_connection(alice, bob, status=RequestStatus.REJECTED))

        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        assert request.is_pending

    @pytest.mark.asyncio
    async def test_self_request_is_refused(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice = make_user("Alice")
        await _seed(unit_env, alice)

        with pytest.raises(AuthorizationError, match="yourself"):
            await ledger.create(alice.as_actor(), RequestKind.CONNECTION, alice.id, {})

    @pytest.mark.asyncio
    async def test_cross_tenant_request_is_refused(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, carol = make_user("Alice"), make_user("Carol", tenant_id=COLLEGE_B)
        await _seed(unit_env, alice, carol)

        with pytest.raises(AuthorizationError):
            await ledger.create(alice.as_actor(), RequestKind.CONNECTION, carol.id, {})
        assert await repo.count_pending_by_requester(alice.id) == 0

    @pytest.mark.asyncio
    async def test_learner_can_request_administrator(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice = make_user("Alice")
        root = make_user("Root", role=UserRole.ADMINISTRATOR)
        await _seed(unit_env, alice, root)

        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, root.id, {}
        )
        accepted = await ledger.respond(root.as_actor(), request.id, Decision.ACCEPT)

        assert request.tenant_id == alice.tenant_id
        assert accepted.status is RequestStatus.ACCEPTED

    @pytest.mark.asyncio
    async def test_unknown_target_is_not_found(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice = make_user("Alice")
        await _seed(unit_env, alice)

        with pytest.raises(NotFoundError):
            await ledger.create(alice.as_actor(), RequestKind.CONNECTION, uuid4(), {})

    @pytest.mark.asyncio
    async def test_overlong_message_is_a_validation_error(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)

        with pytest.raises(ValidationError, match="message"):
            await ledger.create(
                alice.as_actor(), RequestKind.CONNECTION, bob.id, {"message": "x" * 501}
            )

    @pytest.mark.asyncio
    async def test_pending_outgoing_cap(self, unit_env):
        # Arrange - a ledger capped at one pending request
        ledger = RequestLedgerService(
            request_repository=await unit_env.get(CollaborationRequestRepository),
            project_repository=None,
            visibility_service=await unit_env.get(VisibilityService),
            connection_policy=await unit_env.get(ConnectionPolicy),
            project_join_policy=await unit_env.get(ProjectJoinPolicy),
            mentorship_policy=await unit_env.get(MentorshipPolicy),
            settings=CollaborationSettings(max_pending_outgoing=1),
        )
        alice, bob, dan = make_user("Alice"), make_user("Bob"), make_user("Dan")
        await _seed(unit_env, alice, bob, dan)
        await ledger.create(alice.as_actor(), RequestKind.CONNECTION, bob.id, {})

        # Act & Assert
        with pytest.raises(ConflictError, match="too many pending requests"):
            await ledger.create(alice.as_actor(), RequestKind.CONNECTION, dan.id, {})


class TestRespond:
    """Tests for accepting and rejecting."""

    @pytest.mark.asyncio
    async def test_accept_sets_terminal_status(self, unit_env):
        # Arrange
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        # Act
        accepted = await ledger.respond(bob.as_actor(), request.id, Decision.ACCEPT)

        # Assert
        assert accepted.status is RequestStatus.ACCEPTED
        assert accepted.responded_at is not None
        assert [r.id for r in await ledger.active(alice.as_actor())] == [request.id]
        assert [r.id for r in await ledger.active(bob.as_actor())] == [request.id]

    @pytest.mark.asyncio
    async def test_terminal_status_cannot_change(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )
        await ledger.respond(bob.as_actor(), request.id, Decision.REJECT)

        with pytest.raises(InvalidStateError):
            await ledger.respond(bob.as_actor(), request.id, Decision.ACCEPT)

        stored = await ledger.get_visible(bob.as_actor(), request.id)
        assert stored.status is RequestStatus.REJECTED

    @pytest.mark.asyncio
    async def test_requester_cannot_answer_own_request(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        with pytest.raises(AuthorizationError):
            await ledger.respond(alice.as_actor(), request.id, Decision.ACCEPT)

    @pytest.mark.asyncio
    async def test_outsider_cannot_see_request(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        carol = make_user("Carol", tenant_id=COLLEGE_B)
        await _seed(unit_env, alice, bob, carol)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        with pytest.raises(NotFoundError):
            await ledger.respond(carol.as_actor(), request.id, Decision.ACCEPT)

    @pytest.mark.asyncio
    async def test_target_answers_administrator_from_other_tenant(self, unit_env):
        # Arrange - the request is stamped with the administrator's tenant
        ledger = await unit_env.get(RequestLedgerService)
        ada = make_user("Ada", role=UserRole.ADMINISTRATOR, tenant_id=COLLEGE_B)
        bob = make_user("Bob")
        await _seed(unit_env, ada, bob)
        request = await ledger.create(
            ada.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )
        assert request.tenant_id == COLLEGE_B

        # Act
        assert [r.id for r in await ledger.incoming(bob.as_actor())] == [request.id]
        accepted = await ledger.respond(bob.as_actor(), request.id, Decision.ACCEPT)

        # Assert
        assert accepted.status is RequestStatus.ACCEPTED
        removed = await ledger.remove_connection(bob.as_actor(), request.id)
        assert removed.id == request.id

    @pytest.mark.asyncio
    async def test_kind_mismatch_is_not_found(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        with pytest.raises(NotFoundError):
            await ledger.respond(
                bob.as_actor(), request.id, Decision.ACCEPT, RequestKind.PROJECT_JOIN
            )

    @pytest.mark.asyncio
    async def test_lost_race_is_a_conflict(self, unit_env):
        # Arrange - the ledger reads pending, then another writer answers first
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        original_get_visible = ledger.get_visible

        async def read_then_lose(actor, request_id, kind=None):
            snapshot = await original_get_visible(actor, request_id, kind)
            await repo.update_status(
                request_id, RequestStatus.PENDING, RequestStatus.REJECTED, datetime.now()
            )
            return snapshot

        ledger.get_visible = read_then_lose

        # Act & Assert
        with pytest.raises(ConflictError, match="already answered or withdrawn"):
            await ledger.respond(bob.as_actor(), request.id, Decision.ACCEPT)

        stored = await repo.find_by_id(request.id)
        assert stored.status is RequestStatus.REJECTED

    @pytest.mark.asyncio
    async def test_unknown_request_is_not_found(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        bob = make_user("Bob")
        await _seed(unit_env, bob)

        with pytest.raises(NotFoundError):
            await ledger.respond(bob.as_actor(), RequestId(uuid4()), Decision.ACCEPT)


class TestWithdrawAndRemove:
    """Tests for withdrawal and connection removal."""

    @pytest.mark.asyncio
    async def test_withdraw_deletes_pending_request(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        withdrawn = await ledger.withdraw(alice.as_actor(), request.id)

        assert withdrawn.id == request.id
        assert await repo.find_by_id(request.id) is None
        assert await ledger.incoming(bob.as_actor()) == []

    @pytest.mark.asyncio
    async def test_withdrawn_request_cannot_be_answered(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )
        await ledger.withdraw(alice.as_actor(), request.id)

        with pytest.raises(NotFoundError):
            await ledger.respond(bob.as_actor(), request.id, Decision.ACCEPT)

    @pytest.mark.asyncio
    async def test_only_requester_withdraws(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        with pytest.raises(AuthorizationError):
            await ledger.withdraw(bob.as_actor(), request.id)

    @pytest.mark.asyncio
    async def test_answered_request_cannot_be_withdrawn(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )
        await ledger.respond(bob.as_actor(), request.id, Decision.ACCEPT)

        with pytest.raises(InvalidStateError):
            await ledger.withdraw(alice.as_actor(), request.id)

    @pytest.mark.asyncio
    async def test_either_party_removes_connection(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        connection = await repo.save(make_connection(alice, bob))

        removed = await ledger.remove_connection(bob.as_actor(), connection.id)

        assert removed.id == connection.id
        assert await repo.find_by_id(connection.id) is None

    @pytest.mark.asyncio
    async def test_removed_connection_parties_are_suggested_again(self, unit_env):
        # Arrange
        ledger = await unit_env.get(RequestLedgerService)
        suggestions = await unit_env.get(SuggestionService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )
        await ledger.respond(bob.as_actor(), request.id, Decision.ACCEPT)
        assert await suggestions.suggest(alice.as_actor()) == []
        assert await suggestions.suggest(bob.as_actor()) == []

        # Act
        await ledger.remove_connection(alice.as_actor(), request.id)

        # Assert
        assert [s.user.id for s in await suggestions.suggest(alice.as_actor())] == [
            bob.id
        ]
        assert [s.user.id for s in await suggestions.suggest(bob.as_actor())] == [
            alice.id
        ]

    @pytest.mark.asyncio
    async def test_non_party_cannot_remove_connection(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, bob, dan = make_user("Alice"), make_user("Bob"), make_user("Dan")
        await _seed(unit_env, alice, bob, dan)
        connection = await repo.save(make_connection(alice, bob))

        with pytest.raises(AuthorizationError):
            await ledger.remove_connection(dan.as_actor(), connection.id)

    @pytest.mark.asyncio
    async def test_removing_pending_connection_is_a_withdrawal(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        await _seed(unit_env, alice, bob)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        # The recipient may only reject, not delete
        with pytest.raises(AuthorizationError):
            await ledger.remove_connection(bob.as_actor(), request.id)

        await ledger.remove_connection(alice.as_actor(), request.id)
        assert await ledger.outgoing(alice.as_actor()) == []


class TestListings:
    """Tests for incoming/outgoing/active views."""

    @pytest.mark.asyncio
    async def test_incoming_and_outgoing_are_pending_only(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        repo = await unit_env.get(CollaborationRequestRepository)
        alice, bob, dan = make_user("Alice"), make_user("Bob"), make_user("Dan")
        await _seed(unit_env, alice, bob, dan)
        pending = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )
        await repo.save(make_connection(dan, bob))

        incoming = await ledger.incoming(bob.as_actor())
        outgoing = await ledger.outgoing(alice.as_actor())

        assert [r.id for r in incoming] == [pending.id]
        assert [r.id for r in outgoing] == [pending.id]
        assert await ledger.incoming(bob.as_actor(), RequestKind.PROJECT_JOIN) == []

    @pytest.mark.asyncio
    async def test_administrator_sees_requests_of_any_tenant(self, unit_env):
        ledger = await unit_env.get(RequestLedgerService)
        alice, bob = make_user("Alice"), make_user("Bob")
        admin = make_user("Root", role=UserRole.ADMINISTRATOR)
        await _seed(unit_env, alice, bob, admin)
        request = await ledger.create(
            alice.as_actor(), RequestKind.CONNECTION, bob.id, {}
        )

        seen = await ledger.get_visible(admin.as_actor(), request.id)

        assert seen.id == request.id

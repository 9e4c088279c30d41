"""In-memory collaboration request repository for testing."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from intralink.domain.model import CollaborationRequest
from intralink.domain.repository import (
    CONNECTION_PAIR_CONSTRAINT,
    PENDING_REQUEST_CONSTRAINT,
    SESSION_SLOT_CONSTRAINT,
    CollaborationRequestRepository,
)
from intralink.domain.value import RequestId, RequestKind, RequestStatus, UserId

_OCCUPYING = (RequestStatus.PENDING, RequestStatus.ACCEPTED)


def _newest_first(requests: list[CollaborationRequest]) -> list[CollaborationRequest]:
    return sorted(requests, key=lambda r: (r.created_at, r.id), reverse=True)


class InMemoryCollaborationRequestRepository(CollaborationRequestRepository):
    """In-memory implementation of CollaborationRequestRepository for testing.

    Mirrors the partial unique indexes of the PostgreSQL table by
    raising IntegrityError naming the violated constraint.
    """

    def __init__(self) -> None:
        self._requests: dict[RequestId, CollaborationRequest] = {}

    async def find_by_id(self, request_id: RequestId) -> Optional[CollaborationRequest]:
        return self._requests.get(request_id)

    async def find_pending(
        self, kind: RequestKind, requester_id: UserId, target_id: UUID
    ) -> Optional[CollaborationRequest]:
        for request in self._requests.values():
            if (
                request.kind is kind
                and request.requester_id == requester_id
                and request.target_id == target_id
                and request.is_pending
            ):
                return request
        return None

    async def find_between(
        self, kind: RequestKind, user_a: UserId, user_b: UUID
    ) -> list[CollaborationRequest]:
        return [
            r
            for r in self._requests.values()
            if r.kind is kind
            and {r.requester_id, r.target_id} == {user_a, user_b}
        ]

    async def find_by_requester(
        self,
        requester_id: UserId,
        kind: RequestKind | None = None,
        status: RequestStatus | None = None,
    ) -> list[CollaborationRequest]:
        return _newest_first(
            [
                r
                for r in self._requests.values()
                if r.requester_id == requester_id
                and (kind is None or r.kind is kind)
                and (status is None or r.status is status)
            ]
        )

    async def find_by_targets(
        self,
        target_ids: Sequence[UUID],
        kind: RequestKind | None = None,
        status: RequestStatus | None = None,
    ) -> list[CollaborationRequest]:
        wanted = set(target_ids)
        return _newest_first(
            [
                r
                for r in self._requests.values()
                if r.target_id in wanted
                and (kind is None or r.kind is kind)
                and (status is None or r.status is status)
            ]
        )

    async def find_connections_of(
        self, user_ids: Sequence[UserId]
    ) -> list[CollaborationRequest]:
        wanted = set(user_ids)
        return [
            r
            for r in self._requests.values()
            if r.kind is RequestKind.CONNECTION
            and r.status is RequestStatus.ACCEPTED
            and (r.requester_id in wanted or r.target_id in wanted)
        ]

    async def find_occupying(self, mentor_id: UserId) -> list[CollaborationRequest]:
        return [
            r
            for r in self._requests.values()
            if r.kind is RequestKind.MENTORSHIP_SESSION
            and r.target_id == mentor_id
            and r.status in _OCCUPYING
        ]

    async def count_sessions_by_mentors(
        self, mentor_ids: Sequence[UserId]
    ) -> dict[UserId, int]:
        wanted = set(mentor_ids)
        counts: dict[UserId, int] = {}
        for r in self._requests.values():
            if r.kind is RequestKind.MENTORSHIP_SESSION and r.target_id in wanted:
                mentor_id = UserId(r.target_id)
                counts[mentor_id] = counts.get(mentor_id, 0) + 1
        return counts

    async def count_pending_by_requester(self, requester_id: UserId) -> int:
        return sum(
            1
            for r in self._requests.values()
            if r.requester_id == requester_id and r.is_pending
        )

    async def save(self, request: CollaborationRequest) -> CollaborationRequest:
        """Insert a new request.

        Raises:
            IntegrityError: If a pending duplicate exists, the pair already has
                a live connection, or the slot is taken
        """
        if request.is_pending and await self.find_pending(
            request.kind, request.requester_id, request.target_id
        ):
            raise IntegrityError(
                PENDING_REQUEST_CONSTRAINT, None, Exception(PENDING_REQUEST_CONSTRAINT)
            )
        if request.slot is not None and request.status in _OCCUPYING:
            taken = {r.slot for r in await self.find_occupying(UserId(request.target_id))}
            if request.slot in taken:
                raise IntegrityError(
                    SESSION_SLOT_CONSTRAINT, None, Exception(SESSION_SLOT_CONSTRAINT)
                )
        if request.kind is RequestKind.CONNECTION and request.status in _OCCUPYING:
            live = [
                r
                for r in await self.find_between(
                    RequestKind.CONNECTION, request.requester_id, request.target_id
                )
                if r.status in _OCCUPYING
            ]
            if live:
                raise IntegrityError(
                    CONNECTION_PAIR_CONSTRAINT,
                    None,
                    Exception(CONNECTION_PAIR_CONSTRAINT),
                )
        self._requests[request.id] = request
        return request

    async def update_status(
        self,
        request_id: RequestId,
        expected: RequestStatus,
        new_status: RequestStatus,
        at: datetime,
    ) -> Optional[CollaborationRequest]:
        current = self._requests.get(request_id)
        if current is None or current.status is not expected:
            return None
        updated = current.model_copy(
            update={"status": new_status, "responded_at": at, "updated_at": at}
        )
        self._requests[request_id] = updated
        return updated

    async def delete(
        self, request_id: RequestId, expected: RequestStatus | None = None
    ) -> bool:
        current = self._requests.get(request_id)
        if current is None or (expected is not None and current.status is not expected):
            return False
        del self._requests[request_id]
        return True

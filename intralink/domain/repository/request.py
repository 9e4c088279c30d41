"""Collaboration request repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from intralink.domain.model.request import CollaborationRequest
from intralink.domain.value import RequestId, RequestKind, RequestStatus, UserId

# Names of the store's uniqueness constraints. Implementations raise
# IntegrityError mentioning the violated constraint name.
PENDING_REQUEST_CONSTRAINT = "uq_collaboration_requests_pending"
SESSION_SLOT_CONSTRAINT = "uq_collaboration_requests_slot"
CONNECTION_PAIR_CONSTRAINT = "uq_collaboration_requests_connection_pair"


class CollaborationRequestRepository(ABC):
    """Repository for CollaborationRequest entity.

    The collaboration_requests table is the only shared mutable resource of
    the collaboration core. All mutations are conditional: inserts are
    guarded by unique constraints, updates and deletes by the current status.
    """

    @abstractmethod
    async def find_by_id(self, request_id: RequestId) -> Optional[CollaborationRequest]:
        """Find a request by ID.

        Args:
            request_id: The request's unique identifier

        Returns:
            The request if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_pending(
        self, kind: RequestKind, requester_id: UserId, target_id: UUID
    ) -> Optional[CollaborationRequest]:
        """Find the pending request for a (requester, target, kind) triple.

        Args:
            kind: Request kind
            requester_id: Requesting user
            target_id: Target user or project

        Returns:
            The pending request if one exists, None otherwise
        """
        pass

    @abstractmethod
    async def find_between(
        self, kind: RequestKind, user_a: UserId, user_b: UUID
    ) -> list[CollaborationRequest]:
        """Find requests of a kind between two parties, in either direction.

        Args:
            kind: Request kind
            user_a: One party
            user_b: The other party

        Returns:
            Requests in any status
        """
        pass

    @abstractmethod
    async def find_by_requester(
        self,
        requester_id: UserId,
        kind: RequestKind | None = None,
        status: RequestStatus | None = None,
    ) -> list[CollaborationRequest]:
        """Find requests sent by a user.

        Args:
            requester_id: Requesting user
            kind: Optional kind filter
            status: Optional status filter

        Returns:
            Matching requests, newest first
        """
        pass

    @abstractmethod
    async def find_by_targets(
        self,
        target_ids: Sequence[UUID],
        kind: RequestKind | None = None,
        status: RequestStatus | None = None,
    ) -> list[CollaborationRequest]:
        """Find requests addressed to any of the given targets (batch query).

        Args:
            target_ids: Target users or projects
            kind: Optional kind filter
            status: Optional status filter

        Returns:
            Matching requests, newest first
        """
        pass

    @abstractmethod
    async def find_connections_of(
        self, user_ids: Sequence[UserId]
    ) -> list[CollaborationRequest]:
        """Find accepted connections touching any of the given users (batch query).

        Args:
            user_ids: Users on either side of the connection

        Returns:
            Accepted connection requests
        """
        pass

    @abstractmethod
    async def find_occupying(self, mentor_id: UserId) -> list[CollaborationRequest]:
        """Find mentorship sessions that occupy a mentor's slots.

        Args:
            mentor_id: The mentor's user ID

        Returns:
            Pending or accepted mentorship session requests for the mentor
        """
        pass

    @abstractmethod
    async def count_sessions_by_mentors(
        self, mentor_ids: Sequence[UserId]
    ) -> dict[UserId, int]:
        """Count mentorship session requests per mentor (batch query).

        Args:
            mentor_ids: Mentors to count for

        Returns:
            Session count in any status, keyed by mentor. Mentors without
            sessions may be missing.
        """
        pass

    @abstractmethod
    async def count_pending_by_requester(self, requester_id: UserId) -> int:
        """Count a user's pending outgoing requests (all kinds).

        Args:
            requester_id: Requesting user

        Returns:
            Number of pending requests
        """
        pass

    @abstractmethod
    async def save(self, request: CollaborationRequest) -> CollaborationRequest:
        """Insert a new request.

        Args:
            request: The request to insert

        Returns:
            The saved request

        Raises:
            IntegrityError: If a pending request already exists for the
                (requester, target, kind) triple, the two users already
                have a pending or accepted connection in either direction,
                or the mentorship slot is already taken
        """
        pass

    @abstractmethod
    async def update_status(
        self,
        request_id: RequestId,
        expected: RequestStatus,
        new_status: RequestStatus,
        at: datetime,
    ) -> Optional[CollaborationRequest]:
        """Conditionally change a request's status.

        The update only applies if the stored status still equals
        ``expected`` (compare-and-set).

        Args:
            request_id: The request to update
            expected: Status the request must currently have
            new_status: Status to set
            at: Timestamp recorded as responded/updated time

        Returns:
            The updated request, or None if the condition did not hold
        """
        pass

    @abstractmethod
    async def delete(
        self, request_id: RequestId, expected: RequestStatus | None = None
    ) -> bool:
        """Delete a request, optionally only if it has the expected status.

        Args:
            request_id: The request to delete
            expected: If given, only delete when the status matches

        Returns:
            True if a row was deleted, False otherwise
        """
        pass

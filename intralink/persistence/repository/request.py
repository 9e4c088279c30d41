"""PostgreSQL implementation of CollaborationRequest repository."""

from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from sqlalchemy import and_, delete, func, insert, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from intralink.domain.model import CollaborationRequest
from intralink.domain.repository import CollaborationRequestRepository
from intralink.domain.value import RequestId, RequestKind, RequestStatus, UserId
from intralink.persistence.mappers import request_to_dict, row_to_request
from intralink.persistence.tables import collaboration_requests_table

requests_table = collaboration_requests_table


class PostgresCollaborationRequestRepository(CollaborationRequestRepository):
    """PostgreSQL implementation of CollaborationRequestRepository.

    Uniqueness is enforced by the partial unique indexes on the table, so
    ``save`` lets IntegrityError propagate. Status changes and deletes carry
    the expected status in their WHERE clause.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _fetch(self, stmt) -> list[CollaborationRequest]:
        result = await self.session.execute(stmt)
        return [row_to_request(dict(row)) for row in result.mappings().all()]

    async def find_by_id(self, request_id: RequestId) -> Optional[CollaborationRequest]:
        """Find a request by ID."""
        stmt = select(requests_table).where(requests_table.c.id == request_id)
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_request(dict(row)) if row else None

    async def find_pending(
        self, kind: RequestKind, requester_id: UserId, target_id: UUID
    ) -> Optional[CollaborationRequest]:
        """Find the pending request for a (requester, target, kind) triple."""
        stmt = select(requests_table).where(
            and_(
                requests_table.c.kind == kind.value,
                requests_table.c.requester_id == requester_id,
                requests_table.c.target_id == target_id,
                requests_table.c.status == RequestStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return row_to_request(dict(row)) if row else None

    async def find_between(
        self, kind: RequestKind, user_a: UserId, user_b: UUID
    ) -> list[CollaborationRequest]:
        """Find requests of a kind between two parties, in either direction."""
        stmt = select(requests_table).where(
            and_(
                requests_table.c.kind == kind.value,
                or_(
                    and_(
                        requests_table.c.requester_id == user_a,
                        requests_table.c.target_id == user_b,
                    ),
                    and_(
                        requests_table.c.requester_id == user_b,
                        requests_table.c.target_id == user_a,
                    ),
                ),
            )
        )
        return await self._fetch(stmt)

    async def find_by_requester(
        self,
        requester_id: UserId,
        kind: RequestKind | None = None,
        status: RequestStatus | None = None,
    ) -> list[CollaborationRequest]:
        """Find requests sent by a user, newest first."""
        conditions = [requests_table.c.requester_id == requester_id]
        if kind is not None:
            conditions.append(requests_table.c.kind == kind.value)
        if status is not None:
            conditions.append(requests_table.c.status == status.value)
        stmt = (
            select(requests_table)
            .where(and_(*conditions))
            .order_by(requests_table.c.created_at.desc(), requests_table.c.id.desc())
        )
        return await self._fetch(stmt)

    async def find_by_targets(
        self,
        target_ids: Sequence[UUID],
        kind: RequestKind | None = None,
        status: RequestStatus | None = None,
    ) -> list[CollaborationRequest]:
        """Find requests addressed to any of the targets (batch query)."""
        if not target_ids:
            return []
        conditions = [requests_table.c.target_id.in_(list(target_ids))]
        if kind is not None:
            conditions.append(requests_table.c.kind == kind.value)
        if status is not None:
            conditions.append(requests_table.c.status == status.value)
        stmt = (
            select(requests_table)
            .where(and_(*conditions))
            .order_by(requests_table.c.created_at.desc(), requests_table.c.id.desc())
        )
        return await self._fetch(stmt)

    async def find_connections_of(
        self, user_ids: Sequence[UserId]
    ) -> list[CollaborationRequest]:
        """Find accepted connections touching any of the users (batch query)."""
        if not user_ids:
            return []
        ids = list(user_ids)
        stmt = select(requests_table).where(
            and_(
                requests_table.c.kind == RequestKind.CONNECTION.value,
                requests_table.c.status == RequestStatus.ACCEPTED.value,
                or_(
                    requests_table.c.requester_id.in_(ids),
                    requests_table.c.target_id.in_(ids),
                ),
            )
        )
        return await self._fetch(stmt)

    async def find_occupying(self, mentor_id: UserId) -> list[CollaborationRequest]:
        """Find pending or accepted sessions booked with a mentor."""
        stmt = select(requests_table).where(
            and_(
                requests_table.c.kind == RequestKind.MENTORSHIP_SESSION.value,
                requests_table.c.target_id == mentor_id,
                requests_table.c.status.in_(
                    [RequestStatus.PENDING.value, RequestStatus.ACCEPTED.value]
                ),
            )
        )
        return await self._fetch(stmt)

    async def count_sessions_by_mentors(
        self, mentor_ids: Sequence[UserId]
    ) -> dict[UserId, int]:
        """Count mentorship session requests per mentor (batch query)."""
        if not mentor_ids:
            return {}
        stmt = (
            select(requests_table.c.target_id, func.count())
            .where(
                and_(
                    requests_table.c.kind == RequestKind.MENTORSHIP_SESSION.value,
                    requests_table.c.target_id.in_(list(mentor_ids)),
                )
            )
            .group_by(requests_table.c.target_id)
        )
        result = await self.session.execute(stmt)
        return {UserId(UUID(str(target_id))): count for target_id, count in result.all()}

    async def count_pending_by_requester(self, requester_id: UserId) -> int:
        """Count a user's pending outgoing requests."""
        stmt = select(func.count()).select_from(requests_table).where(
            and_(
                requests_table.c.requester_id == requester_id,
                requests_table.c.status == RequestStatus.PENDING.value,
            )
        )
        result = await self.session.execute(stmt)
        return result.scalar_one()

    async def save(self, request: CollaborationRequest) -> CollaborationRequest:
        """Insert a new request.

        Raises:
            IntegrityError: If a partial unique index rejects the row
        """
        stmt = insert(requests_table).values(**request_to_dict(request))
        await self.session.execute(stmt)
        await self.session.flush()
        return request

    async def update_status(
        self,
        request_id: RequestId,
        expected: RequestStatus,
        new_status: RequestStatus,
        at: datetime,
    ) -> Optional[CollaborationRequest]:
        """Compare-and-set the status of a request."""
        stmt = (
            update(requests_table)
            .where(
                and_(
                    requests_table.c.id == request_id,
                    requests_table.c.status == expected.value,
                )
            )
            .values(status=new_status.value, responded_at=at, updated_at=at)
            .returning(requests_table)
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        await self.session.flush()
        return row_to_request(dict(row)) if row else None

    async def delete(
        self, request_id: RequestId, expected: RequestStatus | None = None
    ) -> bool:
        """Delete a request, optionally only if it has the expected status."""
        conditions = [requests_table.c.id == request_id]
        if expected is not None:
            conditions.append(requests_table.c.status == expected.value)
        result = await self.session.execute(
            delete(requests_table).where(and_(*conditions))
        )
        await self.session.flush()
        return result.rowcount > 0  # type: ignore[attr-defined]

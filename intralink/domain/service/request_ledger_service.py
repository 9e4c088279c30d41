"""Request ledger domain service.

Single lifecycle for every collaboration request kind:

    pending --respond(accept)--> accepted   (terminal)
    pending --respond(reject)--> rejected   (terminal)
    pending --withdraw--------> deleted
    accepted/rejected connection --remove--> deleted

Every mutation is guarded at the store: inserts by the partial unique
indexes, status changes and deletes by a condition on the current status.
A caller that loses a race gets a ConflictError and nothing is written.
"""

from datetime import datetime
from typing import Any, Mapping, Optional
from uuid import UUID, uuid4

import logfire
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError

from intralink.config import CollaborationSettings
from intralink.domain.error import (
    AuthorizationError,
    ConflictError,
    InvalidStateError,
    NotFoundError,
    ValidationError,
)
from intralink.domain.model import CollaborationRequest
from intralink.domain.model.request import RequestPayload
from intralink.domain.repository import (
    CONNECTION_PAIR_CONSTRAINT,
    SESSION_SLOT_CONSTRAINT,
    CollaborationRequestRepository,
    ProjectRepository,
)
from intralink.domain.value import (
    Actor,
    Decision,
    ProjectId,
    RequestId,
    RequestKind,
    RequestStatus,
)

from .base import Service
from .request_policy import (
    ConnectionPolicy,
    MentorshipPolicy,
    ProjectJoinPolicy,
    RequestPolicy,
)
from .visibility_service import VisibilityService

_payload_adapter: TypeAdapter[RequestPayload] = TypeAdapter(RequestPayload)


def parse_payload(kind: RequestKind, payload: Mapping[str, Any]) -> RequestPayload:
    """Validate a raw payload for the given kind.

    Raises:
        ValidationError: If the payload is missing fields or malformed
    """
    try:
        return _payload_adapter.validate_python({**payload, "kind": kind})
    except PydanticValidationError as e:
        first = e.errors()[0]
        location = ".".join(str(part) for part in first["loc"][1:])
        message = first["msg"]
        raise ValidationError(f"{location}: {message}" if location else message)


class RequestLedgerService(Service):
    """Owns the lifecycle of collaboration requests."""

    def __init__(
        self,
        request_repository: CollaborationRequestRepository,
        project_repository: ProjectRepository,
        visibility_service: VisibilityService,
        connection_policy: ConnectionPolicy,
        project_join_policy: ProjectJoinPolicy,
        mentorship_policy: MentorshipPolicy,
        settings: CollaborationSettings,
    ) -> None:
        """Initialize request ledger.

        Args:
            request_repository: Collaboration request repository
            project_repository: Project repository
            visibility_service: Visibility rules
            connection_policy: Rules for peer connections
            project_join_policy: Rules for project join requests
            mentorship_policy: Rules for mentorship bookings
            settings: Collaboration limits
        """
        self.request_repository = request_repository
        self.project_repository = project_repository
        self.visibility_service = visibility_service
        self.settings = settings
        self.policies: dict[RequestKind, RequestPolicy] = {
            policy.kind: policy
            for policy in (connection_policy, project_join_policy, mentorship_policy)
        }

    def policy_for(self, kind: RequestKind) -> RequestPolicy:
        return self.policies[kind]

    async def create(
        self,
        actor: Actor,
        kind: RequestKind,
        target_id: UUID,
        payload: Mapping[str, Any],
    ) -> CollaborationRequest:
        """Create a pending request.

        Checks run in order: payload, target, authorization, kind-specific
        preconditions, duplicates. Nothing is written unless all pass.

        Args:
            actor: Requesting user's identity context
            kind: Request kind
            target_id: Target user, project or mentor
            payload: Raw kind-specific payload

        Returns:
            The stored pending request

        Raises:
            ValidationError: Malformed payload
            NotFoundError: Target does not exist
            AuthorizationError: Actor may not address the target
            ConflictError: Duplicate pending request, slot taken, or the
                target refuses requests
        """
        with logfire.span(
            "request_ledger.create",
            kind=kind.value,
            requester_id=str(actor.user_id),
            target_id=str(target_id),
        ):
            parsed = parse_payload(kind, payload)
            policy = self.policy_for(kind)
            target = await policy.resolve_target(target_id)
            await policy.authorize_create(actor, target)
            parsed = await policy.check_create(actor, target, parsed)

            if await self.request_repository.find_pending(
                kind, actor.user_id, target.id
            ):
                logfire.warn(
                    "Duplicate pending request",
                    kind=kind.value,
                    requester_id=str(actor.user_id),
                    target_id=str(target.id),
                )
                raise ConflictError("request already pending")

            await self._check_outgoing_limit(actor)

            now = datetime.now()
            request = CollaborationRequest(
                id=RequestId(uuid4()),
                kind=kind,
                requester_id=actor.user_id,
                target_id=target.id,
                tenant_id=actor.tenant_id or target.tenant_id,
                status=RequestStatus.PENDING,
                payload=parsed,
                created_at=now,
                updated_at=now,
            )

            try:
                saved = await self.request_repository.save(request)
            except IntegrityError as e:
                raise self._conflict_from(e, request) from e

            logfire.info(
                "Collaboration request created",
                request_id=str(saved.id),
                kind=kind.value,
                requester_id=str(actor.user_id),
                target_id=str(target.id),
            )
            return saved

    async def respond(
        self,
        actor: Actor,
        request_id: RequestId,
        decision: Decision,
        kind: Optional[RequestKind] = None,
    ) -> CollaborationRequest:
        """Accept or reject a pending request.

        Args:
            actor: Responding user's identity context
            request_id: Request to answer
            decision: Accept or reject
            kind: If given, the request must be of this kind

        Returns:
            The updated request

        Raises:
            NotFoundError: Request missing, of another kind, or not visible
            InvalidStateError: Request is no longer pending
            AuthorizationError: Actor is not the responder
            ConflictError: Team full, or another response won the race
        """
        with logfire.span(
            "request_ledger.respond",
            request_id=str(request_id),
            user_id=str(actor.user_id),
            decision=decision.value,
        ):
            request = await self.get_visible(actor, request_id, kind)
            if not request.is_pending:
                logfire.warn(
                    "Response to non-pending request",
                    request_id=str(request_id),
                    status=request.status.value,
                )
                raise InvalidStateError("Request", str(request_id), request.status.value)

            policy = self.policy_for(request.kind)
            target = await policy.resolve_target(request.target_id)
            if target.responder_id != actor.user_id:
                logfire.warn(
                    "Response by non-recipient rejected",
                    request_id=str(request_id),
                    user_id=str(actor.user_id),
                )
                raise AuthorizationError("Only the recipient can respond to this request")

            if decision is Decision.ACCEPT:
                await policy.check_accept(request, target)

            updated = await self.request_repository.update_status(
                request_id,
                expected=RequestStatus.PENDING,
                new_status=decision.resulting_status,
                at=datetime.now(),
            )
            if updated is None:
                logfire.warn("Lost response race", request_id=str(request_id))
                raise ConflictError("request was already answered or withdrawn")

            logfire.info(
                "Collaboration request answered",
                request_id=str(request_id),
                kind=request.kind.value,
                status=updated.status.value,
            )
            return updated

    async def withdraw(
        self,
        actor: Actor,
        request_id: RequestId,
        kind: Optional[RequestKind] = None,
    ) -> CollaborationRequest:
        """Withdraw (delete) a pending request sent by the actor.

        Returns:
            The request as it was before deletion

        Raises:
            NotFoundError: Request missing or not visible
            InvalidStateError: Request is no longer pending
            AuthorizationError: Actor is not the requester
            ConflictError: The request was answered concurrently
        """
        with logfire.span(
            "request_ledger.withdraw",
            request_id=str(request_id),
            user_id=str(actor.user_id),
        ):
            request = await self.get_visible(actor, request_id, kind)
            if not request.is_pending:
                raise InvalidStateError("Request", str(request_id), request.status.value)
            if request.requester_id != actor.user_id:
                logfire.warn(
                    "Withdrawal by non-requester rejected",
                    request_id=str(request_id),
                    user_id=str(actor.user_id),
                )
                raise AuthorizationError("Only the requester can withdraw this request")

            if not await self.request_repository.delete(
                request_id, expected=RequestStatus.PENDING
            ):
                logfire.warn("Lost withdrawal race", request_id=str(request_id))
                raise ConflictError("request was already answered or withdrawn")

            logfire.info(
                "Collaboration request withdrawn",
                request_id=str(request_id),
                kind=request.kind.value,
            )
            return request

    async def remove_connection(
        self, actor: Actor, request_id: RequestId
    ) -> CollaborationRequest:
        """Delete a connection record.

        Either party may remove an accepted or rejected connection. A pending
        connection can only be removed by its requester, as a withdrawal.

        Returns:
            The record as it was before deletion

        Raises:
            NotFoundError: Record missing, not a connection, or not visible
            AuthorizationError: Actor is not a party of the connection
            ConflictError: The record changed concurrently
        """
        with logfire.span(
            "request_ledger.remove_connection",
            request_id=str(request_id),
            user_id=str(actor.user_id),
        ):
            request = await self.get_visible(actor, request_id, RequestKind.CONNECTION)
            if request.is_pending:
                return await self.withdraw(actor, request_id, RequestKind.CONNECTION)

            if not request.involves(actor.user_id):
                logfire.warn(
                    "Connection removal by non-party rejected",
                    request_id=str(request_id),
                    user_id=str(actor.user_id),
                )
                raise AuthorizationError("Only a party of this connection can remove it")

            if not await self.request_repository.delete(
                request_id, expected=request.status
            ):
                raise ConflictError("connection was already removed")

            logfire.info(
                "Connection removed",
                request_id=str(request_id),
                user_id=str(actor.user_id),
            )
            return request

    async def get_visible(
        self,
        actor: Actor,
        request_id: RequestId,
        kind: Optional[RequestKind] = None,
    ) -> CollaborationRequest:
        """Load a request the actor is allowed to see.

        The parties of a request always see it, whatever tenant it is
        stamped with. Anyone else needs access to that tenant.

        Raises:
            NotFoundError: Missing, of another kind, or outside the actor's tenant
        """
        request = await self.request_repository.find_by_id(request_id)
        if (
            request is None
            or (kind is not None and request.kind is not kind)
            or not (
                request.involves(actor.user_id)
                or self.visibility_service.can_access_tenant(actor, request.tenant_id)
                or await self._answers(actor, request)
            )
        ):
            logfire.warn("Request not found", request_id=str(request_id))
            raise NotFoundError("Request", str(request_id))
        return request

    async def _answers(self, actor: Actor, request: CollaborationRequest) -> bool:
        targets = await self.policy_for(request.kind).responder_target_ids(actor)
        return request.target_id in targets

    async def incoming(
        self, actor: Actor, kind: Optional[RequestKind] = None
    ) -> list[CollaborationRequest]:
        """Pending requests the actor is expected to answer, newest first."""
        with logfire.span("request_ledger.incoming", user_id=str(actor.user_id)):
            return await self._addressed_to(actor, RequestStatus.PENDING, kind)

    async def outgoing(
        self, actor: Actor, kind: Optional[RequestKind] = None
    ) -> list[CollaborationRequest]:
        """Pending requests sent by the actor, newest first."""
        with logfire.span("request_ledger.outgoing", user_id=str(actor.user_id)):
            return await self.request_repository.find_by_requester(
                actor.user_id, kind, RequestStatus.PENDING
            )

    async def active(
        self, actor: Actor, kind: Optional[RequestKind] = None
    ) -> list[CollaborationRequest]:
        """Accepted requests on either side of the actor, newest first."""
        with logfire.span("request_ledger.active", user_id=str(actor.user_id)):
            sent = await self.request_repository.find_by_requester(
                actor.user_id, kind, RequestStatus.ACCEPTED
            )
            received = await self._addressed_to(actor, RequestStatus.ACCEPTED, kind)
            merged = {request.id: request for request in sent + received}
            return _newest_first(list(merged.values()))

    async def project_members(
        self, actor: Actor, project_id: ProjectId
    ) -> list[CollaborationRequest]:
        """Accepted join requests of a visible project.

        Raises:
            NotFoundError: Project missing or outside the actor's tenant
        """
        with logfire.span(
            "request_ledger.project_members", project_id=str(project_id)
        ):
            project = await self.project_repository.find_by_id(project_id)
            if not project or not self.visibility_service.can_access_tenant(
                actor, project.tenant_id
            ):
                raise NotFoundError("Project", str(project_id))
            members = await self.request_repository.find_by_targets(
                [project.id], RequestKind.PROJECT_JOIN, RequestStatus.ACCEPTED
            )
            return sorted(members, key=lambda r: (r.responded_at or r.created_at, r.id))

    async def _addressed_to(
        self,
        actor: Actor,
        status: RequestStatus,
        kind: Optional[RequestKind],
    ) -> list[CollaborationRequest]:
        kinds = [kind] if kind is not None else list(self.policies)
        results: list[CollaborationRequest] = []
        for each in kinds:
            target_ids = await self.policy_for(each).responder_target_ids(actor)
            if target_ids:
                results.extend(
                    await self.request_repository.find_by_targets(
                        target_ids, each, status
                    )
                )
        return _newest_first(results)

    async def _check_outgoing_limit(self, actor: Actor) -> None:
        limit = self.settings.max_pending_outgoing
        if limit is None:
            return
        pending = await self.request_repository.count_pending_by_requester(
            actor.user_id
        )
        if pending >= limit:
            logfire.warn(
                "Pending request limit reached",
                user_id=str(actor.user_id),
                limit=limit,
            )
            raise ConflictError("too many pending requests")

    @staticmethod
    def _conflict_from(
        error: IntegrityError, request: CollaborationRequest
    ) -> ConflictError:
        if SESSION_SLOT_CONSTRAINT in str(error):
            logfire.warn(
                "Slot taken concurrently",
                target_id=str(request.target_id),
                slot=str(request.slot),
            )
            return ConflictError("slot no longer available")
        if CONNECTION_PAIR_CONSTRAINT in str(error):
            logfire.warn(
                "Connection between pair created concurrently",
                requester_id=str(request.requester_id),
                target_id=str(request.target_id),
            )
            return ConflictError("connection already pending or accepted")
        logfire.warn(
            "Duplicate pending request at insert",
            kind=request.kind.value,
            requester_id=str(request.requester_id),
            target_id=str(request.target_id),
        )
        return ConflictError("request already pending")


def _newest_first(requests: list[CollaborationRequest]) -> list[CollaborationRequest]:
    return sorted(requests, key=lambda r: (r.created_at, r.id), reverse=True)

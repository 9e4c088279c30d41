"""Per-kind rules of the collaboration request lifecycle.

The ledger runs the same lifecycle for every kind. What differs between
connections, project joins and mentorship bookings is captured by one
``RequestPolicy`` per kind: how a target is resolved, who may create a
request, the extra checks before insert and before acceptance, and who
answers the request.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union
from uuid import UUID

import logfire

from intralink.domain.error import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from intralink.domain.model import (
    CollaborationRequest,
    MentorshipPayload,
    Project,
    User,
)
from intralink.domain.model.request import RequestPayload
from intralink.domain.repository import (
    CollaborationRequestRepository,
    MentorRepository,
    ProjectRepository,
    UserRepository,
)
from intralink.domain.value import (
    Actor,
    ProjectId,
    RequestKind,
    RequestStatus,
    TenantId,
    UserId,
    UserRole,
)

from .availability_service import AvailabilityService
from .visibility_service import VisibilityService


@dataclass(frozen=True)
class RequestTarget:
    """Resolved target of a request and the user who answers it."""

    id: UUID
    tenant_id: Optional[TenantId]
    responder_id: UserId
    subject: Union[User, Project]


class RequestPolicy(ABC):
    """Kind-specific hooks used by the request ledger."""

    kind: RequestKind

    @abstractmethod
    async def resolve_target(self, target_id: UUID) -> RequestTarget:
        """Load the target.

        Raises:
            NotFoundError: If the target does not exist
        """
        pass

    @abstractmethod
    async def authorize_create(self, actor: Actor, target: RequestTarget) -> None:
        """Check visibility and role rules for creating a request.

        Raises:
            AuthorizationError: If the actor may not address this target
        """
        pass

    async def check_create(
        self, actor: Actor, target: RequestTarget, payload: RequestPayload
    ) -> RequestPayload:
        """Kind-specific preconditions; may return an enriched payload.

        Raises:
            ConflictError: If the target is in a state that refuses requests
        """
        return payload

    async def check_accept(
        self, request: CollaborationRequest, target: RequestTarget
    ) -> None:
        """Preconditions for accepting a pending request; may reserve capacity."""
        pass

    async def responder_target_ids(self, actor: Actor) -> list[UUID]:
        """Targets whose requests the actor answers."""
        return [actor.user_id]


class ConnectionPolicy(RequestPolicy):
    """Peer connections between two visible users."""

    kind = RequestKind.CONNECTION

    def __init__(
        self,
        user_repository: UserRepository,
        request_repository: CollaborationRequestRepository,
        visibility_service: VisibilityService,
    ) -> None:
        self.user_repository = user_repository
        self.request_repository = request_repository
        self.visibility_service = visibility_service

    async def resolve_target(self, target_id: UUID) -> RequestTarget:
        user = await self.user_repository.find_by_id(UserId(target_id))
        if not user:
            raise NotFoundError("User", str(target_id))
        return RequestTarget(
            id=user.id, tenant_id=user.tenant_id, responder_id=user.id, subject=user
        )

    async def authorize_create(self, actor: Actor, target: RequestTarget) -> None:
        self.visibility_service.ensure_can_interact(actor, target.subject)

    async def check_create(
        self, actor: Actor, target: RequestTarget, payload: RequestPayload
    ) -> RequestPayload:
        existing = await self.request_repository.find_between(
            RequestKind.CONNECTION, actor.user_id, target.id
        )
        for request in existing:
            if request.status is RequestStatus.ACCEPTED:
                logfire.warn(
                    "Connection already exists",
                    user_id=str(actor.user_id),
                    target_id=str(target.id),
                )
                raise ConflictError("already connected")
            # Same direction is caught by the ledger's duplicate check
            if request.is_pending and request.requester_id == target.id:
                logfire.warn(
                    "Reverse connection request pending",
                    user_id=str(actor.user_id),
                    target_id=str(target.id),
                )
                raise ConflictError("request already pending")
        return payload


class ProjectJoinPolicy(RequestPolicy):
    """Learners asking to join an open project; the lead answers."""

    kind = RequestKind.PROJECT_JOIN

    def __init__(
        self,
        project_repository: ProjectRepository,
        visibility_service: VisibilityService,
    ) -> None:
        self.project_repository = project_repository
        self.visibility_service = visibility_service

    async def resolve_target(self, target_id: UUID) -> RequestTarget:
        project = await self.project_repository.find_by_id(ProjectId(target_id))
        if not project:
            raise NotFoundError("Project", str(target_id))
        return RequestTarget(
            id=project.id,
            tenant_id=project.tenant_id,
            responder_id=project.lead_id,
            subject=project,
        )

    async def authorize_create(self, actor: Actor, target: RequestTarget) -> None:
        if actor.role is not UserRole.LEARNER:
            logfire.warn(
                "Non-learner join request rejected",
                user_id=str(actor.user_id),
                role=actor.role.value,
            )
            raise AuthorizationError("Only learners can request to join projects")
        if not self.visibility_service.can_access_tenant(actor, target.tenant_id):
            logfire.warn(
                "Cross-tenant join request rejected",
                user_id=str(actor.user_id),
                project_id=str(target.id),
            )
            raise AuthorizationError("This project is not part of your college")
        if target.responder_id == actor.user_id:
            raise AuthorizationError("You already lead this project")

    async def check_create(
        self, actor: Actor, target: RequestTarget, payload: RequestPayload
    ) -> RequestPayload:
        project = target.subject
        if not project.is_open:
            logfire.warn(
                "Join request on closed project",
                project_id=str(project.id),
                status=project.status.value,
            )
            raise ConflictError("project is not accepting join requests")
        return payload

    async def check_accept(
        self, request: CollaborationRequest, target: RequestTarget
    ) -> None:
        # Released by the unit-of-work rollback if the status update then loses
        project = target.subject
        if not await self.project_repository.claim_seat(project.id):
            logfire.warn(
                "Project team is full",
                project_id=str(project.id),
                max_team_size=project.max_team_size,
            )
            raise ConflictError("project team is full")

    async def responder_target_ids(self, actor: Actor) -> list[UUID]:
        projects = await self.project_repository.find_by_lead(actor.user_id)
        return [project.id for project in projects]


class MentorshipPolicy(RequestPolicy):
    """Learners booking a weekly slot of an active mentor."""

    kind = RequestKind.MENTORSHIP_SESSION

    def __init__(
        self,
        user_repository: UserRepository,
        mentor_repository: MentorRepository,
        visibility_service: VisibilityService,
        availability_service: AvailabilityService,
    ) -> None:
        self.user_repository = user_repository
        self.mentor_repository = mentor_repository
        self.visibility_service = visibility_service
        self.availability_service = availability_service

    async def resolve_target(self, target_id: UUID) -> RequestTarget:
        user = await self.user_repository.find_by_id(UserId(target_id))
        if not user:
            raise NotFoundError("Mentor", str(target_id))
        return RequestTarget(
            id=user.id, tenant_id=user.tenant_id, responder_id=user.id, subject=user
        )

    async def authorize_create(self, actor: Actor, target: RequestTarget) -> None:
        if actor.role is not UserRole.LEARNER:
            logfire.warn(
                "Non-learner booking rejected",
                user_id=str(actor.user_id),
                role=actor.role.value,
            )
            raise AuthorizationError("Only learners can book mentorship sessions")
        mentor = target.subject
        profile = await self.mentor_repository.find_profile(mentor.id)
        if mentor.role is not UserRole.MENTOR or not profile or not profile.is_active:
            logfire.warn("Booking with non-mentor rejected", target_id=str(mentor.id))
            raise AuthorizationError("This user is not an active mentor")
        self.visibility_service.ensure_can_interact(actor, mentor)

    async def check_create(
        self, actor: Actor, target: RequestTarget, payload: RequestPayload
    ) -> RequestPayload:
        if not isinstance(payload, MentorshipPayload):
            raise ValidationError("A mentorship booking needs a slot")
        if not await self.availability_service.is_bookable(
            UserId(target.id), payload.day_of_week, payload.time_label
        ):
            logfire.warn(
                "Slot not bookable",
                mentor_id=str(target.id),
                slot=str(payload.slot),
            )
            raise ConflictError("slot no longer available")
        scheduled_for = self.availability_service.next_occurrence(
            payload.day_of_week, payload.time_label, datetime.now()
        )
        return payload.model_copy(update={"scheduled_for": scheduled_for})

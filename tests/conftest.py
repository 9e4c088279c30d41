"""Test configuration and fixtures."""

from datetime import datetime, timedelta
from uuid import uuid4

import logfire

from intralink.domain.model import (
    AvailabilitySlot,
    CollaborationRequest,
    ConnectionPayload,
    MentorProfile,
    Project,
    User,
)
from intralink.domain.value import (
    ProjectId,
    ProjectStatus,
    RequestId,
    RequestKind,
    RequestStatus,
    TenantId,
    UserId,
    UserRole,
)

# Keep spans local during tests
logfire.configure(send_to_logfire=False, console=False)

COLLEGE_A = TenantId(uuid4())
COLLEGE_B = TenantId(uuid4())


def make_user(
    name: str,
    role: UserRole = UserRole.LEARNER,
    tenant_id: TenantId | None = COLLEGE_A,
) -> User:
    """Helper to build a user with a predictable email."""
    if role is UserRole.ADMINISTRATOR and tenant_id is COLLEGE_A:
        tenant_id = None
    return User(
        id=UserId(uuid4()),
        role=role,
        tenant_id=tenant_id,
        display_name=name,
        email=f"{name.lower().replace(' ', '.')}@college.test",
    )


def make_project(
    lead: User,
    title: str = "Solar Car",
    status: ProjectStatus = ProjectStatus.OPEN,
    max_team_size: int | None = None,
) -> Project:
    """Helper to build a project led by ``lead`` in the lead's tenant."""
    return Project(
        id=ProjectId(uuid4()),
        tenant_id=lead.tenant_id,
        lead_id=lead.id,
        title=title,
        status=status,
        max_team_size=max_team_size,
    )


def make_mentor_profile(mentor: User, expertise: list[str] | None = None) -> MentorProfile:
    return MentorProfile(user_id=mentor.id, expertise=expertise or [])


def make_availability(mentor: User, day_of_week: int, *labels: str) -> AvailabilitySlot:
    return AvailabilitySlot(
        mentor_id=mentor.id, day_of_week=day_of_week, time_labels=list(labels)
    )


def make_connection(
    requester: User,
    target: User,
    status: RequestStatus = RequestStatus.ACCEPTED,
    age: timedelta = timedelta(days=1),
) -> CollaborationRequest:
    """Helper to build a connection record directly, bypassing the ledger."""
    created = datetime.now() - age
    return CollaborationRequest(
        id=RequestId(uuid4()),
        kind=RequestKind.CONNECTION,
        requester_id=requester.id,
        target_id=target.id,
        tenant_id=requester.tenant_id,
        status=status,
        payload=ConnectionPayload(),
        created_at=created,
        updated_at=created,
        responded_at=None if status is RequestStatus.PENDING else created,
    )

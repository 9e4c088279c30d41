"""Repository interfaces for the IntraLink domain.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the persistence layer.
"""

from intralink.domain.repository.mentor import MentorRepository
from intralink.domain.repository.project import ProjectRepository
from intralink.domain.repository.request import (
    CONNECTION_PAIR_CONSTRAINT,
    PENDING_REQUEST_CONSTRAINT,
    SESSION_SLOT_CONSTRAINT,
    CollaborationRequestRepository,
)
from intralink.domain.repository.user import UserRepository

__all__ = [
    "UserRepository",
    "ProjectRepository",
    "MentorRepository",
    "CollaborationRequestRepository",
    "CONNECTION_PAIR_CONSTRAINT",
    "PENDING_REQUEST_CONSTRAINT",
    "SESSION_SLOT_CONSTRAINT",
]

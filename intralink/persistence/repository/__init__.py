"""PostgreSQL repository implementations."""

from intralink.persistence.repository.mentor import PostgresMentorRepository
from intralink.persistence.repository.project import PostgresProjectRepository
from intralink.persistence.repository.request import (
    PostgresCollaborationRequestRepository,
)
from intralink.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresUserRepository",
    "PostgresProjectRepository",
    "PostgresMentorRepository",
    "PostgresCollaborationRequestRepository",
]

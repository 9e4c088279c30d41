"""In-memory repository implementations for testing."""

from .mentor import InMemoryMentorRepository
from .project import InMemoryProjectRepository
from .request import InMemoryCollaborationRequestRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryCollaborationRequestRepository",
    "InMemoryMentorRepository",
    "InMemoryProjectRepository",
    "InMemoryUserRepository",
]

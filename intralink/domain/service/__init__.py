"""Domain services."""

from .availability_service import AvailabilityService
from .base import Service
from .jwt_service import JWTService
from .request_ledger_service import RequestLedgerService, parse_payload
from .request_policy import (
    ConnectionPolicy,
    MentorshipPolicy,
    ProjectJoinPolicy,
    RequestPolicy,
    RequestTarget,
)
from .suggestion_service import (
    MentorFilters,
    MentorListing,
    MentorSort,
    Suggestion,
    SuggestionService,
)
from .user_service import UserService
from .visibility_service import VisibilityService

__all__ = [
    "AvailabilityService",
    "ConnectionPolicy",
    "JWTService",
    "MentorFilters",
    "MentorListing",
    "MentorSort",
    "MentorshipPolicy",
    "ProjectJoinPolicy",
    "RequestLedgerService",
    "RequestPolicy",
    "RequestTarget",
    "Service",
    "Suggestion",
    "SuggestionService",
    "UserService",
    "VisibilityService",
    "parse_payload",
]

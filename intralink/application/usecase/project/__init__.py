"""Project join use cases."""

from .list_project_members import (
    ListProjectMembersRequest,
    ListProjectMembersResponse,
    ListProjectMembersUseCase,
    ProjectMember,
)
from .submit_join_request import SubmitJoinRequest, SubmitJoinRequestUseCase

__all__ = [
    "ListProjectMembersRequest",
    "ListProjectMembersResponse",
    "ListProjectMembersUseCase",
    "ProjectMember",
    "SubmitJoinRequest",
    "SubmitJoinRequestUseCase",
]

"""List mentors use case."""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import UserSummary
from intralink.domain.service import (
    MentorFilters,
    MentorSort,
    SuggestionService,
    UserService,
)
from intralink.domain.value import TenantId


class MentorItem(BaseModel):
    """Mentor listing item."""

    user: UserSummary
    expertise: list[str]
    bio: Optional[str]
    average_rating: Optional[float]
    rating_count: int
    total_sessions: int


class ListMentorsRequest(BaseModel):
    """List mentors request."""

    search: Optional[str] = None
    sort_by: MentorSort = MentorSort.NAME
    tenant_id: Optional[str] = None  # Honoured for administrators only
    user_id: str  # User ID from authenticated user


class ListMentorsResponse(BaseModel):
    """List mentors response."""

    mentors: list[MentorItem]


class ListMentorsUseCase(ActorUseCase):
    """Use case for discovering mentors."""

    def __init__(
        self, suggestion_service: SuggestionService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.suggestion_service = suggestion_service

    async def execute(self, request: ListMentorsRequest) -> ListMentorsResponse:
        actor = await self.resolve_actor(request.user_id)
        filters = MentorFilters(
            search=request.search,
            sort_by=request.sort_by,
            tenant_id=TenantId(UUID(request.tenant_id)) if request.tenant_id else None,
        )
        listings = await self.suggestion_service.list_mentors(actor, filters)
        return ListMentorsResponse(
            mentors=[
                MentorItem(
                    user=UserSummary.from_domain(m.user),
                    expertise=m.profile.expertise,
                    bio=m.profile.bio,
                    average_rating=(
                        round(m.average_rating, 2)
                        if m.average_rating is not None
                        else None
                    ),
                    rating_count=m.rating_count,
                    total_sessions=m.total_sessions,
                )
                for m in listings
            ]
        )

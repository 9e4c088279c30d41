"""List suggested connections use case."""

from typing import Optional

from pydantic import BaseModel, Field

from intralink.application.usecase.base import ActorUseCase
from intralink.application.usecase.view import UserSummary
from intralink.domain.service import SuggestionService, UserService


class SuggestionItem(BaseModel):
    """A suggested connection."""

    user: UserSummary
    mutual_connections: int


class ListSuggestionsRequest(BaseModel):
    """List suggestions request."""

    limit: Optional[int] = Field(default=None, ge=1, le=100)
    user_id: str  # User ID from authenticated user


class ListSuggestionsResponse(BaseModel):
    """List suggestions response, best match first."""

    suggestions: list[SuggestionItem]


class ListSuggestionsUseCase(ActorUseCase):
    """Use case for ranking users the caller could connect with."""

    def __init__(
        self, suggestion_service: SuggestionService, user_service: UserService
    ) -> None:
        super().__init__(user_service)
        self.suggestion_service = suggestion_service

    async def execute(self, request: ListSuggestionsRequest) -> ListSuggestionsResponse:
        actor = await self.resolve_actor(request.user_id)
        suggestions = await self.suggestion_service.suggest(actor, request.limit)
        return ListSuggestionsResponse(
            suggestions=[
                SuggestionItem(
                    user=UserSummary.from_domain(s.user),
                    mutual_connections=s.mutual_connections,
                )
                for s in suggestions
            ]
        )

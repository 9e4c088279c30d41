"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from intralink.application.usecase.view import RequestView, counterpart_id
from intralink.domain.model import CollaborationRequest
from intralink.domain.service import UserService
from intralink.domain.value import Actor, UserId


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services."""

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass


class ActorUseCase(BaseUseCase):
    """Use case performed on behalf of an authenticated user."""

    def __init__(self, user_service: UserService) -> None:
        self.user_service = user_service

    async def resolve_actor(self, user_id: str) -> Actor:
        """Identity context for the authenticated user ID."""
        return await self.user_service.get_actor(UserId(UUID(user_id)))

    async def to_views(
        self, requests: list[CollaborationRequest], actor: Actor
    ) -> list[RequestView]:
        """Views of the requests with the counterpart user attached (batch)."""
        ids = [
            uid
            for uid in (counterpart_id(r, actor.user_id) for r in requests)
            if uid is not None
        ]
        users = await self.user_service.get_many(ids)
        return [
            RequestView.from_domain(
                request, users.get(counterpart_id(request, actor.user_id))
            )
            for request in requests
        ]

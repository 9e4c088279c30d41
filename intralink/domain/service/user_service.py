"""User domain service."""

import logfire

from intralink.domain.error import NotFoundError
from intralink.domain.model import User
from intralink.domain.repository import UserRepository
from intralink.domain.value import Actor, UserId

from .base import Service


class UserService(Service):
    """Domain service for user lookups and identity resolution."""

    def __init__(self, user_repository: UserRepository) -> None:
        """Initialize user service.

        Args:
            user_repository: User repository
        """
        self.user_repository = user_repository

    async def get_by_id(self, user_id: UserId) -> User:
        """Get user by ID.

        Args:
            user_id: User ID

        Returns:
            User entity

        Raises:
            NotFoundError: If user not found
        """
        with logfire.span("user_service.get_by_id", user_id=str(user_id)):
            user = await self.user_repository.find_by_id(user_id)
            if not user:
                logfire.warn("User not found", user_id=str(user_id))
                raise NotFoundError("User", str(user_id))
            return user

    async def get_actor(self, user_id: UserId) -> Actor:
        """Resolve the identity context of an authenticated user.

        Role and tenant come from the user store, never from the token.

        Args:
            user_id: Authenticated user ID

        Returns:
            Actor for the user

        Raises:
            NotFoundError: If the user no longer exists
        """
        user = await self.get_by_id(user_id)
        return user.as_actor()

    async def get_many(self, user_ids: list[UserId]) -> dict[UserId, User]:
        """Batch load users keyed by ID. Unknown IDs are skipped."""
        if not user_ids:
            return {}
        users = await self.user_repository.find_by_ids(list(dict.fromkeys(user_ids)))
        return {user.id: user for user in users}

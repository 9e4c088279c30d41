"""User repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from intralink.domain.model.user import User
from intralink.domain.value import TenantId, UserId


class UserRepository(ABC):
    """Repository for User entity.

    Users are owned by the identity/profile features; the collaboration
    core only reads them. ``save`` exists for seeding and tests.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        """Find several users at once (batch query).

        Args:
            user_ids: IDs to look up; unknown IDs are skipped

        Returns:
            Users found, in no particular order
        """
        pass

    @abstractmethod
    async def find_by_tenant(self, tenant_id: TenantId) -> list[User]:
        """Find all users of a tenant.

        Args:
            tenant_id: The tenant (college) ID

        Returns:
            Users belonging to the tenant
        """
        pass

    @abstractmethod
    async def find_all(self) -> list[User]:
        """Find all users across tenants (administrator view).

        Returns:
            All users
        """
        pass

    @abstractmethod
    async def save(self, user: User) -> User:
        """Save or update a user.

        Args:
            user: The user to save

        Returns:
            The saved user
        """
        pass

"""In-memory user repository for testing."""

from typing import Optional, Sequence

from intralink.domain.model import User
from intralink.domain.repository import UserRepository
from intralink.domain.value import TenantId, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        return self._users.get(user_id)

    async def find_by_ids(self, user_ids: Sequence[UserId]) -> list[User]:
        return [self._users[uid] for uid in dict.fromkeys(user_ids) if uid in self._users]

    async def find_by_tenant(self, tenant_id: TenantId) -> list[User]:
        return [u for u in self._users.values() if u.tenant_id == tenant_id]

    async def find_all(self) -> list[User]:
        return list(self._users.values())

    async def save(self, user: User) -> User:
        self._users[user.id] = user
        return user

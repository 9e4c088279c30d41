"""Visibility domain service.

Tenant isolation: every user except an administrator belongs to exactly one
tenant and may only see and interact with users and projects of that
tenant. Administrators see across tenants, and anyone may address an
administrator. Otherwise the same rules apply to them: nobody interacts
with themselves, and role restrictions of each workflow still hold.
"""

from typing import Optional

import logfire

from intralink.domain.error import AuthorizationError
from intralink.domain.model import MentorProfile, User
from intralink.domain.repository import MentorRepository, UserRepository
from intralink.domain.value import Actor, TenantId, UserRole

from .base import Service


class VisibilityService(Service):
    """Decides who may see and interact with whom."""

    def __init__(
        self, user_repository: UserRepository, mentor_repository: MentorRepository
    ) -> None:
        """Initialize visibility service.

        Args:
            user_repository: User repository
            mentor_repository: Mentor repository
        """
        self.user_repository = user_repository
        self.mentor_repository = mentor_repository

    def can_access_tenant(self, actor: Actor, tenant_id: Optional[TenantId]) -> bool:
        """Whether the actor may see resources of the given tenant."""
        if actor.is_administrator:
            return True
        return actor.tenant_id is not None and actor.tenant_id == tenant_id

    def can_interact(self, actor: Actor, target: User) -> bool:
        """Whether the actor may address a request to the target user.

        Tenants must match unless either side is an administrator.
        """
        if target.id == actor.user_id:
            return False
        if target.role is UserRole.ADMINISTRATOR:
            return True
        return self.can_access_tenant(actor, target.tenant_id)

    def ensure_can_interact(self, actor: Actor, target: User) -> None:
        """Raise AuthorizationError unless ``can_interact`` holds.

        Raises:
            AuthorizationError: If the target is the actor or outside their tenant
        """
        if target.id == actor.user_id:
            logfire.warn("Self interaction rejected", user_id=str(actor.user_id))
            raise AuthorizationError("You cannot send a request to yourself")
        if not self.can_interact(actor, target):
            logfire.warn(
                "Cross-tenant interaction rejected",
                user_id=str(actor.user_id),
                target_id=str(target.id),
            )
            raise AuthorizationError("This user is not part of your college")

    async def visible_candidates(self, actor: Actor) -> list[User]:
        """All users the actor can see, excluding the actor.

        Args:
            actor: Identity context

        Returns:
            Same-tenant users, or every user for administrators
        """
        with logfire.span(
            "visibility_service.visible_candidates", user_id=str(actor.user_id)
        ):
            if actor.is_administrator:
                users = await self.user_repository.find_all()
            elif actor.tenant_id is None:
                users = []
            else:
                users = await self.user_repository.find_by_tenant(actor.tenant_id)
            return [user for user in users if self.can_interact(actor, user)]

    async def visible_mentors(self, actor: Actor) -> list[tuple[MentorProfile, User]]:
        """Active mentor profiles whose user the actor can interact with.

        Args:
            actor: Identity context

        Returns:
            (profile, user) pairs in no particular order
        """
        with logfire.span(
            "visibility_service.visible_mentors", user_id=str(actor.user_id)
        ):
            profiles = await self.mentor_repository.find_active_profiles()
            if not profiles:
                return []
            users = await self.user_repository.find_by_ids(
                [profile.user_id for profile in profiles]
            )
            users_by_id = {user.id: user for user in users}
            visible = []
            for profile in profiles:
                user = users_by_id.get(profile.user_id)
                if user is None or user.role is not UserRole.MENTOR:
                    continue
                if self.can_interact(actor, user):
                    visible.append((profile, user))
            return visible

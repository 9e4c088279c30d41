"""User entity.

Users are owned by the identity/profile features. The collaboration core
only reads them; role and tenant are the inputs that drive visibility.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, model_validator

from intralink.domain.model.common import DomainModel
from intralink.domain.value import Actor, TenantId, UserId, UserRole


class User(DomainModel):
    """Platform user (learner, instructor, mentor or administrator).

    Every non-administrator belongs to exactly one tenant (college).
    Administrators may have no tenant at all.
    """

    id: UserId
    role: UserRole
    tenant_id: Optional[TenantId] = None
    display_name: Optional[str] = Field(default=None, max_length=255)
    email: str = Field(min_length=3, max_length=255)
    avatar_url: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    updated_at: datetime = Field(default_factory=datetime.now)

    @model_validator(mode="after")
    def validate_tenant(self) -> "User":
        """Non-administrators must belong to a tenant."""
        if self.role is not UserRole.ADMINISTRATOR and self.tenant_id is None:
            raise ValueError(f"{self.role.value} users must belong to a tenant")
        return self

    @property
    def sort_name(self) -> str:
        """Name used for alphabetical ordering."""
        return (self.display_name or self.email).casefold()

    def as_actor(self) -> Actor:
        """Identity context for operations performed by this user."""
        return Actor(user_id=self.id, role=self.role, tenant_id=self.tenant_id)

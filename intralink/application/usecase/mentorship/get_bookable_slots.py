"""Get bookable slots use case."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel

from intralink.application.usecase.base import ActorUseCase
from intralink.domain.error import NotFoundError
from intralink.domain.service import (
    AvailabilityService,
    UserService,
    VisibilityService,
)
from intralink.domain.value import UserId, UserRole


class SlotItem(BaseModel):
    """A bookable weekly slot."""

    day_of_week: int
    day_name: str
    time_label: str
    next_occurrence: datetime


class GetBookableSlotsRequest(BaseModel):
    """Get bookable slots request."""

    mentor_id: str
    user_id: str  # User ID from authenticated user


class GetBookableSlotsResponse(BaseModel):
    """Bookable slots, in declaration order."""

    mentor_id: str
    slots: list[SlotItem]


class GetBookableSlotsUseCase(ActorUseCase):
    """Use case for showing which slots of a mentor are still free."""

    def __init__(
        self,
        availability_service: AvailabilityService,
        visibility_service: VisibilityService,
        user_service: UserService,
    ) -> None:
        super().__init__(user_service)
        self.availability_service = availability_service
        self.visibility_service = visibility_service

    async def execute(self, request: GetBookableSlotsRequest) -> GetBookableSlotsResponse:
        actor = await self.resolve_actor(request.user_id)
        mentor = await self.user_service.get_by_id(UserId(UUID(request.mentor_id)))
        if mentor.role is not UserRole.MENTOR or not (
            self.visibility_service.can_access_tenant(actor, mentor.tenant_id)
        ):
            raise NotFoundError("Mentor", request.mentor_id)

        now = datetime.now()
        slots = await self.availability_service.ordered_bookable_slots(mentor.id)
        return GetBookableSlotsResponse(
            mentor_id=request.mentor_id,
            slots=[
                SlotItem(
                    day_of_week=slot.day_of_week,
                    day_name=slot.day_name,
                    time_label=slot.time_label,
                    next_occurrence=self.availability_service.next_occurrence(
                        slot.day_of_week, slot.time_label, now
                    ),
                )
                for slot in slots
            ],
        )

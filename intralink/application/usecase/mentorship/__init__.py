"""Mentorship use cases."""

from .book_session import BookSessionRequest, BookSessionUseCase
from .get_bookable_slots import (
    GetBookableSlotsRequest,
    GetBookableSlotsResponse,
    GetBookableSlotsUseCase,
    SlotItem,
)
from .list_mentors import (
    ListMentorsRequest,
    ListMentorsResponse,
    ListMentorsUseCase,
    MentorItem,
)

__all__ = [
    "BookSessionRequest",
    "BookSessionUseCase",
    "GetBookableSlotsRequest",
    "GetBookableSlotsResponse",
    "GetBookableSlotsUseCase",
    "ListMentorsRequest",
    "ListMentorsResponse",
    "ListMentorsUseCase",
    "MentorItem",
    "SlotItem",
]

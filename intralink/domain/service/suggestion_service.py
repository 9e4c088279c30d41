"""Suggestion domain service: connection suggestions and mentor discovery."""

from collections import defaultdict
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import logfire

from intralink.config import CollaborationSettings
from intralink.domain.model import MentorProfile, User
from intralink.domain.repository import CollaborationRequestRepository, MentorRepository
from intralink.domain.value import (
    Actor,
    RequestKind,
    RequestStatus,
    TenantId,
    UserId,
)

from .base import Service
from .visibility_service import VisibilityService


@dataclass
class Suggestion:
    """A user the actor could connect with."""

    user: User
    mutual_connections: int


class MentorSort(str, Enum):
    NAME = "name"
    RATING = "rating"
    SESSIONS = "sessions"


@dataclass
class MentorFilters:
    """Filters for mentor discovery.

    ``tenant_id`` narrows the listing for administrators; other actors are
    always limited to their own tenant.
    """

    search: Optional[str] = None
    sort_by: MentorSort = MentorSort.NAME
    tenant_id: Optional[TenantId] = None


@dataclass
class MentorListing:
    """An active mentor with their aggregate rating and session count."""

    user: User
    profile: MentorProfile
    average_rating: Optional[float]
    rating_count: int
    total_sessions: int = 0


class SuggestionService(Service):
    """Ranks connection candidates and lists mentors.

    Results are recomputed on every call and depend only on the current
    state of the store, so equal inputs always give equal orderings.
    """

    def __init__(
        self,
        request_repository: CollaborationRequestRepository,
        mentor_repository: MentorRepository,
        visibility_service: VisibilityService,
        settings: CollaborationSettings,
    ) -> None:
        """Initialize suggestion service.

        Args:
            request_repository: Collaboration request repository
            mentor_repository: Mentor repository
            visibility_service: Visibility rules
            settings: Collaboration settings (default suggestion limit)
        """
        self.request_repository = request_repository
        self.mentor_repository = mentor_repository
        self.visibility_service = visibility_service
        self.settings = settings

    async def connections_of(self, user_ids: list[UserId]) -> dict[UserId, set[UserId]]:
        """Accepted connection counterparts for each user (batch)."""
        connections: dict[UserId, set[UserId]] = defaultdict(set)
        if not user_ids:
            return connections
        for request in await self.request_repository.find_connections_of(user_ids):
            requester = request.requester_id
            target = UserId(request.target_id)
            connections[requester].add(target)
            connections[target].add(requester)
        return connections

    async def suggest(
        self, actor: Actor, limit: Optional[int] = None
    ) -> list[Suggestion]:
        """Rank users the actor could connect with.

        Candidates are visible users who are neither connected to the actor
        nor part of a pending connection request with them in either
        direction. Ordered by mutual connections (desc), then display name,
        then id.

        Args:
            actor: Identity context
            limit: Maximum number of suggestions (defaults to settings)

        Returns:
            Ranked suggestions
        """
        with logfire.span("suggestion_service.suggest", user_id=str(actor.user_id)):
            limit = limit if limit is not None else self.settings.suggestion_limit
            candidates = await self.visibility_service.visible_candidates(actor)
            if not candidates:
                return []

            sent = await self.request_repository.find_by_requester(
                actor.user_id, RequestKind.CONNECTION, RequestStatus.PENDING
            )
            received = await self.request_repository.find_by_targets(
                [actor.user_id], RequestKind.CONNECTION, RequestStatus.PENDING
            )
            pending_with = {UserId(r.target_id) for r in sent} | {
                r.requester_id for r in received
            }

            connections = await self.connections_of(
                [actor.user_id] + [candidate.id for candidate in candidates]
            )
            mine = connections.get(actor.user_id, set())

            suggestions = [
                Suggestion(
                    user=candidate,
                    mutual_connections=len(mine & connections.get(candidate.id, set())),
                )
                for candidate in candidates
                if candidate.id not in mine and candidate.id not in pending_with
            ]
            suggestions.sort(
                key=lambda s: (-s.mutual_connections, s.user.sort_name, str(s.user.id))
            )
            logfire.info(
                "Suggestions computed",
                user_id=str(actor.user_id),
                candidates=len(candidates),
                suggestions=len(suggestions),
            )
            return suggestions[:limit]

    async def list_mentors(
        self, actor: Actor, filters: Optional[MentorFilters] = None
    ) -> list[MentorListing]:
        """List active mentors visible to the actor.

        Search is a case-insensitive substring match over display name,
        email and expertise tags. Sorting by rating puts unrated mentors
        last; sorting by sessions puts the busiest mentors first. Ties are
        broken by name.

        Args:
            actor: Identity context
            filters: Search, sort and (administrators only) tenant filter

        Returns:
            Mentor listings
        """
        filters = filters or MentorFilters()
        with logfire.span(
            "suggestion_service.list_mentors",
            user_id=str(actor.user_id),
            sort_by=filters.sort_by.value,
        ):
            mentors = await self.visibility_service.visible_mentors(actor)
            if actor.is_administrator and filters.tenant_id is not None:
                mentors = [
                    (profile, user)
                    for profile, user in mentors
                    if user.tenant_id == filters.tenant_id
                ]
            if filters.search and filters.search.strip():
                needle = filters.search.strip().casefold()
                mentors = [
                    (profile, user)
                    for profile, user in mentors
                    if _matches(needle, profile, user)
                ]

            ratings: dict[UserId, list[int]] = defaultdict(list)
            sessions: dict[UserId, int] = {}
            if mentors:
                mentor_ids = [user.id for _, user in mentors]
                feedback = await self.mentor_repository.find_feedback_for_mentors(
                    mentor_ids
                )
                for entry in feedback:
                    ratings[entry.mentor_id].append(entry.rating)
                sessions = await self.request_repository.count_sessions_by_mentors(
                    mentor_ids
                )

            listings = []
            for profile, user in mentors:
                scores = ratings.get(user.id, [])
                listings.append(
                    MentorListing(
                        user=user,
                        profile=profile,
                        average_rating=sum(scores) / len(scores) if scores else None,
                        rating_count=len(scores),
                        total_sessions=sessions.get(user.id, 0),
                    )
                )

            if filters.sort_by is MentorSort.RATING:
                listings.sort(
                    key=lambda m: (
                        m.average_rating is None,
                        -(m.average_rating or 0.0),
                        m.user.sort_name,
                        str(m.user.id),
                    )
                )
            elif filters.sort_by is MentorSort.SESSIONS:
                listings.sort(
                    key=lambda m: (-m.total_sessions, m.user.sort_name, str(m.user.id))
                )
            else:
                listings.sort(key=lambda m: (m.user.sort_name, str(m.user.id)))
            return listings


def _matches(needle: str, profile: MentorProfile, user: User) -> bool:
    haystack = [user.display_name or "", user.email, *profile.expertise]
    return any(needle in value.casefold() for value in haystack)

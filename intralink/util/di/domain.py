"""Domain layer DI providers."""

from dishka import Scope, provide

from intralink.config import AuthSettings, CollaborationSettings
from intralink.domain.repository import (
    CollaborationRequestRepository,
    MentorRepository,
    ProjectRepository,
    UserRepository,
)
from intralink.domain.service import (
    AvailabilityService,
    ConnectionPolicy,
    JWTService,
    MentorshipPolicy,
    ProjectJoinPolicy,
    RequestLedgerService,
    SuggestionService,
    UserService,
    VisibilityService,
)
from intralink.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_user_service(self, user_repository: UserRepository) -> UserService:
        """Provide user domain service."""
        return UserService(user_repository=user_repository)

    @provide
    def get_visibility_service(
        self, user_repository: UserRepository, mentor_repository: MentorRepository
    ) -> VisibilityService:
        """Provide visibility domain service."""
        return VisibilityService(
            user_repository=user_repository, mentor_repository=mentor_repository
        )

    @provide
    def get_availability_service(
        self,
        mentor_repository: MentorRepository,
        request_repository: CollaborationRequestRepository,
    ) -> AvailabilityService:
        """Provide availability domain service."""
        return AvailabilityService(
            mentor_repository=mentor_repository, request_repository=request_repository
        )

    @provide
    def get_connection_policy(
        self,
        user_repository: UserRepository,
        request_repository: CollaborationRequestRepository,
        visibility_service: VisibilityService,
    ) -> ConnectionPolicy:
        """Provide connection request rules."""
        return ConnectionPolicy(
            user_repository=user_repository,
            request_repository=request_repository,
            visibility_service=visibility_service,
        )

    @provide
    def get_project_join_policy(
        self,
        project_repository: ProjectRepository,
        visibility_service: VisibilityService,
    ) -> ProjectJoinPolicy:
        """Provide project join request rules."""
        return ProjectJoinPolicy(
            project_repository=project_repository,
            visibility_service=visibility_service,
        )

    @provide
    def get_mentorship_policy(
        self,
        user_repository: UserRepository,
        mentor_repository: MentorRepository,
        visibility_service: VisibilityService,
        availability_service: AvailabilityService,
    ) -> MentorshipPolicy:
        """Provide mentorship booking rules."""
        return MentorshipPolicy(
            user_repository=user_repository,
            mentor_repository=mentor_repository,
            visibility_service=visibility_service,
            availability_service=availability_service,
        )

    @provide
    def get_request_ledger_service(
        self,
        request_repository: CollaborationRequestRepository,
        project_repository: ProjectRepository,
        visibility_service: VisibilityService,
        connection_policy: ConnectionPolicy,
        project_join_policy: ProjectJoinPolicy,
        mentorship_policy: MentorshipPolicy,
        settings: CollaborationSettings,
    ) -> RequestLedgerService:
        """Provide request ledger domain service."""
        return RequestLedgerService(
            request_repository=request_repository,
            project_repository=project_repository,
            visibility_service=visibility_service,
            connection_policy=connection_policy,
            project_join_policy=project_join_policy,
            mentorship_policy=mentorship_policy,
            settings=settings,
        )

    @provide
    def get_suggestion_service(
        self,
        request_repository: CollaborationRequestRepository,
        mentor_repository: MentorRepository,
        visibility_service: VisibilityService,
        settings: CollaborationSettings,
    ) -> SuggestionService:
        """Provide suggestion domain service."""
        return SuggestionService(
            request_repository=request_repository,
            mentor_repository=mentor_repository,
            visibility_service=visibility_service,
            settings=settings,
        )

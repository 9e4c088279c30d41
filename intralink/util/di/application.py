"""Application layer DI providers."""

from dishka import Scope, provide

from intralink.application.usecase.connection import (
    ListConnectionsUseCase,
    ListSuggestionsUseCase,
    RemoveConnectionUseCase,
    SendConnectionRequestUseCase,
)
from intralink.application.usecase.mentorship import (
    BookSessionUseCase,
    GetBookableSlotsUseCase,
    ListMentorsUseCase,
)
from intralink.application.usecase.project import (
    ListProjectMembersUseCase,
    SubmitJoinRequestUseCase,
)
from intralink.application.usecase.request import (
    GetRequestBoardUseCase,
    ListIncomingRequestsUseCase,
    ListOutgoingRequestsUseCase,
    RespondRequestUseCase,
    WithdrawRequestUseCase,
)
from intralink.domain.service import (
    AvailabilityService,
    RequestLedgerService,
    SuggestionService,
    UserService,
    VisibilityService,
)
from intralink.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Connection use cases
    @provide(scope=Scope.REQUEST)
    def get_send_connection_request_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> SendConnectionRequestUseCase:
        """Provide send connection request use case."""
        return SendConnectionRequestUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_remove_connection_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> RemoveConnectionUseCase:
        """Provide remove connection use case."""
        return RemoveConnectionUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_connections_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> ListConnectionsUseCase:
        """Provide list connections use case."""
        return ListConnectionsUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_suggestions_use_case(
        self, suggestion_service: SuggestionService, user_service: UserService
    ) -> ListSuggestionsUseCase:
        """Provide list suggestions use case."""
        return ListSuggestionsUseCase(
            suggestion_service=suggestion_service, user_service=user_service
        )

    # Project use cases
    @provide(scope=Scope.REQUEST)
    def get_submit_join_request_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> SubmitJoinRequestUseCase:
        """Provide submit join request use case."""
        return SubmitJoinRequestUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_project_members_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> ListProjectMembersUseCase:
        """Provide list project members use case."""
        return ListProjectMembersUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    # Mentorship use cases
    @provide(scope=Scope.REQUEST)
    def get_book_session_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> BookSessionUseCase:
        """Provide book session use case."""
        return BookSessionUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_mentors_use_case(
        self, suggestion_service: SuggestionService, user_service: UserService
    ) -> ListMentorsUseCase:
        """Provide list mentors use case."""
        return ListMentorsUseCase(
            suggestion_service=suggestion_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_bookable_slots_use_case(
        self,
        availability_service: AvailabilityService,
        visibility_service: VisibilityService,
        user_service: UserService,
    ) -> GetBookableSlotsUseCase:
        """Provide get bookable slots use case."""
        return GetBookableSlotsUseCase(
            availability_service=availability_service,
            visibility_service=visibility_service,
            user_service=user_service,
        )

    # Request lifecycle use cases
    @provide(scope=Scope.REQUEST)
    def get_respond_request_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> RespondRequestUseCase:
        """Provide respond request use case."""
        return RespondRequestUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_withdraw_request_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> WithdrawRequestUseCase:
        """Provide withdraw request use case."""
        return WithdrawRequestUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_incoming_requests_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> ListIncomingRequestsUseCase:
        """Provide list incoming requests use case."""
        return ListIncomingRequestsUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_list_outgoing_requests_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> ListOutgoingRequestsUseCase:
        """Provide list outgoing requests use case."""
        return ListOutgoingRequestsUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

    @provide(scope=Scope.REQUEST)
    def get_request_board_use_case(
        self, ledger_service: RequestLedgerService, user_service: UserService
    ) -> GetRequestBoardUseCase:
        """Provide request board use case."""
        return GetRequestBoardUseCase(
            ledger_service=ledger_service, user_service=user_service
        )

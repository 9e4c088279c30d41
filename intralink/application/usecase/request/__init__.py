"""Request lifecycle use cases shared by all request kinds."""

from .list_requests import (
    GetRequestBoardUseCase,
    ListIncomingRequestsUseCase,
    ListOutgoingRequestsUseCase,
    ListRequestsRequest,
    ListRequestsResponse,
)
from .respond_request import RespondRequest, RespondRequestUseCase
from .withdraw_request import WithdrawRequest, WithdrawRequestUseCase

__all__ = [
    "GetRequestBoardUseCase",
    "ListIncomingRequestsUseCase",
    "ListOutgoingRequestsUseCase",
    "ListRequestsRequest",
    "ListRequestsResponse",
    "RespondRequest",
    "RespondRequestUseCase",
    "WithdrawRequest",
    "WithdrawRequestUseCase",
]

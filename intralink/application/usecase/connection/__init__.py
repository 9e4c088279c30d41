"""Connection use cases."""

from .list_connections import (
    ConnectionItem,
    ListConnectionsRequest,
    ListConnectionsResponse,
    ListConnectionsUseCase,
)
from .list_suggestions import (
    ListSuggestionsRequest,
    ListSuggestionsResponse,
    ListSuggestionsUseCase,
    SuggestionItem,
)
from .remove_connection import RemoveConnectionRequest, RemoveConnectionUseCase
from .send_connection_request import (
    SendConnectionRequest,
    SendConnectionRequestUseCase,
)

__all__ = [
    "ConnectionItem",
    "ListConnectionsRequest",
    "ListConnectionsResponse",
    "ListConnectionsUseCase",
    "ListSuggestionsRequest",
    "ListSuggestionsResponse",
    "ListSuggestionsUseCase",
    "RemoveConnectionRequest",
    "RemoveConnectionUseCase",
    "SendConnectionRequest",
    "SendConnectionRequestUseCase",
    "SuggestionItem",
]

"""Client-side projection of a user's collaboration requests.

Mutations return the new record (or a removal marker) and the holder of a
board folds it in with ``apply`` or ``discard`` instead of refetching.
"""

from pydantic import BaseModel, Field

from intralink.application.usecase.view import RemovalResponse, RequestView
from intralink.domain.value import RequestStatus


class RequestBoard(BaseModel):
    """Incoming, outgoing and active requests of one user."""

    user_id: str
    incoming: list[RequestView] = Field(default_factory=list)
    outgoing: list[RequestView] = Field(default_factory=list)
    active: list[RequestView] = Field(default_factory=list)

    def discard(self, request_id: str) -> None:
        """Drop a request from every list."""
        self.incoming = [r for r in self.incoming if r.request_id != request_id]
        self.outgoing = [r for r in self.outgoing if r.request_id != request_id]
        self.active = [r for r in self.active if r.request_id != request_id]

    def apply(self, record: RequestView | RemovalResponse) -> None:
        """Fold the result of a mutation into the board.

        Pending records go to outgoing (sent by the board's user) or
        incoming, accepted ones to active, and rejected ones leave the
        board. Removal markers are discarded.
        """
        if isinstance(record, RemovalResponse):
            self.discard(record.request_id)
            return

        self.discard(record.request_id)
        if record.status is RequestStatus.PENDING:
            bucket = self.outgoing if record.requester_id == self.user_id else self.incoming
            bucket.insert(0, record)
        elif record.status is RequestStatus.ACCEPTED:
            self.active.insert(0, record)

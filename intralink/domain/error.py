"""Domain layer errors.

Every error carries a short human-readable cause that is safe to show to
the user. None of them leave partial state behind: the operation fails and
the caller's view stays as it was.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Missing or malformed request payload."""

    pass


class AuthorizationError(DomainError):
    """Raised when a visibility or interaction rule is violated."""

    def __init__(self, message: str = "You are not allowed to do this"):
        super().__init__(message)


class ConflictError(DomainError):
    """Raised on duplicates or when losing a race against another mutation."""

    pass


class InvalidStateError(DomainError):
    """Raised when a transition is attempted from a non-pending state."""

    def __init__(self, resource: str, resource_id: str, state: str):
        self.resource = resource
        self.resource_id = resource_id
        self.state = state
        super().__init__(f"{resource} {resource_id} is already {state}")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found or not visible."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")

class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class AuthorizationError(DomainError):
    """Raised when a caller lacks permission for an action."""


class AlreadyActiveError(ValidationError):
    """Raised when an actor clocks in while a session is already open."""

    def __init__(self, actor_id: str):
        super().__init__("You already have an active work session.")
        self.actor_id = actor_id


class NotActiveError(ValidationError):
    """Raised when an actor clocks out without an open session."""

    def __init__(self, actor_id: str):
        super().__init__("You do not have an active work session.")
        self.actor_id = actor_id


class PersistenceError(DomainError):
    """Durable store read or write failure."""


class LookupFailedError(DomainError):
    """A member or channel could not be resolved."""

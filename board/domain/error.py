"""Domain layer errors.

These form the closed set of failure kinds callers of the engagement core
see. Backend-specific exceptions are translated into them at the persistence
boundary.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Input violates a length or format constraint."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found or not visible."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class DepthExceededError(DomainError):
    """Raised when a reply would nest deeper than the configured maximum."""

    def __init__(self, level: int, max_depth: int):
        self.level = level
        self.max_depth = max_depth
        super().__init__(
            f"Reply level {level} exceeds maximum nesting depth {max_depth}"
        )


class AlreadyExistsError(DomainError):
    """Raised when a uniqueness constraint rejects a duplicate fact row."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} already exists: {identifier}")


class ForbiddenError(DomainError):
    """Raised when an actor attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, actor_id: str):
        self.resource = resource
        self.resource_id = resource_id
        self.actor_id = actor_id
        super().__init__(
            f"Actor {actor_id} is not authorized to modify {resource} {resource_id}"
        )


class ContentDeletedError(DomainError):
    """Raised when attempting to edit deleted content."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(f"Cannot modify deleted {resource} {resource_id}")


class RetryableError(DomainError):
    """Base for failures that are retried before being surfaced."""

    pass


class ConcurrencyConflictError(RetryableError):
    """The underlying transaction could not be serialized."""

    pass


class StoreUnavailableError(RetryableError):
    """The backend could not be reached or timed out."""

    pass

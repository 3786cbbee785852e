class DomainError(Exception):
    """Base exception for business rule violations."""

    kind = "domain_error"


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""

    kind = "validation_error"


class RemoteCheckInNotConfirmed(ValidationError):
    """Raised when a check-in outside the geofence was not confirmed."""

    kind = "remote_not_confirmed"


class AuthorizationError(DomainError):
    """Raised when a user lacks permission for an action."""

    kind = "authorization_error"


class NotFoundError(DomainError):
    """Raised when a session or break does not exist for the acting user."""

    kind = "not_found"


class InvalidStateError(DomainError):
    """Raised when a session/break is not in the state an operation requires."""

    kind = "invalid_state"


class ConflictError(DomainError):
    """Raised when storage rejects a second open session for the same user/kind/day."""

    kind = "conflict"


class ProviderUnavailableError(DomainError):
    """Raised when the coordinate reading timed out or was denied."""

    kind = "provider_unavailable"


class StorageError(DomainError):
    """Raised on transient persistence failures."""

    kind = "storage_error"

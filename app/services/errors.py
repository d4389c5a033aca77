"""Errors raised by the booking store. API routes translate them to HTTP responses."""


class BookingServiceError(Exception):
    """Base class for booking store failures."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(BookingServiceError):
    """Raised when an operation references an id or email that does not exist."""


class DuplicateEmailError(BookingServiceError):
    """Raised when registering an email that already exists (case-insensitive)."""


class PermissionDeniedError(BookingServiceError):
    """Raised when a non-admin invokes an admin-only operation."""


class StorageError(BookingServiceError):
    """Raised when a storage write fails and strict writes are enabled."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)

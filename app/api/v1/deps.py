"""Shared route dependencies: the booking store and service-error translation."""

from functools import lru_cache

from fastapi import HTTPException, status

from app.core.config import get_settings
from app.core.storage import build_storage
from app.services.booking_store import BookingStore
from app.services.errors import (
    BookingServiceError,
    DuplicateEmailError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
)
from app.services.seed import build_seed_source

_STATUS_BY_ERROR: tuple[tuple[type[BookingServiceError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (DuplicateEmailError, status.HTTP_409_CONFLICT),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (StorageError, status.HTTP_503_SERVICE_UNAVAILABLE),
)


@lru_cache
def get_store() -> BookingStore:
    """Return the process-wide store built from settings. Override in tests via dependency_overrides."""
    settings = get_settings()
    return BookingStore(
        storage=build_storage(settings),
        seed_source=build_seed_source(settings),
        delay_seconds=settings.SIMULATED_DELAY_MS / 1000,
        key_prefix=settings.STORAGE_KEY_PREFIX,
        strict_writes=settings.STORAGE_STRICT_WRITES,
    )


def to_http_exception(error: BookingServiceError) -> HTTPException:
    """Map a store error to the matching HTTP status (500 for anything unexpected)."""
    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(error, error_type):
            return HTTPException(status_code=status_code, detail=error.message)
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error.message)

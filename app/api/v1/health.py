"""Health check endpoint with optional storage reachability check."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.deps import get_store
from app.core.config import settings
from app.schemas.health import HealthResponse
from app.services.booking_store import BookingStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(store: Annotated[BookingStore, Depends(get_store)]) -> HealthResponse:
    """
    Return service health status and storage reachability.
    Used by load balancers and monitoring.
    """
    try:
        store.storage.get_item(store.users_key)
        storage_status = "reachable"
    except Exception:
        logger.warning("Storage health check failed", exc_info=True)
        storage_status = "unreachable"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        storage_backend=settings.STORAGE_BACKEND,
        storage=storage_status,
    )

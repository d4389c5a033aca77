"""Pydantic request/response schemas."""

from app.schemas.auth import (
    LoginRequest,
    PasswordUpdateRequest,
    RegisterRequest,
    TokenResponse,
)
from app.schemas.booking import (
    AvailabilityResponse,
    BlockedDatesUpdate,
    DataResponse,
    ReservationRequest,
    ReservationStatusUpdate,
)
from app.schemas.entities import (
    AllData,
    House,
    HouseCreate,
    PublicUser,
    Reservation,
    ReservationCreate,
    ReservationStatus,
    Role,
    User,
)
from app.schemas.health import HealthResponse

__all__ = [
    "AllData",
    "AvailabilityResponse",
    "BlockedDatesUpdate",
    "DataResponse",
    "HealthResponse",
    "House",
    "HouseCreate",
    "LoginRequest",
    "PasswordUpdateRequest",
    "PublicUser",
    "RegisterRequest",
    "Reservation",
    "ReservationCreate",
    "ReservationRequest",
    "ReservationStatus",
    "ReservationStatusUpdate",
    "Role",
    "TokenResponse",
    "User",
]

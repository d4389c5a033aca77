"""Request/response schemas for house and reservation endpoints."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from app.schemas.entities import DocumentModel, House, PublicUser, Reservation, validate_iso_date


class BlockedDatesUpdate(DocumentModel):
    """Replacement list of blocked dates for one house."""

    blocked_dates: list[str] = Field(default_factory=list, description="Dates in YYYY-MM-DD format.")

    @field_validator("blocked_dates")
    @classmethod
    def validate_blocked_dates(cls, v: list[str]) -> list[str]:
        return [validate_iso_date(d) for d in v]


class ReservationRequest(DocumentModel):
    """Stay request body; the requesting user and house name are filled in server-side."""

    house_id: int
    guest_name: str = Field(..., min_length=1, max_length=255)
    guest_email: str = Field(..., min_length=1, max_length=320)
    check_in: str
    check_out: str
    guests: int = Field(..., ge=1)
    message: str = Field(default="", max_length=5000)

    @field_validator("check_in", "check_out")
    @classmethod
    def validate_dates(cls, v: str) -> str:
        return validate_iso_date(v)


class ReservationStatusUpdate(BaseModel):
    """Admin decision on a stay request."""

    status: Literal["confirmed", "rejected"]


class AvailabilityResponse(DocumentModel):
    """Dates a house cannot be booked for, plus the guest counts it accepts."""

    house_id: int
    unavailable_dates: list[str] = Field(..., description="Sorted YYYY-MM-DD dates.")
    guest_options: list[int]
    available: bool | None = Field(
        default=None,
        description="Whether the requested check-in..check-out range is free; null when no range was given.",
    )


class DataResponse(BaseModel):
    """Full merged dataset with password hashes removed."""

    users: list[PublicUser]
    houses: list[House]
    reservations: list[Reservation]

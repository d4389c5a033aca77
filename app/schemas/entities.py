"""Pydantic schemas for the three persisted collections: users, houses, reservations.

Persisted documents use camelCase keys (``passwordHash``, ``blockedDates``, ``houseId``...);
Python code uses snake_case attribute names. Dump with ``to_document`` to get the stored shape.
"""

import re
from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

Role = Literal["user", "admin"]
ReservationStatus = Literal["pending", "confirmed", "rejected"]

RESERVATION_STATUS_VALUES: frozenset[str] = frozenset({"pending", "confirmed", "rejected"})

# Extended form only; date.fromisoformat also takes "20300701" and "2030-W27-1".
_ISO_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def validate_iso_date(value: str) -> str:
    """Ensure value is a calendar date in YYYY-MM-DD form."""
    if not value or not value.strip():
        raise ValueError("date must be non-empty")
    stripped = value.strip()
    message = f"date must be in YYYY-MM-DD format, got {value!r}"
    if not _ISO_DATE_PATTERN.fullmatch(stripped):
        raise ValueError(message)
    try:
        date.fromisoformat(stripped)
    except ValueError as e:
        raise ValueError(message) from e
    return stripped


class DocumentModel(BaseModel):
    """Base for stored documents: camelCase aliases, populate by either name, ignore unknown keys."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_document(self) -> dict[str, Any]:
        """Return the JSON-ready dict in the persisted (camelCase) shape."""
        return self.model_dump(mode="json", by_alias=True)


class User(DocumentModel):
    """Registered account. The password is only ever stored as a hash."""

    id: int
    name: str
    email: str
    password_hash: str
    role: Role = "user"


class PublicUser(DocumentModel):
    """User without the password hash, safe to return to clients."""

    id: int
    name: str
    email: str
    role: Role

    @classmethod
    def from_user(cls, user: User) -> "PublicUser":
        return cls(id=user.id, name=user.name, email=user.email, role=user.role)


class HouseCreate(DocumentModel):
    """House fields supplied by an admin; the id is assigned by the store."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(default="", description="Short description for listing cards.")
    long_description: str = Field(default="", description="Full description for the detail page.")
    capacity: int = Field(..., ge=1, description="Maximum number of guests.")
    images: list[str] = Field(default_factory=list, description="Image URLs or data URIs, in display order.")
    amenities: list[str] = Field(default_factory=list)
    blocked_dates: list[str] = Field(
        default_factory=list,
        description="Dates (YYYY-MM-DD) made unavailable by an admin; unordered, duplicates allowed.",
    )

    @field_validator("amenities")
    @classmethod
    def strip_amenities(cls, v: list[str]) -> list[str]:
        return [a.strip() for a in v if a and a.strip()]

    @field_validator("blocked_dates")
    @classmethod
    def validate_blocked_dates(cls, v: list[str]) -> list[str]:
        return [validate_iso_date(d) for d in v]


class House(HouseCreate):
    """Bookable house."""

    id: int


class ReservationCreate(DocumentModel):
    """Stay request as submitted by a guest; id and status are assigned by the store."""

    house_id: int
    house_name: str = ""
    user_id: int
    guest_name: str = Field(..., min_length=1, max_length=255)
    guest_email: str = Field(..., min_length=1, max_length=320)
    check_in: str
    check_out: str
    guests: int = Field(..., ge=1)
    message: str = ""

    @field_validator("check_in", "check_out")
    @classmethod
    def validate_dates(cls, v: str) -> str:
        return validate_iso_date(v)


class Reservation(ReservationCreate):
    """Stored stay request with its review status."""

    id: int
    status: ReservationStatus = "pending"


class AllData(BaseModel):
    """Merged view of every collection."""

    users: list[User] = Field(default_factory=list)
    houses: list[House] = Field(default_factory=list)
    reservations: list[Reservation] = Field(default_factory=list)

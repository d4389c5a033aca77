"""Reservation endpoints: guests submit stay requests, admins confirm or reject them."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from app.api.v1.auth import get_current_user, require_admin
from app.api.v1.deps import get_store, to_http_exception
from app.schemas.booking import ReservationRequest, ReservationStatusUpdate
from app.schemas.entities import Reservation, ReservationCreate, User
from app.services.booking_store import BookingStore
from app.services.errors import BookingServiceError

router = APIRouter()


@router.get("", response_model=list[Reservation])
async def list_reservations(
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> list[Reservation]:
    """Admins see every reservation; other users see only their own."""
    data = await store.fetch_all()
    if current_user.role == "admin":
        return data.reservations
    return [r for r in data.reservations if r.user_id == current_user.id]


@router.post("", response_model=Reservation, status_code=status.HTTP_201_CREATED)
async def create_reservation(
    body: ReservationRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> Reservation:
    """
    Submit a stay request for the current user. It starts as 'pending'.

    Dates are not checked against availability here; the availability endpoint is
    what clients use to keep unavailable days from being selected.
    """
    house = await store.find_house(body.house_id)
    if house is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="House not found")
    payload = ReservationCreate(
        **body.model_dump(),
        house_name=house.name,
        user_id=current_user.id,
    )
    try:
        return await store.add_reservation(payload)
    except BookingServiceError as e:
        raise to_http_exception(e) from e


@router.patch("/{reservation_id}/status", response_model=Reservation)
async def update_reservation_status(
    reservation_id: int,
    body: ReservationStatusUpdate,
    admin: Annotated[User, Depends(require_admin)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> Reservation:
    try:
        return await store.update_reservation_status(admin, reservation_id, body.status)
    except BookingServiceError as e:
        raise to_http_exception(e) from e

"""House endpoints: public listing and availability, admin create/edit/delete/blocked dates."""

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.api.v1.auth import require_admin
from app.api.v1.deps import get_store, to_http_exception
from app.schemas.booking import AvailabilityResponse, BlockedDatesUpdate
from app.schemas.entities import House, HouseCreate, User
from app.services.availability import guest_options, is_range_available, unavailable_dates
from app.services.booking_store import BookingStore
from app.services.errors import BookingServiceError

router = APIRouter()


@router.get("", response_model=list[House])
async def list_houses(store: Annotated[BookingStore, Depends(get_store)]) -> list[House]:
    """All visible houses: seed houses not deleted, plus houses added or edited locally."""
    data = await store.fetch_all()
    return data.houses


@router.get("/{house_id}", response_model=House)
async def get_house(
    house_id: int,
    store: Annotated[BookingStore, Depends(get_store)],
) -> House:
    try:
        return await store.get_house(house_id)
    except BookingServiceError as e:
        raise to_http_exception(e) from e


@router.get("/{house_id}/availability", response_model=AvailabilityResponse)
async def get_availability(
    house_id: int,
    store: Annotated[BookingStore, Depends(get_store)],
    check_in: Annotated[date | None, Query(description="Requested first night, YYYY-MM-DD.")] = None,
    check_out: Annotated[date | None, Query(description="Requested last day, YYYY-MM-DD.")] = None,
) -> AvailabilityResponse:
    """
    Dates that cannot be requested for this house.

    Includes admin-blocked dates and every day of each confirmed reservation
    (check-in through check-out). Pending requests do not block dates. When both
    check_in and check_out are given, `available` says whether that range is free.
    """
    if (check_in is None) != (check_out is None):
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail="check_in and check_out must be given together",
        )
    data = await store.fetch_all()
    house = next((h for h in data.houses if h.id == house_id), None)
    if house is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="House not found")
    days = sorted(unavailable_dates(house, data.reservations))
    available = None
    if check_in is not None and check_out is not None:
        available = is_range_available(house, data.reservations, check_in, check_out)
    return AvailabilityResponse(
        house_id=house.id,
        unavailable_dates=[d.isoformat() for d in days],
        guest_options=guest_options(house),
        available=available,
    )


@router.post("", response_model=House, status_code=status.HTTP_201_CREATED)
async def create_house(
    body: HouseCreate,
    admin: Annotated[User, Depends(require_admin)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> House:
    try:
        return await store.add_house(admin, body)
    except BookingServiceError as e:
        raise to_http_exception(e) from e


@router.put("/{house_id}", response_model=House)
async def edit_house(
    house_id: int,
    body: HouseCreate,
    admin: Annotated[User, Depends(require_admin)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> House:
    """Replace every field of an existing house. 404 if the house does not exist or was deleted."""
    house = House(**body.model_dump(), id=house_id)
    try:
        return await store.edit_house(admin, house)
    except BookingServiceError as e:
        raise to_http_exception(e) from e


@router.delete("/{house_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_house(
    house_id: int,
    admin: Annotated[User, Depends(require_admin)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> Response:
    """Hide a house permanently. Its reservations are kept."""
    try:
        await store.delete_house(admin, house_id)
    except BookingServiceError as e:
        raise to_http_exception(e) from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/{house_id}/blocked-dates", response_model=House)
async def update_blocked_dates(
    house_id: int,
    body: BlockedDatesUpdate,
    admin: Annotated[User, Depends(require_admin)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> House:
    try:
        return await store.update_blocked_dates(admin, house_id, body.blocked_dates)
    except BookingServiceError as e:
        raise to_http_exception(e) from e

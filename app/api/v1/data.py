"""Full dataset endpoint for the admin dashboard."""

from typing import Annotated

from fastapi import APIRouter, Depends

from app.api.v1.auth import require_admin
from app.api.v1.deps import get_store
from app.schemas.booking import DataResponse
from app.schemas.entities import PublicUser, User
from app.services.booking_store import BookingStore

router = APIRouter()


@router.get("", response_model=DataResponse)
async def get_data(
    _admin: Annotated[User, Depends(require_admin)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> DataResponse:
    """Merged users (without password hashes), houses and reservations."""
    data = await store.fetch_all()
    return DataResponse(
        users=[PublicUser.from_user(u) for u in data.users],
        houses=data.houses,
        reservations=data.reservations,
    )

"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import auth, data, health, houses, reservations

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(data.router, prefix="/data", tags=["data"])
router.include_router(houses.router, prefix="/houses", tags=["houses"])
router.include_router(reservations.router, prefix="/reservations", tags=["reservations"])

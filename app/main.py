"""FastAPI application entrypoint. No business logic; only wiring and middleware."""

from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.v1 import router as v1_router
from app.core.config import settings

OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and storage reachability."},
    {"name": "auth", "description": "Login, registration and password changes."},
    {"name": "data", "description": "Admin export of the merged dataset."},
    {"name": "houses", "description": "Holiday houses, their calendars and admin edits."},
    {"name": "reservations", "description": "Stay requests and their confirmation."},
]

app = FastAPI(
    title="Città Futura Booking API",
    description=(
        "Houses, stay requests and accounts for Le Case di Città Futura. "
        "Reads merge the published seed data with locally stored changes."
    ),
    openapi_tags=OPENAPI_TAGS,
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.APP_ENV == "dev" else [],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(v1_router, prefix=settings.API_V1_PREFIX)


@app.get("/")
def root() -> dict[str, str]:
    """Root route; minimal payload for discovery."""
    return {"message": "Città Futura Booking API", "docs": "/docs"}

"""Seed data: the read-only baseline dataset fetched once per load."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

import httpx
from pydantic import ValidationError

from app.schemas.entities import DocumentModel, House, Reservation, User

if TYPE_CHECKING:
    from app.core.config import Settings

logger = logging.getLogger(__name__)

USERS_PATH = "data/users.json"
HOUSES_PATH = "data/houses.json"
RESERVATIONS_PATH = "data/reservations.json"

ModelT = TypeVar("ModelT", bound=DocumentModel)


@dataclass
class SeedData:
    """Seed rows per collection, already validated."""

    users: list[User] = field(default_factory=list)
    houses: list[House] = field(default_factory=list)
    reservations: list[Reservation] = field(default_factory=list)


class SeedSource(Protocol):
    async def load(self) -> SeedData: ...


def parse_rows(rows: Any, model: type[ModelT], source: str) -> list[ModelT]:
    """Validate each row of a JSON document, skipping (and logging) rows that do not fit the model."""
    if not isinstance(rows, list):
        logger.warning("Document %s is not a JSON array; ignoring it.", source)
        return []
    parsed: list[ModelT] = []
    for i, row in enumerate(rows):
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(
                "Skipping invalid %s row at index %s in %s: %s",
                model.__name__,
                i,
                source,
                e.error_count(),
            )
    return parsed


class StaticSeedSource:
    """Seed served from memory (tests, offline runs, or no seed at all)."""

    def __init__(
        self,
        users: list[User] | None = None,
        houses: list[House] | None = None,
        reservations: list[Reservation] | None = None,
    ) -> None:
        self._data = SeedData(
            users=list(users or []),
            houses=list(houses or []),
            reservations=list(reservations or []),
        )

    async def load(self) -> SeedData:
        return SeedData(
            users=list(self._data.users),
            houses=list(self._data.houses),
            reservations=list(self._data.reservations),
        )


class HttpSeedSource:
    """
    Fetch the three seed documents relative to a base URL.

    Missing documents, HTTP errors, unreachable hosts and invalid JSON all degrade
    to an empty collection; failures are logged, never raised.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout
        self._transport = transport

    async def _fetch_rows(self, client: httpx.AsyncClient, path: str) -> Any:
        url = f"{self.base_url}{path}"
        try:
            response = await client.get(url)
        except httpx.HTTPError as e:
            logger.error("Error fetching seed data from %s: %s", url, e)
            return []
        if response.status_code >= 400:
            logger.warning(
                "Could not fetch seed data from %s (status %s); using an empty list.",
                url,
                response.status_code,
            )
            return []
        try:
            return response.json()
        except ValueError as e:
            logger.error("Seed data from %s is not valid JSON: %s", url, e)
            return []

    async def load(self) -> SeedData:
        timeout = httpx.Timeout(self.timeout)
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            users_raw, houses_raw, reservations_raw = await asyncio.gather(
                self._fetch_rows(client, USERS_PATH),
                self._fetch_rows(client, HOUSES_PATH),
                self._fetch_rows(client, RESERVATIONS_PATH),
            )
        return SeedData(
            users=parse_rows(users_raw, User, USERS_PATH),
            houses=parse_rows(houses_raw, House, HOUSES_PATH),
            reservations=parse_rows(reservations_raw, Reservation, RESERVATIONS_PATH),
        )


def build_seed_source(settings: "Settings") -> SeedSource:
    """HTTP seed when SEED_BASE_URL is set, otherwise no seed."""
    if not settings.SEED_BASE_URL:
        logger.info("SEED_BASE_URL is empty; starting without seed data.")
        return StaticSeedSource()
    return HttpSeedSource(settings.SEED_BASE_URL, timeout=settings.SEED_REQUEST_TIMEOUT_SEC)

"""
Booking store: CRUD for users, houses and reservations over a key-value storage port.

Every operation reads the whole collection, changes it in memory and writes the whole
collection back (last writer wins). Reads present the merged view of seed rows, local
overrides and deleted-house tombstones. An artificial delay precedes every operation
so callers can exercise their loading states.

Storage I/O and password hashing run in worker threads via asyncio.to_thread so a
slow disk or a bcrypt round never stalls the event loop.
"""

import asyncio
import json
import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar

from app.core.security import hash_password, verify_password
from app.core.storage import KeyValueStorage
from app.schemas.entities import (
    RESERVATION_STATUS_VALUES,
    AllData,
    DocumentModel,
    House,
    HouseCreate,
    Reservation,
    ReservationCreate,
    ReservationStatus,
    Role,
    User,
    validate_iso_date,
)
from app.services.errors import (
    DuplicateEmailError,
    NotFoundError,
    PermissionDeniedError,
    StorageError,
)
from app.services.ids import MonotonicIdGenerator
from app.services.reconcile import merge_houses, merge_reservations, merge_users
from app.services.seed import SeedData, SeedSource, StaticSeedSource, parse_rows

logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "cittafutura_"
DEFAULT_DELAY_SECONDS = 0.2

ModelT = TypeVar("ModelT", bound=DocumentModel)


def _require_admin(actor: User | None) -> None:
    if actor is None or actor.role != "admin":
        raise PermissionDeniedError("Admin access required")


def _email_key(email: str) -> str:
    return email.strip().lower()


def _is_id(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _document_id(document: Any) -> Any:
    return document.get("id") if isinstance(document, dict) else None


def _document_ids(documents: Iterable[Any]) -> list[int]:
    return [i for i in map(_document_id, documents) if _is_id(i)]


def _document_email(document: Any) -> str | None:
    email = document.get("email") if isinstance(document, dict) else None
    return _email_key(email) if isinstance(email, str) else None


def _replace_or_append(
    documents: list[Any],
    document: dict[str, Any],
    matches: Callable[[Any], bool],
) -> list[Any]:
    """Return documents with the first match replaced, or document appended when nothing matches."""
    for i, existing in enumerate(documents):
        if matches(existing):
            return documents[:i] + [document] + documents[i + 1 :]
    return documents + [document]


class BookingStore:
    """Async facade over the three collections; one instance per storage."""

    def __init__(
        self,
        storage: KeyValueStorage,
        seed_source: SeedSource | None = None,
        delay_seconds: float = DEFAULT_DELAY_SECONDS,
        id_generator: MonotonicIdGenerator | None = None,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        strict_writes: bool = False,
    ) -> None:
        self.storage = storage
        self.seed_source = seed_source or StaticSeedSource()
        self.delay_seconds = delay_seconds
        self.ids = id_generator or MonotonicIdGenerator()
        self.strict_writes = strict_writes
        self.users_key = f"{key_prefix}users"
        self.houses_key = f"{key_prefix}houses"
        self.reservations_key = f"{key_prefix}reservations"
        self.deleted_houses_key = f"{key_prefix}deleted_houses"
        self._seed: SeedData | None = None
        self._seed_lock = asyncio.Lock()

    # --- storage helpers ---

    async def _simulate_latency(self) -> None:
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

    async def _read_documents(self, key: str) -> list[Any]:
        """
        Read a JSON array exactly as stored; unreadable or malformed documents count as empty.

        Writes go back through these raw documents, so rows that fail validation for the
        merged view are preserved rather than dropped on the next save.
        """
        try:
            raw = await asyncio.to_thread(self.storage.get_item, key)
            data = json.loads(raw) if raw else []
        except Exception:
            logger.exception("Failed to read %s from storage", key)
            return []
        if not isinstance(data, list):
            logger.error("Stored %s is not a JSON array; treating it as empty.", key)
            return []
        return data

    async def _read_rows(self, key: str, model: type[ModelT]) -> list[ModelT]:
        return parse_rows(await self._read_documents(key), model, key)

    async def _read_deleted_house_ids(self) -> list[int]:
        return [i for i in await self._read_documents(self.deleted_houses_key) if _is_id(i)]

    async def _write_documents(self, key: str, documents: list[Any]) -> None:
        try:
            await asyncio.to_thread(self.storage.set_item, key, json.dumps(documents))
        except Exception as e:
            logger.exception("Failed to write %s to storage", key)
            if self.strict_writes:
                raise StorageError(f"Failed to write {key} to storage.", cause=e) from e

    async def _save_row(
        self,
        key: str,
        row: DocumentModel,
        matches: Callable[[Any], bool] | None = None,
    ) -> None:
        """Replace the first stored document that matches row, or append row."""
        documents = await self._read_documents(key)
        matches = matches or (lambda doc: _document_id(doc) == getattr(row, "id", None))
        await self._write_documents(key, _replace_or_append(documents, row.to_document(), matches))

    # --- seed + merge ---

    async def _load_seed(self) -> SeedData:
        """Load the seed once per store; later calls reuse it."""
        async with self._seed_lock:
            if self._seed is None:
                self._seed = await self.seed_source.load()
                logger.info(
                    "Seed loaded: users=%s houses=%s reservations=%s",
                    len(self._seed.users),
                    len(self._seed.houses),
                    len(self._seed.reservations),
                )
            return self._seed

    async def reload_seed(self) -> None:
        """Drop the cached seed so the next read fetches it again."""
        async with self._seed_lock:
            self._seed = None

    async def _merged(self) -> AllData:
        seed = await self._load_seed()
        return AllData(
            users=merge_users(seed.users, await self._read_rows(self.users_key, User)),
            houses=merge_houses(
                seed.houses,
                await self._read_rows(self.houses_key, House),
                await self._read_deleted_house_ids(),
            ),
            reservations=merge_reservations(
                seed.reservations,
                await self._read_rows(self.reservations_key, Reservation),
            ),
        )

    # --- reads ---

    async def fetch_all(self) -> AllData:
        """Return the merged users, houses and reservations."""
        await self._simulate_latency()
        return await self._merged()

    async def find_house(self, house_id: int) -> House | None:
        """Visible house by id, or None. No simulated delay; for lookups inside other requests."""
        data = await self._merged()
        return next((h for h in data.houses if h.id == house_id), None)

    async def get_house(self, house_id: int) -> House:
        await self._simulate_latency()
        house = await self.find_house(house_id)
        if house is None:
            raise NotFoundError("House not found")
        return house

    async def get_user(self, user_id: int) -> User | None:
        data = await self._merged()
        return next((u for u in data.users if u.id == user_id), None)

    # --- users ---

    async def authenticate(self, email: str, password: str) -> User | None:
        """
        Return the user for these credentials, or None.

        Unknown email and wrong password are indistinguishable to the caller.
        """
        await self._simulate_latency()
        data = await self._merged()
        wanted = _email_key(email)
        user = next((u for u in data.users if _email_key(u.email) == wanted), None)
        if user is None:
            return None
        if await asyncio.to_thread(verify_password, password, user.password_hash):
            return user
        return None

    async def create_user(self, name: str, email: str, password: str, role: Role = "user") -> User:
        """Create an account with the given role. Raises DuplicateEmailError if the email is taken."""
        data = await self._merged()
        wanted = _email_key(email)
        if any(_email_key(u.email) == wanted for u in data.users):
            raise DuplicateEmailError("Email already registered")
        password_hash = await asyncio.to_thread(hash_password, password)
        documents = await self._read_documents(self.users_key)
        user = User(
            id=self.ids.next_id([*(u.id for u in data.users), *_document_ids(documents)]),
            name=name.strip(),
            email=email.strip(),
            password_hash=password_hash,
            role=role,
        )
        await self._write_documents(self.users_key, [*documents, user.to_document()])
        logger.info("User created: id=%s role=%s", user.id, user.role)
        return user

    async def register(self, name: str, email: str, password: str) -> User:
        """Register a regular user. Raises DuplicateEmailError if the email exists (case-insensitive)."""
        await self._simulate_latency()
        return await self.create_user(name, email, password, role="user")

    async def update_password(self, email: str, new_password: str) -> User:
        """Set a new password. Raises NotFoundError for an unknown email."""
        await self._simulate_latency()
        data = await self._merged()
        wanted = _email_key(email)
        user = next((u for u in data.users if _email_key(u.email) == wanted), None)
        if user is None:
            raise NotFoundError("User not found")
        password_hash = await asyncio.to_thread(hash_password, new_password)
        updated = user.model_copy(update={"password_hash": password_hash})
        await self._save_row(
            self.users_key,
            updated,
            lambda doc: _document_id(doc) == updated.id or _document_email(doc) == wanted,
        )
        logger.info("Password updated: user_id=%s", updated.id)
        return updated

    # --- reservations ---

    async def add_reservation(self, data: ReservationCreate) -> Reservation:
        """Store a stay request. Status is always 'pending', whatever the input says."""
        await self._simulate_latency()
        merged = await self._merged()
        documents = await self._read_documents(self.reservations_key)
        fields = data.model_dump(exclude={"id", "status"})
        reservation = Reservation(
            **fields,
            id=self.ids.next_id(
                [*(r.id for r in merged.reservations), *_document_ids(documents)]
            ),
            status="pending",
        )
        await self._write_documents(self.reservations_key, [*documents, reservation.to_document()])
        logger.info(
            "Reservation added: id=%s house_id=%s user_id=%s",
            reservation.id,
            reservation.house_id,
            reservation.user_id,
        )
        return reservation

    async def update_reservation_status(
        self,
        actor: User | None,
        reservation_id: int,
        status: ReservationStatus,
    ) -> Reservation:
        """Admin only. Replace the status field and nothing else; NotFoundError for an unknown id."""
        await self._simulate_latency()
        _require_admin(actor)
        if status not in RESERVATION_STATUS_VALUES:
            raise ValueError(
                f"status must be one of {sorted(RESERVATION_STATUS_VALUES)}, got {status!r}"
            )
        merged = await self._merged()
        current = next((r for r in merged.reservations if r.id == reservation_id), None)
        if current is None:
            raise NotFoundError("Reservation not found")
        updated = current.model_copy(update={"status": status})
        await self._save_row(self.reservations_key, updated)
        logger.info("Reservation status updated: id=%s status=%s", reservation_id, status)
        return updated

    # --- houses ---

    async def add_house(self, actor: User | None, data: HouseCreate) -> House:
        """Admin only. Store a new house under a fresh id."""
        await self._simulate_latency()
        _require_admin(actor)
        seed = await self._load_seed()
        documents = await self._read_documents(self.houses_key)
        # Tombstoned ids stay reserved, otherwise the new house would be hidden.
        taken = [
            *(h.id for h in seed.houses),
            *_document_ids(documents),
            *await self._read_deleted_house_ids(),
        ]
        house = House(**data.model_dump(exclude={"id"}), id=self.ids.next_id(taken))
        await self._write_documents(self.houses_key, [*documents, house.to_document()])
        logger.info("House added: id=%s", house.id)
        return house

    async def edit_house(self, actor: User | None, house: House) -> House:
        """Admin only. Replace a visible house; NotFoundError if the id is unknown or deleted."""
        await self._simulate_latency()
        _require_admin(actor)
        if await self.find_house(house.id) is None:
            raise NotFoundError("House not found")
        await self._save_row(self.houses_key, house)
        logger.info("House edited: id=%s", house.id)
        return house

    async def delete_house(self, actor: User | None, house_id: int) -> None:
        """
        Admin only. Hide a house for good.

        Drops any local override and records a tombstone so the immutable seed row
        stays hidden across reloads. Reservations for the house are left untouched.
        """
        await self._simulate_latency()
        _require_admin(actor)
        documents = await self._read_documents(self.houses_key)
        await self._write_documents(
            self.houses_key, [d for d in documents if _document_id(d) != house_id]
        )
        deleted_ids = await self._read_deleted_house_ids()
        if house_id not in deleted_ids:
            await self._write_documents(self.deleted_houses_key, [*deleted_ids, house_id])
        logger.info("House deleted: id=%s", house_id)

    async def update_blocked_dates(
        self,
        actor: User | None,
        house_id: int,
        blocked_dates: Iterable[str],
    ) -> House:
        """Admin only. Replace a house's blocked dates; NotFoundError for an unknown id."""
        await self._simulate_latency()
        _require_admin(actor)
        dates = [validate_iso_date(d) for d in blocked_dates]
        current = await self.find_house(house_id)
        if current is None:
            raise NotFoundError("House not found")
        updated = current.model_copy(update={"blocked_dates": dates})
        await self._save_row(self.houses_key, updated)
        logger.info("Blocked dates updated: house_id=%s count=%s", house_id, len(dates))
        return updated

"""Merge seed rows with local overrides and the house tombstone list into one logical view."""

from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

from app.schemas.entities import House, Reservation, User

RowT = TypeVar("RowT")


def merge_rows(
    seed: Iterable[RowT],
    local: Iterable[RowT],
    key: Callable[[RowT], Hashable],
) -> list[RowT]:
    """
    Overlay local rows on seed rows by key.

    Result order is deterministic: seed order first (a local row that overrides a seed
    row takes that row's position), then local-only rows in local order.
    """
    merged: dict[Hashable, RowT] = {}
    for row in seed:
        merged[key(row)] = row
    for row in local:
        merged[key(row)] = row
    return list(merged.values())


def email_key(user: User) -> str:
    return user.email.strip().lower()


def merge_users(seed: Iterable[User], local: Iterable[User]) -> list[User]:
    """Users are identified by email, case-insensitively."""
    return merge_rows(seed, local, email_key)


def merge_houses(
    seed: Iterable[House],
    local: Iterable[House],
    deleted_ids: Iterable[int] = (),
) -> list[House]:
    """Houses are identified by id; tombstoned ids are dropped even if the seed still has them."""
    tombstones = set(deleted_ids)
    return [h for h in merge_rows(seed, local, lambda h: h.id) if h.id not in tombstones]


def merge_reservations(
    seed: Iterable[Reservation],
    local: Iterable[Reservation],
) -> list[Reservation]:
    return merge_rows(seed, local, lambda r: r.id)

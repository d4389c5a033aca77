"""Which dates a house can be booked for: admin-blocked days plus confirmed stays."""

import logging
from collections.abc import Iterable
from datetime import date, timedelta

from app.schemas.entities import House, Reservation, validate_iso_date

logger = logging.getLogger(__name__)


def _parse_date(value: str) -> date | None:
    try:
        return date.fromisoformat(validate_iso_date(value))
    except (ValueError, AttributeError):
        logger.debug("Ignoring malformed date %r", value)
        return None


def iter_days(start: date, end: date) -> Iterable[date]:
    """Yield every day from start through end, inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def unavailable_dates(house: House, reservations: Iterable[Reservation]) -> set[date]:
    """
    Return blocked dates plus every day of each confirmed reservation for this house.

    Confirmed stays block check-in through check-out inclusive. Pending and rejected
    requests do not block anything.
    """
    days: set[date] = set()
    for raw in house.blocked_dates:
        parsed = _parse_date(raw)
        if parsed is not None:
            days.add(parsed)
    for reservation in reservations:
        if reservation.house_id != house.id or reservation.status != "confirmed":
            continue
        check_in = _parse_date(reservation.check_in)
        check_out = _parse_date(reservation.check_out)
        if check_in is None or check_out is None:
            continue
        days.update(iter_days(check_in, check_out))
    return days


def is_range_available(
    house: House,
    reservations: Iterable[Reservation],
    check_in: date,
    check_out: date,
    today: date | None = None,
) -> bool:
    """True if no day from check_in through check_out is unavailable, past, or out of order."""
    if check_out < check_in:
        return False
    if check_in < (today or date.today()):
        return False
    blocked = unavailable_dates(house, reservations)
    return not any(day in blocked for day in iter_days(check_in, check_out))


def guest_options(house: House) -> list[int]:
    """Guest counts offered for a house: 1 up to its capacity."""
    return list(range(1, house.capacity + 1))

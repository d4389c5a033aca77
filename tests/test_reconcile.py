"""Unit tests for app.services.reconcile: seed rows, local overrides and tombstones."""

import unittest

from app.schemas.entities import House, Reservation, User
from app.services.reconcile import merge_houses, merge_reservations, merge_rows, merge_users


def _user(user_id: int, email: str, name: str = "U") -> User:
    return User(id=user_id, name=name, email=email, password_hash="x", role="user")


def _house(house_id: int, name: str = "H") -> House:
    return House(id=house_id, name=name, capacity=2)


def _reservation(reservation_id: int, status: str = "pending") -> Reservation:
    return Reservation(
        id=reservation_id,
        house_id=1,
        user_id=1,
        guest_name="G",
        guest_email="g@example.com",
        check_in="2030-01-01",
        check_out="2030-01-02",
        guests=1,
        status=status,
    )


class TestMergeRows(unittest.TestCase):
    """merge_rows: local replaces seed by key; order is seed order then local-only rows."""

    def test_local_override_keeps_seed_position(self) -> None:
        merged = merge_rows(["a1", "b1", "c1"], ["b2", "d2"], key=lambda s: s[0])
        self.assertEqual(merged, ["a1", "b2", "c1", "d2"])

    def test_empty_inputs(self) -> None:
        self.assertEqual(merge_rows([], [], key=lambda s: s), [])


class TestMergeUsers(unittest.TestCase):
    """Users are keyed by email, case-insensitively."""

    def test_local_user_replaces_seed_user_with_other_case(self) -> None:
        seed = [_user(1, "Anna@Example.com", name="Seed")]
        local = [_user(1, "anna@example.com", name="Local")]
        merged = merge_users(seed, local)
        self.assertEqual(len(merged), 1)
        self.assertEqual(merged[0].name, "Local")

    def test_distinct_emails_are_kept(self) -> None:
        merged = merge_users([_user(1, "a@example.com")], [_user(2, "b@example.com")])
        self.assertEqual([u.id for u in merged], [1, 2])


class TestMergeHouses(unittest.TestCase):
    """Houses are keyed by id; tombstones hide seed and local rows alike."""

    def test_tombstone_hides_seed_house(self) -> None:
        merged = merge_houses([_house(1), _house(2)], [], deleted_ids=[1])
        self.assertEqual([h.id for h in merged], [2])

    def test_tombstone_hides_local_house(self) -> None:
        merged = merge_houses([], [_house(5)], deleted_ids=[5])
        self.assertEqual(merged, [])

    def test_local_edit_replaces_seed(self) -> None:
        merged = merge_houses([_house(1, "Old")], [_house(1, "New")])
        self.assertEqual([h.name for h in merged], ["New"])

    def test_seed_only(self) -> None:
        merged = merge_houses([_house(1)], [])
        self.assertEqual(merged, [_house(1)])


class TestMergeReservations(unittest.TestCase):
    def test_local_status_override(self) -> None:
        merged = merge_reservations([_reservation(1)], [_reservation(1, "confirmed"), _reservation(2)])
        self.assertEqual([(r.id, r.status) for r in merged], [(1, "confirmed"), (2, "pending")])


if __name__ == "__main__":
    unittest.main()

"""Unit tests for app.services.ids: timestamp ids that never collide."""

import unittest

from app.services.ids import MonotonicIdGenerator


class TestMonotonicIdGenerator(unittest.TestCase):
    def test_uses_millisecond_clock(self) -> None:
        gen = MonotonicIdGenerator(clock=lambda: 1_700_000_000.5)
        self.assertEqual(gen.next_id(), 1_700_000_000_500)

    def test_same_millisecond_still_increases(self) -> None:
        gen = MonotonicIdGenerator(clock=lambda: 5.0)
        self.assertEqual([gen.next_id() for _ in range(3)], [5000, 5001, 5002])

    def test_clock_going_backwards(self) -> None:
        ticks = iter([10.0, 9.0])
        gen = MonotonicIdGenerator(clock=lambda: next(ticks))
        first = gen.next_id()
        self.assertGreater(gen.next_id(), first)

    def test_skips_taken_ids(self) -> None:
        gen = MonotonicIdGenerator(clock=lambda: 1.0)
        self.assertEqual(gen.next_id(taken=[1000, 4000, 2500]), 4001)


if __name__ == "__main__":
    unittest.main()

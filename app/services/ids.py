"""Id allocation for new rows: millisecond timestamps that never repeat."""

import time
from collections.abc import Callable, Iterable


class MonotonicIdGenerator:
    """
    Allocate integer ids from the current time in milliseconds.

    Ids are strictly increasing within the process and always greater than any id
    passed in as already taken, so two calls within the same millisecond (or a
    clock that moved backwards) cannot collide. Not thread-safe: the store only
    calls it from the event loop thread.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def next_id(self, taken: Iterable[int] = ()) -> int:
        now_ms = int(self._clock() * 1000)
        candidate = max(now_ms, self._last + 1, max(taken, default=0) + 1)
        self._last = candidate
        return candidate

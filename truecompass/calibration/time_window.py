################################################################################
#
#  Copyright (C) 2026 Garrett Brown
#  This file is part of OASIS - https://github.com/eigendude/OASIS
#
#  SPDX-License-Identifier: Apache-2.0
#  See DOCS/LICENSING.md for more information.
#
################################################################################

"""Time-keyed sliding window used by the calibration tracker."""

from __future__ import annotations

from collections import deque
from typing import Deque
from typing import Generic
from typing import List
from typing import Tuple
from typing import TypeVar


T = TypeVar("T")


class TimeWindow(Generic[T]):
    """Sliding window of timestamped items.

    Data contract:
        - Items are appended in arrival order with int nanosecond stamps.
        - After each append, items with now - t >= window_ns are evicted,
          where now is the newest timestamp.

    Determinism and edge cases:
        - A timestamp older than the newest one is still stored; eviction
          always measures from the newest stamp seen.
    """

    def __init__(self, window_ns: int) -> None:
        if window_ns <= 0:
            raise ValueError("window_ns must be positive")
        self._window_ns: int = window_ns
        self._items: Deque[Tuple[int, T]] = deque()
        self._newest_ns: int | None = None

    def append(self, t_ns: int, item: T) -> None:
        """Add an item and evict items outside the window."""
        if self._newest_ns is None or t_ns > self._newest_ns:
            self._newest_ns = t_ns
        self._items.append((t_ns, item))
        self._evict(self._newest_ns)

    def clear(self) -> None:
        """Remove every item."""
        self._items.clear()
        self._newest_ns = None

    def values(self) -> List[T]:
        """Return the items in arrival order."""
        return [item for _, item in self._items]

    def __len__(self) -> int:
        return len(self._items)

    def _evict(self, now_ns: int) -> None:
        kept: Deque[Tuple[int, T]] = deque(
            entry for entry in self._items if now_ns - entry[0] < self._window_ns
        )
        self._items = kept

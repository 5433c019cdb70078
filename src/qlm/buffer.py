"""Local item buffer.

FIFO store of items that have been fetched but not yet handed to a caller.
Items leave from the front, in arrival order, exactly once.
"""

from collections import deque
from collections.abc import Iterable


class ItemBuffer[T]:
    """Ordered buffer with running fetched/delivered totals.

    At every quiescent point ``len(buffer) == fetched_total - delivered_total``.
    """

    def __init__(self) -> None:
        self._items: deque[T] = deque()
        self.fetched_total = 0
        self.delivered_total = 0

    def __len__(self) -> int:
        return len(self._items)

    def extend(self, items: Iterable[T]) -> int:
        """Append items to the back and return how many were added."""
        before = len(self._items)
        self._items.extend(items)
        added = len(self._items) - before
        self.fetched_total += added
        return added

    def take(self, count: int) -> list[T]:
        """Remove and return up to ``count`` items from the front."""
        taken = [self._items.popleft() for _ in range(min(count, len(self._items)))]
        self.delivered_total += len(taken)
        return taken

    def snapshot(self) -> tuple[T, ...]:
        """Read-only copy of the buffered items, front first."""
        return tuple(self._items)

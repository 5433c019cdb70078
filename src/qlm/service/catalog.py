"""In-memory item catalog, the reference service's data-access layer.

Pure query methods, no HTTP concerns. Items keep insertion order, which is
the order pages are served in.
"""

from collections.abc import Iterable, Sequence

from qlm.service.schemas.items import CatalogItem


class Catalog:
    """Ordered, read-only collection of items."""

    def __init__(self, items: Iterable[CatalogItem] = ()) -> None:
        self._items: list[CatalogItem] = list(items)

    @classmethod
    def demo(cls, size: int = 150, tags: Sequence[str] = ("cool", "awesome", "rockin")) -> "Catalog":
        """Catalog of ``size`` items titled ``title 1``..``title N``.

        Item ``i`` (1-based) carries ``tags[j]`` when ``i`` is divisible by ``j + 1``,
        so every item has the first tag, every second item the second, and so on.
        """
        return cls(
            CatalogItem(
                id=i,
                title=f"title {i}",
                tags=[tag for j, tag in enumerate(tags) if i % (j + 1) == 0],
            )
            for i in range(1, size + 1)
        )

    def _matching(self, tags: Sequence[str]) -> list[CatalogItem]:
        if not tags:
            return self._items
        wanted = set(tags)
        return [item for item in self._items if wanted.issubset(item.tags)]

    def list_items(self, start: int, count: int, tags: Sequence[str] = ()) -> list[CatalogItem]:
        """Return a page of items carrying all of ``tags``."""
        return self._matching(tags)[start : start + count]

    def count_items(self, tags: Sequence[str] = ()) -> int:
        """Return how many items carry all of ``tags``."""
        return len(self._matching(tags))

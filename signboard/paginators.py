"""Section paginators: cursor and windowing logic over content lists.

Three flavours are used by the rotation:

- :class:`CyclicPaginator` shows one item at a time (News, Event).
- :class:`WindowPaginator` shows a fixed-size page of items (Award).
- :class:`PersistentCursor` walks a catalog whose position lives in a
  :class:`SessionStore`, so it survives the section being hidden and shown
  again (Promo).

Content lists are plain tuples. They are replaced wholesale, never mutated,
and a replacement that leaves a cursor out of range resets it to 0.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CyclicPaginator(Generic[T]):
    """Single-item cursor over a content list.

    Forward steps always wrap. Backward steps wrap by default; with
    ``wrap_backward=False`` they clamp at zero instead.
    """

    def __init__(self, name: str, items: Sequence[T] = (), *, wrap_backward: bool = True):
        self.name = name
        self.wrap_backward = wrap_backward
        self._items: tuple[T, ...] = tuple(items)
        self._cursor = 0

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def cursor(self) -> int:
        return self._cursor

    def __len__(self) -> int:
        return len(self._items)

    @property
    def index(self) -> int:
        """Index of the visible item (``cursor mod max(n, 1)``)."""
        return self._cursor % max(len(self._items), 1)

    def current(self) -> T | None:
        """Return the visible item, or None for an empty list."""
        if not self._items:
            return None
        return self._items[self.index]

    def step_forward(self) -> int:
        self._cursor = (self._cursor + 1) % max(len(self._items), 1)
        return self._cursor

    def step_backward(self) -> int:
        if self.wrap_backward:
            self._cursor = (self._cursor - 1) % max(len(self._items), 1)
        else:
            self._cursor = max(0, self._cursor - 1)
        return self._cursor

    def replace(self, items: Sequence[T]) -> None:
        """Swap in a freshly fetched list, resetting an out-of-range cursor."""
        self._items = tuple(items)
        if self._cursor >= len(self._items):
            if self._cursor:
                logger.debug(
                    "%s cursor %d out of range for %d items; resetting to 0",
                    self.name,
                    self._cursor,
                    len(self._items),
                )
            self._cursor = 0


class WindowPaginator(CyclicPaginator[T]):
    """Fixed-size page over a content list (approximate circular pagination).

    The page cursor ``p`` selects the window starting at
    ``(p * page_size) mod max(n, 1)``. When fewer than ``page_size`` items
    remain before the end of the list the window continues from index 0, so
    every non-empty list yields exactly ``page_size`` items. Near the wrap
    boundary an item can appear in two consecutive windows; lists shorter
    than the page repeat items within one window.
    """

    def __init__(
        self,
        name: str,
        items: Sequence[T] = (),
        *,
        page_size: int = 3,
        wrap_backward: bool = True,
    ):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        super().__init__(name, items, wrap_backward=wrap_backward)
        self.page_size = page_size

    @property
    def window_start(self) -> int:
        return (self._cursor * self.page_size) % max(len(self._items), 1)

    def window(self) -> tuple[T, ...]:
        """Return the visible page of items."""
        n = len(self._items)
        if n == 0:
            return ()
        start = self.window_start
        return tuple(self._items[(start + offset) % n] for offset in range(self.page_size))

    def window_bounds(self) -> tuple[int, int, int]:
        """1-based first/last record numbers and total, for the page caption.

        The last number is not wrapped, matching the "Showing Records a to b
        of n" caption the board has always displayed.
        """
        n = len(self._items)
        if n == 0:
            return (0, 0, 0)
        start = self.window_start
        return (start + 1, start + self.page_size, n)


class SessionStore:
    """Session-scoped state shared by every component that needs it.

    Constructed once at process start and passed by reference. Nothing in
    here outlives the process.
    """

    def __init__(self) -> None:
        self._cursors: dict[str, int] = {}

    def get_cursor(self, key: str) -> int:
        return self._cursors.get(key, 0)

    def set_cursor(self, key: str, value: int) -> None:
        self._cursors[key] = value

    def clear(self) -> None:
        self._cursors.clear()


class PersistentCursor(Generic[T]):
    """Catalog cursor that survives hide/show cycles of its section.

    The position is stored in the :class:`SessionStore` under ``key``; any
    number of ``PersistentCursor`` objects built over the same store and key
    share the same position. The cursor advances when the section is hidden,
    so the next showing presents the following item rather than repeating
    the one just shown.
    """

    def __init__(self, store: SessionStore, key: str, catalog: Sequence[T] = ()):
        self._store = store
        self._key = key
        self._catalog: tuple[T, ...] = tuple(catalog)

    @property
    def catalog(self) -> tuple[T, ...]:
        return self._catalog

    @property
    def cursor(self) -> int:
        return self._store.get_cursor(self._key)

    def current(self) -> T | None:
        """Return the item to show now without moving the cursor."""
        if not self._catalog:
            return None
        return self._catalog[self.cursor % len(self._catalog)]

    def get_next(self) -> T | None:
        """Return the current item and move the cursor to the following one."""
        item = self.current()
        self._advance()
        return item

    def on_hidden(self) -> None:
        """Called when the owning section is deactivated."""
        self._advance()

    def replace(self, catalog: Sequence[T]) -> None:
        self._catalog = tuple(catalog)
        if self.cursor >= len(self._catalog):
            self._store.set_cursor(self._key, 0)

    def _advance(self) -> None:
        if not self._catalog:
            return
        self._store.set_cursor(self._key, (self.cursor + 1) % len(self._catalog))

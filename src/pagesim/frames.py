"""Frame table — the set of pages currently resident in physical memory.

Physical memory has a fixed number of frames, each able to hold one
page.  The frame table answers the question every policy asks on
every reference: "is this page resident?"  It must answer in O(1).

Invariants:
    - ``len(table) <= capacity`` at all times.
    - No page is resident twice.
    - Capacity never changes after construction.

The table is backed by a dict used as an ordered set: membership is a
hash lookup, and iteration follows residency order (the order pages
were installed).  The Optimal policy relies on that order to break
ties between eviction candidates deterministically.

Each policy owns its own table, so concurrent runs never share one.
"""

from collections.abc import Iterator

from pagesim.errors import ConfigurationError, FrameTableError


def check_capacity(capacity: int) -> int:
    """Return ``capacity`` if it is a positive integer.

    Raises:
        ConfigurationError: If capacity is not an int or is not positive.

    """
    if isinstance(capacity, bool) or not isinstance(capacity, int):
        msg = f"Frame count must be an integer, got {capacity!r}"
        raise ConfigurationError(msg)
    if capacity <= 0:
        msg = f"Frame count must be positive, got {capacity}"
        raise ConfigurationError(msg)
    return capacity


class FrameTable:
    """Bounded collection of resident pages with O(1) membership."""

    def __init__(self, capacity: int) -> None:
        """Create an empty frame table with ``capacity`` frames.

        Raises:
            ConfigurationError: If capacity is not a positive integer.

        """
        self._capacity = check_capacity(capacity)
        self._resident: dict[int, None] = {}
        self._peak = 0

    @property
    def capacity(self) -> int:
        """Return the number of frames."""
        return self._capacity

    @property
    def peak_occupancy(self) -> int:
        """Return the highest number of pages ever resident at once."""
        return self._peak

    @property
    def pages(self) -> tuple[int, ...]:
        """Return the resident pages in residency order."""
        return tuple(self._resident)

    def is_full(self) -> bool:
        """Return True if every frame holds a page."""
        return len(self._resident) >= self._capacity

    def insert(self, page: int) -> None:
        """Install a page in a free frame.

        Raises:
            FrameTableError: If the page is already resident or the
                table is full.

        """
        if page in self._resident:
            msg = f"Page {page} is already resident"
            raise FrameTableError(msg)
        if self.is_full():
            msg = f"No free frame for page {page} (capacity {self._capacity})"
            raise FrameTableError(msg)
        self._resident[page] = None
        self._peak = max(self._peak, len(self._resident))

    def evict(self, page: int) -> None:
        """Remove a resident page, freeing its frame.

        Raises:
            KeyError: If the page is not resident.

        """
        if page not in self._resident:
            msg = f"Page {page} is not resident"
            raise KeyError(msg)
        del self._resident[page]

    def __contains__(self, page: object) -> bool:
        """Return True if the page is resident."""
        return page in self._resident

    def __iter__(self) -> Iterator[int]:
        """Iterate resident pages in residency order."""
        return iter(self._resident)

    def __len__(self) -> int:
        """Return the number of resident pages."""
        return len(self._resident)

    def __repr__(self) -> str:
        """Return a developer-friendly representation."""
        return f"FrameTable({len(self._resident)}/{self._capacity}: {list(self._resident)})"

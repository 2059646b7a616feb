"""
Growable I/O buffer with read and write cursors.

The buffer owns one contiguous byte region. Two cursors delimit the unread
data::

    0 <= begin <= end <= capacity

    [ consumed | unread data | free tail ]
    0        begin          end       capacity

Readers take the unread region out through `consume` (a zero-copy view) or
`copy_out_and_consume`. Writers fill the free tail returned by
`space_to_fill` directly (e.g. with `readinto`) and then declare the count
with `added`.

Views handed out are only valid until the next mutating call. Growth swaps
in a new backing array, so a stale view keeps the old bytes rather than
blocking the resize.
"""

from __future__ import annotations


class Buffer:
    """A byte region with cursors, compaction and append-only growth."""

    def __init__(self, capacity: int) -> None:
        if capacity < 0:
            raise ValueError(f"Buffer capacity must be non-negative, got {capacity}")
        self._data = bytearray(capacity)
        self._begin = 0
        self._end = 0

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(capacity={self.capacity}, "
            f"begin={self._begin}, end={self._end})"
        )

    @property
    def capacity(self) -> int:
        """Total size of the backing region."""
        return len(self._data)

    @property
    def begin(self) -> int:
        """Offset of the first unread byte."""
        return self._begin

    @property
    def end(self) -> int:
        """Offset one past the last unread byte."""
        return self._end

    @property
    def buffered(self) -> int:
        """Number of unread bytes."""
        return self._end - self._begin

    @property
    def empty(self) -> bool:
        return self._begin == self._end

    def move_data_to_start(self) -> None:
        """
        Shift the unread region down to offset 0.

        Called before a fill so the free tail is as large as possible.
        Does nothing when the unread data already starts at offset 0.
        """
        if self._begin > 0:
            size = self.buffered
            # Slicing copies first, so the overlapping move is safe.
            self._data[:size] = self._data[self._begin : self._end]
            self._begin = 0
            self._end = size

    def space_to_fill(self) -> memoryview:
        """Return a writable view of the free tail `[end, capacity)`."""
        return memoryview(self._data)[self._end :]

    def added(self, count: int) -> None:
        """
        Declare that `count` bytes were written into the free tail.

        Raises:
            ValueError: If the count is negative or overruns the capacity.
        """
        if count < 0 or self._end + count > self.capacity:
            raise ValueError(
                f"Cannot add {count} bytes: only {self.capacity - self._end} bytes of space"
            )
        self._end += count

    def set_data(self, data: bytes | bytearray | memoryview) -> None:
        """
        Replace the buffer contents with `data`, starting at offset 0.

        Raises:
            ValueError: If `data` does not fit in the current capacity.
        """
        size = len(data)
        if size > self.capacity:
            raise ValueError(f"Cannot store {size} bytes in a buffer of capacity {self.capacity}")
        self._data[:size] = data
        self._begin = 0
        self._end = size

    def consume(self, count: int) -> memoryview:
        """
        Take the next `count` unread bytes as a read-only view.

        Raises:
            ValueError: If fewer than `count` bytes are buffered.
        """
        self._check_available(count)
        start = self._begin
        self._begin += count
        return memoryview(self._data)[start : start + count].toreadonly()

    def copy_out_and_consume(self, count: int, dest: bytearray | memoryview) -> None:
        """
        Copy the next `count` unread bytes into `dest` and consume them.

        Raises:
            ValueError: If fewer than `count` bytes are buffered or `dest`
                is too small.
        """
        self._check_available(count)
        if len(dest) < count:
            raise ValueError(f"Destination of {len(dest)} bytes cannot hold {count} bytes")
        start = self._begin
        dest[:count] = self._data[start : start + count]
        self._begin += count

    def add_capacity(self, count: int) -> None:
        """Grow the backing region by `count` zero bytes, keeping existing contents."""
        if count < 0:
            raise ValueError(f"Cannot grow a buffer by {count} bytes")
        grown = bytearray(self.capacity + count)
        grown[: self.capacity] = self._data
        self._data = grown

    def _check_available(self, count: int) -> None:
        if count < 0 or count > self.buffered:
            raise ValueError(f"Cannot consume {count} bytes: only {self.buffered} buffered")

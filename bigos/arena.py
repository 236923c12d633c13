"""Bump allocator that hands out 4-byte aligned blocks from a fixed region."""

from __future__ import annotations

from bigos.bitutils import align_u32


class ArenaExhausted(MemoryError):
    """The arena has no room left for the requested block."""


class Arena:
    """A fixed-size region from which blocks are carved in order.

    Blocks are identified by their byte offset within the arena. Nothing is
    freed on its own; ``reset`` makes the whole region available again and
    invalidates every block handed out before.
    """

    ALIGNMENT = 4

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"arena size must be positive, got {size}")
        self.size = size
        self._offset = 0

    @property
    def used(self) -> int:
        """Bytes handed out since the last reset."""
        return self._offset

    @property
    def free(self) -> int:
        """Bytes still available."""
        return self.size - self._offset

    def allocate(self, size: int) -> int | None:
        """Reserve size bytes, rounded up to the alignment; return the block's offset.

        A request for zero bytes returns None. Raises ArenaExhausted when the
        block does not fit.
        """
        if size < 0:
            raise ValueError(f"cannot allocate a negative size ({size})")
        if size == 0:
            return None
        block = align_u32(size, self.ALIGNMENT)
        if self._offset + block > self.size:
            raise ArenaExhausted(
                f"cannot allocate {block} bytes: {self.free} of {self.size} bytes left"
            )
        start = self._offset
        self._offset += block
        return start

    def reset(self) -> None:
        """Make the whole arena available again."""
        self._offset = 0
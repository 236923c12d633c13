"""Bounds-checked read-only byte buffers."""

from __future__ import annotations

from dataclasses import dataclass

from bigos.bitutils import read_be32, read_be64, read_le32, read_le64


class BufferReadError(ValueError):
    """A read fell outside the buffer or the buffer is invalid."""


@dataclass(frozen=True)
class Buffer:
    """A view of bytes; a buffer whose data is None is invalid."""

    data: bytes | None = None

    def __post_init__(self) -> None:
        if self.data is not None and not isinstance(self.data, bytes):
            object.__setattr__(self, "data", bytes(self.data))

    @property
    def size(self) -> int:
        return 0 if self.data is None else len(self.data)

    @property
    def is_valid(self) -> bool:
        return self.data is not None

    def __len__(self) -> int:
        return self.size

    def is_empty(self) -> bool:
        """True if the buffer is invalid or holds no bytes."""
        return not self.is_valid or self.size == 0

    def _checked(self, offset: int, width: int) -> bytes:
        if self.data is None:
            raise BufferReadError("buffer is invalid")
        if offset < 0 or offset + width > len(self.data):
            raise BufferReadError(f"cannot read {width} bytes at offset {offset} from {len(self.data)} bytes")
        return self.data

    def read_u32_be(self, offset: int) -> int:
        """Read a big-endian 32-bit value at offset."""
        return read_be32(self._checked(offset, 4), offset)

    def read_u64_be(self, offset: int) -> int:
        """Read a big-endian 64-bit value at offset."""
        return read_be64(self._checked(offset, 8), offset)

    def read_u32_le(self, offset: int) -> int:
        """Read a little-endian 32-bit value at offset."""
        return read_le32(self._checked(offset, 4), offset)

    def read_u64_le(self, offset: int) -> int:
        """Read a little-endian 64-bit value at offset."""
        return read_le64(self._checked(offset, 8), offset)

    def read_cstring(self, offset: int) -> bytes:
        """Return the zero-terminated string at offset, without its terminator."""
        if self.data is None:
            raise BufferReadError("buffer is invalid")
        if offset < 0 or offset >= len(self.data):
            raise BufferReadError(f"offset {offset} outside buffer of {len(self.data)} bytes")
        end = self.data.find(b"\0", offset)
        if end < 0:
            raise BufferReadError(f"no terminator after offset {offset}")
        return self.data[offset:end]

    def sub_buffer(self, offset: int, max_size: int) -> Buffer:
        """Return up to max_size bytes from offset; invalid if offset lies past the end."""
        if self.data is None or offset < 0 or len(self.data) < offset:
            return Buffer(None)
        rest = len(self.data) - offset
        return Buffer(self.data[offset : offset + min(rest, max_size)])
"""Fixed-width integer reads and alignment helpers."""

from __future__ import annotations

_U32_MASK = 0xFFFFFFFF


def _read(data: bytes | bytearray | memoryview, offset: int, width: int, order: str) -> int:
    if offset < 0 or offset + width > len(data):
        raise ValueError(f"cannot read {width} bytes at offset {offset} from {len(data)} bytes")
    return int.from_bytes(bytes(data[offset : offset + width]), order)


def read_be32(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Read a big-endian 32-bit unsigned integer."""
    return _read(data, offset, 4, "big")


def read_be64(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Read a big-endian 64-bit unsigned integer."""
    return _read(data, offset, 8, "big")


def read_le32(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Read a little-endian 32-bit unsigned integer."""
    return _read(data, offset, 4, "little")


def read_le64(data: bytes | bytearray | memoryview, offset: int = 0) -> int:
    """Read a little-endian 64-bit unsigned integer."""
    return _read(data, offset, 8, "little")


def align_u32(num: int, align: int) -> int:
    """Round num up to a multiple of align (a power of two), with 32-bit wraparound."""
    return ((num + (align - 1)) & ~(align - 1)) & _U32_MASK
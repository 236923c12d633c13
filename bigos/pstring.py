"""Length-based byte strings with checked views over shared memory."""

from __future__ import annotations

from bigos.errors import BigOSError, ErrorCode

BytesLike = bytes | bytearray | memoryview | str


def _invalid_argument(what: str) -> BigOSError:
    return BigOSError(ErrorCode.INVALID_ARGUMENT, f"Invalid argument: {what}")


class PString:
    """A mutable, length-based view of bytes.

    Views made with ``slice_view`` or ``find`` share memory with the string
    they came from. A string without data is invalid: most operations on it
    raise ``BigOSError`` with ``ErrorCode.INVALID_ARGUMENT``.
    """

    __slots__ = ("_data",)
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, data: BytesLike | None = None) -> None:
        if data is None:
            self._data: memoryview | None = None
        elif isinstance(data, memoryview):
            self._data = memoryview(bytearray(data)) if data.readonly else data
        elif isinstance(data, bytearray):
            self._data = memoryview(data)
        elif isinstance(data, bytes):
            self._data = memoryview(bytearray(data))
        elif isinstance(data, str):
            self._data = memoryview(bytearray(data.encode("utf-8")))
        else:
            raise TypeError(f"cannot make a PString from {type(data).__name__}")

    @property
    def is_valid(self) -> bool:
        return self._data is not None

    def __len__(self) -> int:
        return 0 if self._data is None else len(self._data)

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PString):
            return NotImplemented
        if self._data is None or other._data is None:
            return self._data is None and other._data is None
        return bytes(self._data) == bytes(other._data)

    def __repr__(self) -> str:
        if self._data is None:
            return "PString(None)"
        return f"PString({bytes(self._data)!r})"

    def _view(self, what: str = "string") -> memoryview:
        if self._data is None:
            raise _invalid_argument(what)
        return self._data

    @staticmethod
    def _other(ps: PString | None, what: str) -> memoryview:
        if ps is None:
            raise _invalid_argument(what)
        return ps._view(what)

    def to_bytes(self) -> bytes:
        """Return a copy of the string's bytes."""
        return bytes(self._view())

    def fill(self, val: int) -> None:
        """Set every byte of the string to val."""
        data = self._view()
        data[:] = bytes([val & 0xFF]) * len(data)

    def copy_from(self, src: PString) -> None:
        """Copy as many bytes of src as fit into the start of this string."""
        dest = self._view("destination")
        source = self._other(src, "source")
        count = min(len(dest), len(source))
        if count:
            dest[:count] = bytes(source[:count])

    def move_from(self, src: PString, count: int) -> int:
        """Copy up to count bytes of src, safe for overlapping views; return bytes copied."""
        dest = self._view("destination")
        source = self._other(src, "source")
        if not dest or not source:
            return 0
        count = max(0, min(len(source), len(dest), count))
        dest[:count] = bytes(source[:count])
        return count

    def compare(self, other: PString) -> int:
        """Order by length first, then by the first differing byte."""
        lhs = self._view("left operand")
        rhs = self._other(other, "right operand")
        if len(lhs) != len(rhs):
            return -1 if len(lhs) < len(rhs) else 1
        return next((a - b for a, b in zip(lhs, rhs) if a != b), 0)

    def find(self, ch: int | str | bytes) -> PString | None:
        """Return a view from the first occurrence of ch to the end, or None."""
        data = self._view()
        if isinstance(ch, (str, bytes)):
            raw = ch.encode("latin-1") if isinstance(ch, str) else ch
            if len(raw) != 1:
                raise ValueError(f"expected a single byte, got {ch!r}")
            ch = raw[0]
        index = bytes(data).find(bytes([ch & 0xFF]))
        if index < 0:
            return None
        return PString(data[index:])

    def slice_view(self, start: int, end: int) -> PString:
        """Return a view of the bytes in [start, end), with end clamped to the length.

        An empty string or a start past the end gives an invalid string.
        """
        data = self._view()
        if start < 0:
            raise _invalid_argument("negative slice start")
        if len(data) == 0 or len(data) < start:
            return PString(None)
        end = min(len(data), end)
        if end < start:
            raise _invalid_argument("slice end before start")
        return PString(data[start:end])

    def cat(self, start: int, src: PString) -> int:
        """Write src into this string from position start; return bytes written."""
        dest = self._view("destination")
        source = self._other(src, "source")
        if start < 0:
            raise _invalid_argument("negative start")
        count = max(0, min(len(dest) - start, len(source)))
        if count:
            dest[start : start + count] = bytes(source[:count])
        return count

    def concat(self, first: PString, second: PString) -> int:
        """Fill this string with first followed by second, as far as fits; return bytes written."""
        dest = self._view("destination")
        joined = bytes(self._other(first, "first")) + bytes(self._other(second, "second"))
        count = min(len(dest), len(joined))
        if count:
            dest[:count] = joined[:count]
        return count


def wrap(text: BytesLike | None) -> PString:
    """Wrap a zero-terminated string; its length ends at the first zero byte.

    A bytearray or writable memoryview is shared, not copied.
    """
    if text is None:
        raise _invalid_argument("no string to wrap")
    if isinstance(text, str):
        view = memoryview(bytearray(text.encode("utf-8")))
    elif isinstance(text, bytes):
        view = memoryview(bytearray(text))
    elif isinstance(text, bytearray):
        view = memoryview(text)
    elif isinstance(text, memoryview):
        view = memoryview(bytearray(text)) if text.readonly else text
    else:
        raise TypeError(f"cannot wrap {type(text).__name__}")
    end = bytes(view).find(b"\0")
    return PString(view if end < 0 else view[:end])
"""Debug console output with printf-style formatting."""

from __future__ import annotations

import re
import sys
from typing import TextIO

_SPEC = re.compile(
    r"%(?P<flags>[-+ #0]*)(?P<width>\*|\d+)?(?:\.(?P<prec>\*|\d*))?"
    r"(?P<length>hh|h|ll|l|j|z|t|L)?(?P<conv>[diouxXcsp%])"
)

_LENGTH_BITS = {"hh": 8, "h": 16, "l": 64, "ll": 64, "j": 64, "z": 64, "t": 64, "L": 64}


def _format(fmt: str, args: tuple) -> str:
    remaining = iter(args)

    def take():
        try:
            return next(remaining)
        except StopIteration:
            raise TypeError("not enough arguments for format string") from None

    out: list[str] = []
    pos = 0
    for match in _SPEC.finditer(fmt):
        out.append(fmt[pos : match.start()])
        pos = match.end()
        conv = match["conv"]
        if conv == "%":
            out.append("%")
            continue

        flags = match["flags"]
        width = match["width"] or ""
        if width == "*":
            width = str(int(take()))
        prec = match["prec"]
        if prec == "*":
            prec = str(max(int(take()), 0))
        elif prec == "":
            prec = "0"
        precision = f".{prec}" if prec is not None else ""

        value = take()
        bits = _LENGTH_BITS.get(match["length"] or "", 32)
        if conv in "di":
            conv = "d"
            value = int(value)
        elif conv in "uoxX":
            value = int(value) & ((1 << bits) - 1)
            if conv == "u":
                conv = "d"
        elif conv == "p":
            value = int(value) & ((1 << 64) - 1)
            conv = "x"
            if "#" not in flags:
                flags += "#"
        elif conv == "c":
            if isinstance(value, str):
                conv = "s"
            else:
                value = int(value) & 0xFF
        elif conv == "s":
            if isinstance(value, (bytes, bytearray)):
                value = bytes(value).decode("latin-1")
            elif value is None:
                value = "(null)"
            else:
                value = str(value)
        out.append(f"%{flags}{width}{precision}{conv}" % value)
    out.append(fmt[pos:])
    return "".join(out)


class DebugConsole:
    """Character output to a text stream; standard output when none is given."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def putc(self, c: str | int) -> None:
        """Write one character, given as a one-character string or a byte value."""
        if isinstance(c, int):
            c = chr(c & 0xFF)
        if len(c) != 1:
            raise ValueError(f"expected a single character, got {c!r}")
        self.stream.write(c)

    def puts(self, s: str) -> None:
        """Write a string."""
        self.stream.write(s)

    def putgap(self, gap_size: int) -> None:
        """Write gap_size tab characters."""
        self.stream.write("\t" * max(gap_size, 0))

    def printf(self, fmt: str, *args) -> None:
        """Write text formatted with C printf conversions (no floating point)."""
        self.stream.write(_format(fmt, args))
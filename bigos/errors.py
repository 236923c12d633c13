"""Kernel error codes, panics and assertions."""

from __future__ import annotations

import enum
import inspect
import os

from bigos.debug import DebugConsole

_console = DebugConsole()


class ErrorCode(enum.IntEnum):
    """Error codes shared by the kernel libraries."""

    NONE = 0
    INVALID_ARGUMENT = 1
    ASSERTION_FAILED = 2
    CRITICAL_INTERNAL_FAILURE = 3
    HARDWARE_NOT_COMPATIBLE = 4
    ALL_ADDRESS_SPACES_IN_USE = 5
    PHYSICAL_MEMORY_FULL = 6
    MALLOC_FAILED = 7
    MT_MOUNTPOINT_EXISTS = 8
    MT_TRIED_TO_ADD_EDGE_WHICH_EXISTS = 9
    MT_UNKNOWN = 10


_MESSAGES = {
    ErrorCode.NONE: "",
    ErrorCode.INVALID_ARGUMENT: "Invalid argument",
    ErrorCode.MALLOC_FAILED: "Malloc failed",
    ErrorCode.MT_MOUNTPOINT_EXISTS: "Mount point already exists",
    ErrorCode.MT_UNKNOWN: "Unknown Mount Tree error",
}

_DEFAULT_MESSAGE = "Error message was not provided"


def error_message(err: ErrorCode | int) -> str:
    """Return the human readable message for an error code."""
    try:
        code = ErrorCode(err)
    except ValueError:
        return _DEFAULT_MESSAGE
    return _MESSAGES.get(code, _DEFAULT_MESSAGE)


class BigOSError(Exception):
    """An operation failed with one of the kernel error codes."""

    def __init__(self, code: ErrorCode | int, message: str | None = None) -> None:
        self.code = ErrorCode(code)
        super().__init__(message if message is not None else error_message(self.code))


class KernelPanic(Exception):
    """The kernel hit an unrecoverable condition."""


def error(msg: str) -> None:
    """Report a non-fatal error on the debug console."""
    _console.puts("BURNT: ")
    _console.puts(msg)
    _console.puts("\n")


def panic(msg: str) -> None:
    """Report a fatal error on the debug console and raise KernelPanic."""
    _console.puts("OVERCOOKED: ")
    _console.puts(msg)
    _console.puts("\n")
    raise KernelPanic(msg)


def kassert(condition: object, expression: str) -> None:
    """Panic with the failed expression and caller location unless condition holds."""
    if condition:
        return
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    if caller is not None:
        location = f"{os.path.basename(caller.f_code.co_filename)}@{caller.f_lineno}: "
    else:
        location = "?@?: "
    del frame, caller
    error(location)
    panic(f"Assertion failed: {expression}")
"""Trap cause decoding for 64-bit machine registers."""

from __future__ import annotations

import enum

_XLEN = 64
_REG_MASK = (1 << _XLEN) - 1
_INTERRUPT_BIT = 1 << (_XLEN - 1)


class InterruptType(enum.IntEnum):
    """Standard interrupt codes; the others are reserved or platform defined."""

    S_SOFTWARE = 1
    M_SOFTWARE = 3
    S_TIMER = 5
    M_TIMER = 7
    S_EXTERNAL = 9
    M_EXTERNAL = 11


class ExceptionType(enum.IntEnum):
    """Standard synchronous exception codes."""

    ADDRESS_MISALIGNED = 0
    INSTR_ACCESS_FAULT = 1
    ILLEGAL_INSTR = 2
    BREAKPOINT = 3
    LOAD_ADDR_MISALIGNED = 4
    LOAD_ACCESS_FAULT = 5
    STORE_ADDRESS_MISALIGNED = 6
    STORE_ACCESS_FAULT = 7
    ENV_CALL_U = 8
    ENV_CALL_S = 9
    ENV_CALL_M = 11
    INSTR_PAGE_FAULT = 12
    LOAD_PAGE_FAULT = 13
    STORE_PAGE_FAULT = 15


def _register(cause: int) -> int:
    return int(cause) & _REG_MASK


def is_interrupt(cause: int) -> bool:
    """True if the cause register describes an interrupt (its top bit is set)."""
    return bool(_register(cause) & _INTERRUPT_BIT)


def interrupt_code(cause: int) -> InterruptType | int:
    """Strip the interrupt bit; known codes come back as InterruptType."""
    code = _register(cause) & ~_INTERRUPT_BIT
    try:
        return InterruptType(code)
    except ValueError:
        return code


def exception_code(cause: int) -> ExceptionType | int:
    """Return the cause as an exception code; known codes come back as ExceptionType."""
    code = _register(cause)
    try:
        return ExceptionType(code)
    except ValueError:
        return code
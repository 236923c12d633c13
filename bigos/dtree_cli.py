"""Command that parses a device tree blob, reports the UART and prints the tree."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from bigos.buffer import BufferReadError
from bigos.debug import DebugConsole
from bigos.devicetree import FdtError, parse_fdt

DEFAULT_UART_PATH = "/soc/serial@10000000"


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bigos-dtree",
        description="Parse a flattened device tree blob, report the serial node and print the tree.",
    )
    parser.add_argument("fdt", type=Path, help="path of the flattened device tree blob")
    parser.add_argument(
        "--node",
        default=DEFAULT_UART_PATH,
        help=f"path of the serial node to report (default: {DEFAULT_UART_PATH})",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Run the command; return the exit status."""
    args = _parser().parse_args(argv)
    console = DebugConsole()

    try:
        blob = args.fdt.read_bytes()
    except OSError as exc:
        print(f"cannot read {args.fdt}: {exc}", file=sys.stderr)
        return 1

    try:
        tree = parse_fdt(blob)
    except FdtError:
        console.printf("DT_INIT FAILED\n")
        return 1

    uart = tree.find(args.node)
    if uart is None:
        console.printf("UART node not found\n")
    else:
        console.printf("Found UART node: %s\n", uart.name)
        try:
            base = uart.prop("reg").read_u64_be(0)
        except BufferReadError:
            console.printf('"reg" prop missing or invalid\n')
        else:
            console.printf("UART base: 0x%lx\n", base)

    tree.root.print_tree(console, 0)
    return 0


if __name__ == "__main__":
    sys.exit(main())
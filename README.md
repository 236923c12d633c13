# bigos

Small building blocks for a hobby RISC-V kernel, usable from plain Python:

- **Device tree**: `bigos.devicetree.parse_fdt` parses a flattened device
  tree blob of version 17 or older. It returns a `DeviceTree`, which is a
  tree of `Node` objects holding `Property` values. `DeviceTree.find(path)`
  looks a node up by its absolute path. `Node.prop(name)` returns a
  property's value as a `Buffer`, or an invalid `Buffer` when the node has
  no such property. `Node.children()`, `Node.child_count()`,
  `Node.print_props()` and `Node.print_tree()` cover the rest. Parsing
  counts node and property records against a fixed-size `bigos.arena.Arena`,
  so very large trees are rejected.
- **Buffers and bit utilities**: `bigos.buffer.Buffer` does bounds-checked
  big- and little-endian reads (`read_u32_be`, `read_u64_be`, `read_u32_le`,
  `read_u64_le`), reads zero-terminated strings (`read_cstring`) and returns
  sub-buffers (`sub_buffer`). `bigos.bitutils` provides `read_be32`,
  `read_be64`, `read_le32`, `read_le64` and `align_u32`.
- **Length-checked strings**: `bigos.pstring.PString` is a mutable,
  length-based byte string. It offers `compare`, `find`, `slice_view`,
  `copy_from`, `move_from`, `cat`, `concat` and `fill`. Views made by
  `find` and `slice_view` share memory with the string they come from.
  `bigos.pstring.wrap` cuts a string at its first zero byte.
- **Traps**: `bigos.trap.is_interrupt`, `interrupt_code` and
  `exception_code` decode a 64-bit cause register value. Known codes come
  back as `InterruptType` or `ExceptionType`; unknown codes come back as
  plain integers.
- **Virtual file system**: `bigos.vfs.VfsPath` yields the `/`-separated
  edges of a path. A leading `/` gives an empty first edge.
  `bigos.mount_tree.MountNode` keeps a tree of mount points, with `step`,
  `walk`, `add_mountpoint` and `clear`. `bigos.protocol` defines the request
  and response messages of the file system server protocol as frozen
  dataclasses that check their field widths. `response_for` gives the
  response type that answers each request type.
- **Errors and debug output**: `bigos.errors` defines `ErrorCode`,
  `error_message`, `BigOSError` and `KernelPanic`. It also defines `error`,
  which writes `BURNT: <msg>`, and `panic`, which writes
  `OVERCOOKED: <msg>` and then raises `KernelPanic`. `kassert` panics with
  the failed expression and the caller's location. `bigos.debug.DebugConsole`
  writes to a text stream, standard output by default. It provides `putc`,
  `puts`, `putgap` and a C-style `printf` that has no floating-point
  conversions.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Printing a device tree

```
bigos-dtree board.dtb
bigos-dtree board.dtb --node /soc/serial@10000000
```

The command parses the blob and looks up the serial node. By default that
node is `/soc/serial@10000000`; `--node` chooses another path. The command
prints the node's name and the base address from its `reg` property. It
then prints every node with the names of its properties. If the blob cannot
be parsed, it prints `DT_INIT FAILED` and exits with status 1.

## Using the library

```python
from bigos.bitutils import align_u32
from bigos.buffer import BufferReadError
from bigos.devicetree import parse_fdt

with open("board.dtb", "rb") as f:
    tree = parse_fdt(f.read())

uart = tree.find("/soc/serial@10000000")
if uart is not None:
    try:
        print(hex(uart.prop("reg").read_u64_be(0)))
    except BufferReadError:
        print("no usable reg property")

assert align_u32(5, 4) == 8
```

Failures raise exceptions rather than returning status codes:

- A read outside a `Buffer`, or from an invalid one, raises
  `BufferReadError`.
- A malformed or unsupported blob raises `FdtError`. Its `code` attribute
  tells which check failed.
- Most operations on a `PString` without data raise `BigOSError` with
  `ErrorCode.INVALID_ARGUMENT`.
- Mounting a second service at the same point of a `MountNode` tree raises
  `MountpointExists`.

## What this package does not do

- `bigos.protocol` only describes messages. It does not encode them to
  bytes or decode them, and it includes no file system server or client
  that exchanges them.
- `MountNode` stores whatever object it is given as a service and does
  nothing with it.
- `DebugConsole` writes to a Python text stream. The package does not talk
  to hardware, boot anything, or make firmware calls.
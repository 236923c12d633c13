"""Flattened device tree parsing and lookup."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field

from bigos.arena import Arena, ArenaExhausted
from bigos.bitutils import align_u32, read_be32
from bigos.buffer import Buffer, BufferReadError
from bigos.debug import DebugConsole

_log = logging.getLogger(__name__)

FDT_MAGIC = 0xD00DFEED
FDT_COMPATIBLE_VERSION = 17

FDT_OFF_MAGIC = 0x00
FDT_OFF_TOTAL_SIZE = 0x04
FDT_OFF_OFF_DT_STRUCT = 0x08
FDT_OFF_OFF_DT_STRINGS = 0x0C
FDT_OFF_MEM_RSVMAP = 0x10
FDT_OFF_VERSION = 0x14
FDT_OFF_LAST_COMP_VERSION = 0x18
FDT_OFF_BOOT_CPUID_PHYS = 0x1C
FDT_OFF_SIZE_DT_STRINGS = 0x20
FDT_OFF_SIZE_DT_STRUCT = 0x24

DT_ARENA_SIZE = 32760
NODE_SIZE = 48
PROP_SIZE = 32
MAX_PATH_SEGMENT = 64

_U32_MASK = 0xFFFFFFFF


class _Token(enum.IntEnum):
    BEGIN_NODE = 0x1
    END_NODE = 0x2
    PROP = 0x3
    NOP = 0x4
    END = 0x9


class FdtError(ValueError):
    """The blob is not a device tree this parser accepts.

    ``code`` tells which stage failed: -1 bad header, -2 unreadable header
    field, -3 unsupported version or inconsistent sizes, -5 bad structure.
    """

    def __init__(self, code: int, message: str) -> None:
        self.code = code
        super().__init__(message)


@dataclass
class Property:
    """A named property and its raw value."""

    name: str
    data: Buffer


@dataclass(eq=False)
class Node:
    """A device tree node with its properties and ordered children."""

    name: str
    parent: Node | None = field(default=None, repr=False)
    props: list[Property] = field(default_factory=list)
    phandle: int = 0
    _children: list[Node] = field(default_factory=list, init=False, repr=False)

    def children(self) -> list[Node]:
        """The node's children, in blob order."""
        return list(self._children)

    def child_count(self) -> int:
        """Number of direct children."""
        return len(self._children)

    @property
    def next_sibling(self) -> Node | None:
        """The following child of the same parent, or None for the last one."""
        if self.parent is None:
            return None
        siblings = self.parent._children
        for position, sibling in enumerate(siblings):
            if sibling is self:
                return siblings[position + 1] if position + 1 < len(siblings) else None
        return None

    def prop(self, name: str | None) -> Buffer:
        """Value of the named property; an invalid buffer if there is none."""
        if name is None:
            return Buffer(None)
        return next((p.data for p in self.props if p.name == name), Buffer(None))

    def print_props(self, console: DebugConsole, depth: int = 0) -> None:
        """Write the property names, one per line, indented by depth tabs."""
        for prop in self.props:
            console.putgap(depth)
            console.printf("%s\n", prop.name)

    def print_tree(self, console: DebugConsole, depth: int = 0) -> None:
        """Write this node, its property names and its whole subtree."""
        console.putgap(depth)
        console.printf("NODE: %s\n", self.name)
        console.putgap(depth)
        console.printf("PROPERTIES:\n")
        inner = (depth + 1) & 0xFF
        self.print_props(console, inner)
        console.putc("\n")
        for child in self._children:
            child.print_tree(console, inner)


@dataclass
class DeviceTree:
    """A parsed device tree."""

    root: Node
    arena: Arena = field(repr=False, default_factory=lambda: Arena(DT_ARENA_SIZE))

    def find(self, path: str | None) -> Node | None:
        """Look a node up by its absolute path, such as ``/soc/serial@10000000``."""
        if not path or not path.startswith("/"):
            return None
        if path == "/":
            return self.root
        current = self.root
        rest = path[1:]
        while rest:
            segment, _, remainder = rest.partition("/")
            if not segment:
                break
            if len(segment.encode("utf-8")) >= MAX_PATH_SEGMENT:
                return None
            current = next((c for c in current._children if c.name == segment), None)
            if current is None:
                return None
            rest = remainder
        return current


class _Parser:
    def __init__(self, buf: Buffer, max_offset: int, strings_offset: int, arena: Arena) -> None:
        self.buf = buf
        self.max_offset = max_offset
        self.strings_offset = strings_offset
        self.arena = arena

    def _u32(self, offset: int) -> int | None:
        try:
            return self.buf.read_u32_be(offset)
        except BufferReadError:
            return None

    def _cstring(self, offset: int) -> bytes | None:
        try:
            return self.buf.read_cstring(offset)
        except BufferReadError:
            return None

    def _alloc(self, size: int) -> bool:
        try:
            self.arena.allocate(size)
        except ArenaExhausted:
            return False
        return True

    def parse_props(self, props_offset: int, props_size: int) -> list[Property] | None:
        curr = props_offset
        end = (props_offset + props_size) & _U32_MASK
        props: list[Property] = []
        while curr < end:
            tag = self._u32(curr)
            if tag is None:
                return None
            if tag != _Token.PROP:
                break
            curr += 4
            length = self._u32(curr)
            name_offset = self._u32(curr + 4)
            if length is None or name_offset is None:
                return None
            curr += 8
            name = self._cstring((self.strings_offset + name_offset) & _U32_MASK)
            if name is None:
                return None
            if not self._alloc(PROP_SIZE):
                return None
            data = self.buf.sub_buffer(curr, length)
            if not data.is_valid:
                return None
            props.append(Property(name.decode("latin-1"), data))
            curr = align_u32(curr + length, 4)
        return props

    def parse_subtree(self, offset: int, parent: Node | None) -> tuple[Node, int] | None:
        """Parse the node whose name starts at offset; return it and the offset after it."""
        if not self._alloc(NODE_SIZE):
            return None

        curr = offset
        if self._u32(curr - 4) != _Token.BEGIN_NODE:
            return None
        name = self._cstring(curr)
        if name is None:
            return None
        node = Node(name.decode("latin-1"), parent)
        curr = align_u32(curr + len(name) + 1, 4)

        props_offset = curr
        while curr < self.max_offset:
            tag = self._u32(curr)
            if tag is None:
                return None
            if tag != _Token.PROP:
                break
            length = self._u32(curr + 4)
            if length is None:
                return None
            curr = align_u32(curr + 12 + length, 4)

        node.props = self.parse_props(props_offset, curr - props_offset) or []
        curr = align_u32(curr, 4)

        while curr < self.max_offset:
            tag = self._u32(curr)
            if tag is None:
                return None
            curr += 4
            if tag == _Token.BEGIN_NODE:
                parsed = self.parse_subtree(curr, node)
                if parsed is not None:
                    child, curr = parsed
                    node._children.append(child)
            elif tag == _Token.NOP:
                continue
            elif tag in (_Token.END_NODE, _Token.END):
                return node, curr
            else:
                _log.debug("Invalid FDT structure")
                return None

        _log.debug("Invalid FDT structure")
        return None


def parse_fdt(fdt: bytes | bytearray | memoryview | None) -> DeviceTree:
    """Parse a flattened device tree blob into a DeviceTree; raise FdtError on failure."""
    if fdt is None:
        raise FdtError(-1, "no device tree blob given")
    data = bytes(fdt)
    if len(data) < 8:
        raise FdtError(-1, "device tree blob is too short")
    if read_be32(data, FDT_OFF_MAGIC) != FDT_MAGIC:
        raise FdtError(-1, "bad device tree magic")

    buf = Buffer(data[: read_be32(data, FDT_OFF_TOTAL_SIZE)])
    if buf.size < FDT_OFF_OFF_DT_STRINGS + 4:
        raise FdtError(-1, "device tree header does not fit in the declared size")

    try:
        total_size = buf.read_u32_be(FDT_OFF_TOTAL_SIZE)
        struct_offset = buf.read_u32_be(FDT_OFF_OFF_DT_STRUCT)
        strings_offset = buf.read_u32_be(FDT_OFF_OFF_DT_STRINGS)
        struct_size = buf.read_u32_be(FDT_OFF_SIZE_DT_STRUCT)
        version = buf.read_u32_be(FDT_OFF_VERSION)
    except BufferReadError as exc:
        raise FdtError(-2, f"cannot read device tree header: {exc}") from exc

    if version > FDT_COMPATIBLE_VERSION:
        raise FdtError(-3, f"unsupported device tree version {version}")
    struct_end = (struct_offset + struct_size) & _U32_MASK
    if struct_end > total_size:
        raise FdtError(-3, "structure block extends past the end of the blob")

    arena = Arena(DT_ARENA_SIZE)
    parser = _Parser(buf, struct_end, strings_offset, arena)
    parsed = parser.parse_subtree(struct_offset + 4, None)
    if parsed is None:
        raise FdtError(-5, "invalid device tree structure")
    return DeviceTree(parsed[0], arena)
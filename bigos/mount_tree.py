"""Tree of mount points reached by walking path edges."""

from __future__ import annotations

from dataclasses import dataclass, field

from bigos.errors import BigOSError, ErrorCode
from bigos.pstring import PString
from bigos.vfs import PathLike, VfsPath


class MountpointExists(BigOSError):
    """A service is already mounted at the requested path."""

    def __init__(self) -> None:
        super().__init__(ErrorCode.MT_MOUNTPOINT_EXISTS)


@dataclass
class _Edge:
    label: PString
    to: MountNode


def _as_label(label: PString | str | bytes | bytearray) -> PString:
    return label if isinstance(label, PString) else PString(label)


def _as_path(path: VfsPath | PathLike) -> VfsPath:
    if isinstance(path, VfsPath):
        return VfsPath(path.path)
    return VfsPath(path)


@dataclass(eq=False)
class MountNode:
    """A node of the mount tree, optionally holding a mounted service."""

    service: object = None
    _edges: list[_Edge] = field(default_factory=list, init=False, repr=False)

    @property
    def labels(self) -> list[bytes]:
        """Labels of the outgoing edges, newest first."""
        return [edge.label.to_bytes() for edge in self._edges]

    def step(self, label: PString | str | bytes | bytearray | None) -> MountNode | None:
        """Follow the edge with the given label; None if there is none."""
        if label is None:
            return None
        wanted = _as_label(label)
        for edge in self._edges:
            if edge.label.compare(wanted) == 0:
                return edge.to
        return None

    def walk(self, path: VfsPath) -> tuple[MountNode, bool]:
        """Walk path from this node.

        Returns the deepest node reached and whether the whole path was
        walked. The path is advanced past every edge that was walked, so on
        failure it holds the suffix that could not be walked.
        """
        node = self
        while True:
            probe = VfsPath(path.path)
            edge = probe.next_edge()
            if edge is None:
                return node, True
            following = node.step(edge)
            if following is None:
                return node, False
            node = following
            path.path = probe.path

    def add_mountpoint(self, path: VfsPath | PathLike, service: object) -> MountNode:
        """Mount service at path below this node, creating nodes as needed.

        Raises MountpointExists if a service is already mounted there.
        """
        remaining = _as_path(path)
        node, complete = self.walk(remaining)
        if not complete:
            for label in remaining:
                child = MountNode()
                node._edges.insert(0, _Edge(PString(label.to_bytes()), child))
                node = child
        if node.service is not None:
            raise MountpointExists()
        node.service = service
        return node

    def clear(self) -> None:
        """Drop the whole subtree below this node."""
        for edge in self._edges:
            edge.to.clear()
        self._edges.clear()
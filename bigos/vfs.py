"""Virtual file system paths."""

from __future__ import annotations

from bigos.pstring import PString

PathLike = PString | str | bytes | bytearray | None


class VfsPath:
    """A view of a path that yields its '/'-separated edges one by one.

    A leading '/' gives an empty first edge, and a trailing '/' adds no
    edge. Edges are views that share memory with the path they came from.
    """

    __slots__ = ("path",)

    def __init__(self, path: PathLike = None) -> None:
        self.path: PString = path if isinstance(path, PString) else PString(path)

    def __repr__(self) -> str:
        return f"VfsPath({self.path!r})"

    def __len__(self) -> int:
        return len(self.path)

    def next_edge(self) -> PString | None:
        """Remove and return the next edge, or return None when the path is used up."""
        current = self.path
        if len(current) == 0:
            return None
        rest = current.find("/")
        split = len(current) - len(rest) if rest is not None else len(current)
        edge = current.slice_view(0, split)
        self.path = current.slice_view(split + 1, len(current))
        return edge

    def __iter__(self) -> VfsPath:
        return self

    def __next__(self) -> PString:
        edge = self.next_edge()
        if edge is None:
            raise StopIteration
        return edge
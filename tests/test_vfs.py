import pytest

from bigos.errors import BigOSError
from bigos.pstring import PString
from bigos.vfs import VfsPath


def edges(path):
    return [edge.to_bytes() for edge in VfsPath(path)]


def test_absolute_path_starts_with_empty_edge():
    assert edges("/foo/bar/baz/file.c") == [b"", b"foo", b"bar", b"baz", b"file.c"]


def test_relative_path():
    assert edges("foo/bar") == [b"foo", b"bar"]


def test_single_edge():
    assert edges("file.c") == [b"file.c"]


def test_trailing_slash_adds_no_edge():
    assert edges("a/b/") == [b"a", b"b"]


def test_double_slash_gives_empty_edge():
    assert edges("a//b") == [b"a", b"", b"b"]


def test_empty_and_missing_paths_have_no_edges():
    assert edges("") == []
    assert edges(None) == []
    assert VfsPath(None).next_edge() is None


def test_next_edge_consumes_path():
    path = VfsPath("ab/cd")
    first = path.next_edge()
    assert first.to_bytes() == b"ab"
    assert path.path.to_bytes() == b"cd"
    second = path.next_edge()
    assert second.to_bytes() == b"cd"
    assert len(path) == 0
    assert path.next_edge() is None


def test_edges_share_memory_with_path():
    buf = bytearray(b"ab/cd")
    edge = next(VfsPath(PString(buf)))
    buf[0] = ord("x")
    assert edge.to_bytes() == b"xb"


def test_iteration_is_exhausted_once():
    path = VfsPath("x/y")
    assert len(list(path)) == 2
    assert list(path) == []


def test_empty_edge_is_valid_and_comparable():
    edge = VfsPath("/a").next_edge()
    assert edge.is_valid
    assert edge.compare(PString(b"")) == 0


def test_invalid_edge_cannot_be_compared():
    with pytest.raises(BigOSError):
        PString(None).compare(VfsPath("a").next_edge())
import pytest

from bigos.errors import BigOSError, ErrorCode
from bigos.mount_tree import MountNode, MountpointExists
from bigos.pstring import PString
from bigos.vfs import VfsPath


def test_new_root_is_empty():
    root = MountNode()
    assert root.service is None
    assert root.labels == []
    assert root.step("x") is None
    assert root.step(None) is None


def test_walk_of_empty_path_stays_put():
    root = MountNode()
    node, complete = root.walk(VfsPath(""))
    assert node is root
    assert complete is True


def test_mount_and_walk_back():
    root = MountNode()
    service = object()
    mounted = root.add_mountpoint("/dev", service)
    assert mounted.service is service
    node, complete = root.walk(VfsPath("/dev"))
    assert complete is True
    assert node is mounted


def test_step_by_step_reaches_mountpoint():
    root = MountNode()
    mounted = root.add_mountpoint("/dev", "devfs")
    assert root.step("").step("dev") is mounted
    assert root.step(PString(b"")).step(b"dev") is mounted


def test_mount_twice_raises():
    root = MountNode()
    root.add_mountpoint("/dev", "first")
    with pytest.raises(MountpointExists) as info:
        root.add_mountpoint("/dev", "second")
    assert info.value.code == ErrorCode.MT_MOUNTPOINT_EXISTS
    assert str(info.value) == "Mount point already exists"
    assert root.walk(VfsPath("/dev"))[0].service == "first"


def test_mountpoint_exists_is_a_bigos_error():
    root = MountNode()
    root.add_mountpoint("a", 1)
    with pytest.raises(BigOSError):
        root.add_mountpoint("a", 2)


def test_nested_mount_reuses_existing_nodes():
    root = MountNode()
    dev = root.add_mountpoint("/dev", "devfs")
    tty = root.add_mountpoint("/dev/tty", "ttyfs")
    assert dev.step("tty") is tty
    assert root.labels == [b""]


def test_mount_on_intermediate_node_after_deeper_mount():
    root = MountNode()
    deep = root.add_mountpoint("a/b", "deep")
    mid = root.add_mountpoint("a", "mid")
    assert mid.step("b") is deep
    assert mid.service == "mid"


def test_new_edges_go_to_front():
    root = MountNode()
    root.add_mountpoint("a", 1)
    root.add_mountpoint("b", 2)
    assert root.labels == [b"b", b"a"]


def test_failed_walk_leaves_unwalked_suffix():
    root = MountNode()
    dev = root.add_mountpoint("/dev", "devfs")
    path = VfsPath("/dev/missing/x")
    node, complete = root.walk(path)
    assert complete is False
    assert node is dev
    assert [edge.to_bytes() for edge in path] == [b"missing", b"x"]


def test_add_mountpoint_does_not_consume_given_path():
    root = MountNode()
    path = VfsPath("a/b")
    root.add_mountpoint(path, "svc")
    assert path.path.to_bytes() == b"a/b"


def test_labels_are_copied():
    buf = bytearray(b"mnt")
    root = MountNode()
    mounted = root.add_mountpoint(PString(buf), "svc")
    buf[0] = ord("x")
    assert root.labels == [b"mnt"]
    assert root.step("mnt") is mounted


def test_clear_drops_subtree():
    root = MountNode()
    root.add_mountpoint("a/b", "svc")
    child = root.step("a")
    root.clear()
    assert root.labels == []
    assert root.step("a") is None
    assert child.labels == []


def test_step_with_invalid_label_raises():
    root = MountNode()
    root.add_mountpoint("a", "svc")
    with pytest.raises(BigOSError) as info:
        root.step(PString(None))
    assert info.value.code == ErrorCode.INVALID_ARGUMENT
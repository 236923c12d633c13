import pytest

from bigos.errors import BigOSError, ErrorCode
from bigos.pstring import PString, wrap


def test_wrap_round_trip():
    assert wrap("hello").to_bytes() == b"hello"
    assert len(wrap(b"hello")) == len(b"hello")


def test_wrap_stops_at_terminator():
    assert wrap(b"ab\0cd").to_bytes() == b"ab"


def test_wrap_none_is_invalid_argument():
    with pytest.raises(BigOSError) as info:
        wrap(None)
    assert info.value.code is ErrorCode.INVALID_ARGUMENT


def test_wrap_bytearray_shares_memory():
    buf = bytearray(b"xyz")
    ps = wrap(buf)
    ps.fill(ord("q"))
    assert set(buf) == {ord("q")}


def test_invalid_string_has_zero_length_and_raises():
    ps = PString()
    assert len(ps) == 0
    assert not ps.is_valid
    with pytest.raises(BigOSError) as info:
        ps.to_bytes()
    assert info.value.code is ErrorCode.INVALID_ARGUMENT
    with pytest.raises(BigOSError):
        ps.fill(0)
    with pytest.raises(BigOSError):
        wrap("a").compare(ps)
    with pytest.raises(BigOSError):
        wrap("a").copy_from(None)


def test_copy_from_copies_shorter_length():
    dest = wrap(bytearray(b"...."))
    src = wrap(b"ab")
    dest.copy_from(src)
    assert dest.to_bytes()[:2] == src.to_bytes()
    assert dest.to_bytes()[2:] == b"...."[2:]


def test_copy_from_longer_source_fills_destination():
    dest = wrap(bytearray(b"xx"))
    dest.copy_from(wrap("abcdef"))
    assert dest.to_bytes() == b"abcdef"[:2]


def test_move_from_overlapping_views():
    buf = bytearray(b"abcdef")
    whole = wrap(buf)
    dst = whole.slice_view(2, 6)
    src = whole.slice_view(0, 4)
    assert dst.move_from(src, 4) == 4
    assert bytes(buf) == b"ababcd"


def test_move_from_clamps_count():
    dest = wrap(bytearray(b"zzz"))
    src = wrap(b"abcdef")
    moved = dest.move_from(src, 100)
    assert moved == len(dest)
    assert dest.to_bytes() == b"abcdef"[:moved]


def test_move_from_empty_source_moves_nothing():
    dest = wrap(bytearray(b"zzz"))
    assert dest.move_from(wrap(b""), 2) == 0
    assert dest.to_bytes() == b"zzz"


def test_compare_equal():
    assert wrap("same").compare(wrap("same")) == 0


def test_compare_orders_by_length_first():
    assert wrap("zz").compare(wrap("aaa")) == -1
    assert wrap("aaa").compare(wrap("zz")) == 1


@pytest.mark.parametrize("lhs,rhs", [("abc", "abd"), ("a", "z"), ("foo", "goo")])
def test_compare_same_length_is_antisymmetric(lhs, rhs):
    forward = wrap(lhs).compare(wrap(rhs))
    backward = wrap(rhs).compare(wrap(lhs))
    assert forward < 0
    assert backward == -forward


def test_find_returns_view_to_end():
    found = wrap("foo/bar").find("/")
    assert found.to_bytes() == b"foo/bar"[3:]


def test_find_missing_returns_none():
    assert wrap("foobar").find(ord("/")) is None


def test_find_view_shares_memory():
    buf = bytearray(b"key=value")
    tail = wrap(buf).find("=")
    tail.fill(ord("-"))
    assert bytes(buf[:3]) == b"key"
    assert set(buf[3:]) == {ord("-")}


def test_slice_view_contents_and_clamp():
    ps = wrap("abcdef")
    assert ps.slice_view(1, 3).to_bytes() == b"abcdef"[1:3]
    assert ps.slice_view(2, 1000).to_bytes() == b"abcdef"[2:]


def test_slice_view_at_end_is_valid_and_empty():
    view = wrap("abc").slice_view(3, 3)
    assert view.is_valid
    assert len(view) == 0


def test_slice_view_past_end_is_invalid():
    assert not wrap("abc").slice_view(4, 10).is_valid
    assert not wrap("").slice_view(0, 0).is_valid


def test_slice_view_end_before_start_raises():
    with pytest.raises(BigOSError):
        wrap("abcdef").slice_view(4, 2)


def test_cat_writes_from_position_and_is_bounded():
    dest = wrap(bytearray(b"......"))
    src = wrap("XYZW")
    written = dest.cat(4, src)
    assert written == len(dest) - 4
    assert dest.to_bytes() == b"...." + src.to_bytes()[:written]


def test_cat_past_end_writes_nothing():
    dest = wrap(bytearray(b"..."))
    assert dest.cat(10, wrap("ab")) == 0
    assert dest.to_bytes() == b"..."


def test_concat_fits():
    dest = wrap(bytearray(b"........"))
    written = dest.concat(wrap("abc"), wrap("de"))
    assert written == len("abc") + len("de")
    assert dest.to_bytes()[:written] == b"abc" + b"de"


def test_concat_truncates_to_destination():
    dest = wrap(bytearray(b"...."))
    written = dest.concat(wrap("abc"), wrap("de"))
    assert written == len(dest)
    assert dest.to_bytes() == (b"abc" + b"de")[: len(dest)]


def test_equality_compares_contents():
    assert wrap("abc") == PString(b"abc")
    assert PString() == PString(None)
    assert not (wrap("abc") == PString())
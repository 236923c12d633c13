import pytest

from bigos.arena import Arena, ArenaExhausted


def test_first_block_starts_at_zero():
    arena = Arena(64)
    assert arena.allocate(4) == 0
    assert arena.used == 4


def test_blocks_are_four_byte_aligned():
    arena = Arena(64)
    first = arena.allocate(5)
    second = arena.allocate(1)
    assert first == 0
    assert second == 8
    assert second % Arena.ALIGNMENT == 0


def test_zero_size_returns_none_and_uses_nothing():
    arena = Arena(16)
    assert arena.allocate(0) is None
    assert arena.used == 0


def test_exhaustion_raises():
    arena = Arena(8)
    assert arena.allocate(8) == 0
    with pytest.raises(ArenaExhausted):
        arena.allocate(1)
    assert arena.used == 8


def test_request_larger_than_arena_raises():
    arena = Arena(16)
    with pytest.raises(ArenaExhausted):
        arena.allocate(17)
    assert arena.free == 16


def test_reset_reuses_memory():
    arena = Arena(8)
    arena.allocate(8)
    arena.reset()
    assert arena.used == 0
    assert arena.allocate(8) == 0


@pytest.mark.parametrize("size", [0, -4])
def test_invalid_arena_size(size):
    with pytest.raises(ValueError):
        Arena(size)


def test_negative_request_rejected():
    arena = Arena(16)
    with pytest.raises(ValueError):
        arena.allocate(-1)


def test_used_plus_free_is_size():
    arena = Arena(100)
    for request in (1, 3, 7, 10):
        arena.allocate(request)
        assert arena.used + arena.free == arena.size
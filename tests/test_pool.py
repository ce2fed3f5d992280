import pytest

from microgui.pool import Pool


def test_empty_pool_has_no_ids():
    pool = Pool(4)
    assert len(pool) == 4
    assert pool.get(12345) is None


def test_init_then_get():
    pool = Pool(4)
    idx = pool.init(12345, 1)
    assert pool.get(12345) == idx
    assert pool.items[idx].last_update == 1


def test_same_frame_uses_distinct_slots():
    pool = Pool(3)
    slots = {pool.init(i, 1) for i in (101, 102, 103)}
    assert len(slots) == 3


def test_full_pool_raises():
    pool = Pool(2)
    pool.init(101, 1)
    pool.init(102, 1)
    with pytest.raises(RuntimeError):
        pool.init(103, 1)


def test_frame_zero_cannot_claim():
    pool = Pool(2)
    with pytest.raises(RuntimeError):
        pool.init(101, 0)


def test_least_recently_used_is_recycled():
    pool = Pool(2)
    a = pool.init(101, 1)
    b = pool.init(102, 2)
    pool.update(a, 3)
    c = pool.init(103, 4)
    assert c == b
    assert pool.get(102) is None
    assert pool.get(101) == a
    assert pool.get(103) == c


def test_free_releases_slot():
    pool = Pool(1)
    idx = pool.init(101, 1)
    pool.free(idx)
    assert pool.get(101) is None
    assert pool.init(102, 1) == idx


def test_update_sets_frame():
    pool = Pool(2)
    idx = pool.init(101, 1)
    pool.update(idx, 9)
    assert pool.items[idx].last_update == 9


def test_invalid_size():
    with pytest.raises(ValueError):
        Pool(0)
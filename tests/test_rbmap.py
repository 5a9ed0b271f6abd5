import math

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from rvemu.rbmap import RBMap, cmp_int, cmp_uint


def test_cmp_int_three_way():
    assert cmp_int(1, 2) == -1
    assert cmp_int(2, 1) == 1
    assert cmp_int(5, 5) == 0
    assert cmp_int(-3, 2) == -1


def test_cmp_uint_treats_negative_as_large():
    assert cmp_uint(-1, 1) == 1
    assert cmp_uint(1, -1) == -1
    assert cmp_uint(-1, 0xFFFFFFFF) == 0


def test_empty_map():
    m = RBMap(cmp_int)
    assert m.is_empty()
    assert len(m) == 0
    assert m.first() is None
    assert m.last() is None
    assert list(m.items()) == []
    assert m.find(1) is None


def test_insert_and_find():
    m = RBMap(cmp_int)
    assert m.insert(3, "c") is True
    assert m.insert(1, "a") is True
    assert m.insert(2, "b") is True
    assert m.find(2) == "b"
    assert m[1] == "a"
    assert 3 in m
    assert 4 not in m
    assert len(m) == 3
    assert not m.is_empty()


def test_duplicate_insert_keeps_original():
    m = RBMap(cmp_int)
    assert m.insert(7, "first")
    assert m.insert(7, "second") is False
    assert m[7] == "first"
    assert len(m) == 1


def test_insert_without_value_stores_none():
    m = RBMap(cmp_int)
    assert m.insert(4)
    assert 4 in m
    assert m[4] is None


def test_getitem_missing_raises():
    m = RBMap(cmp_int)
    m.insert(1, "a")
    with pytest.raises(KeyError):
        m[2]
    assert m[1] == "a"
    assert len(m) == 1
    assert 2 not in m


def test_erase_missing_raises():
    m = RBMap(cmp_int)
    m.insert(1, "a")
    with pytest.raises(KeyError):
        m.erase(5)
    assert len(m) == 1


def test_erase_single_element():
    m = RBMap(cmp_int)
    m.insert(10, "x")
    m.erase(10)
    assert m.is_empty()
    assert 10 not in m
    assert m.first() is None


def test_first_and_last():
    m = RBMap(cmp_int)
    for k in [50, 20, 80, 10, 30, 70, 90]:
        m.insert(k, k * 2)
    assert m.first() == (10, 20)
    assert m.last() == (90, 180)
    m.erase(10)
    m.erase(90)
    assert m.first() == (20, 40)
    assert m.last() == (80, 160)


def test_iteration_is_sorted():
    keys = [15, 3, 99, -4, 42, 0, 7, 61]
    m = RBMap(cmp_int)
    for k in keys:
        m.insert(k, str(k))
    assert list(m) == sorted(keys)
    assert list(m.items()) == [(k, str(k)) for k in sorted(keys)]


def test_custom_comparator_reverses_order():
    m = RBMap(lambda a, b: cmp_int(b, a))
    for k in [1, 5, 3, 2, 4]:
        m.insert(k, k)
    assert list(m) == [5, 4, 3, 2, 1]
    assert m.first() == (5, 5)


def test_uint_comparator_ordering():
    m = RBMap(cmp_uint)
    for k in [-1, 0, 1]:
        m.insert(k, k)
    assert list(m) == [0, 1, -1]


def test_clear():
    m = RBMap(cmp_int)
    for k in range(20):
        m.insert(k, k)
    m.clear()
    assert m.is_empty()
    assert list(m) == []
    assert m.insert(3, "again")
    assert list(m.items()) == [(3, "again")]


def test_file_descriptor_table_pattern():
    fds = RBMap(cmp_int)
    for fd, name in enumerate(["stdin", "stdout", "stderr"]):
        fds.insert(fd, name)
    free = next(i for i in range(3, 100) if i not in fds)
    assert free == 3
    fds.insert(free, "file")
    fds.erase(free)
    assert free not in fds
    assert list(fds) == [0, 1, 2]


def test_balance_after_sequential_inserts():
    m = RBMap(cmp_int)
    n = 1000
    for k in range(n):
        m.insert(k, k)
    bh = m._black_height()
    assert bh <= 2 * math.log2(n + 1) + 1
    for k in range(0, n, 2):
        m.erase(k)
    assert len(m) == n // 2
    assert list(m) == list(range(1, n, 2))
    m._black_height()
    assert m.first() == (1, 1)


@settings(max_examples=150)
@given(
    st.lists(
        st.tuples(st.booleans(), st.integers(min_value=-50, max_value=50)),
        max_size=200,
    )
)
def test_matches_dict_model(ops):
    m = RBMap(cmp_int)
    model = {}
    for is_insert, key in ops:
        if is_insert:
            inserted = m.insert(key, key * 3)
            assert inserted == (key not in model)
            model.setdefault(key, key * 3)
        elif key in model:
            m.erase(key)
            del model[key]
        else:
            with pytest.raises(KeyError):
                m.erase(key)
        m._black_height()
    expected = sorted(model.items())
    assert len(m) == len(model)
    assert list(m.items()) == expected
    assert m.first() == (expected[0] if expected else None)
    assert m.last() == (expected[-1] if expected else None)
    assert m.is_empty() == (not expected)
import pytest

from chilang.multimap import MultiMap

KEYS = ["key1", "key2", "key3", "key4", "key5", "key6", "key7", "key8", "key9", "key10"]


def test_map_ensure_get_delete():
    m = MultiMap()
    for i, key in enumerate(KEYS):
        m[key] = i * 2

    assert [m.get(key) for key in KEYS] == [0, 2, 4, 6, 8, 10, 12, 14, 16, 18]

    for key in KEYS[::2]:
        del m[key]

    assert [m.get(key) for key in KEYS] == [
        None, 2, None, 6, None, 10, None, 14, None, 18,
    ]
    assert len(m) == 5


def test_setitem_replaces_existing():
    m = MultiMap()
    m["a"] = 1
    m["a"] = 2
    assert m["a"] == 2
    assert len(m) == 1


def test_add_keeps_duplicates_newest_first():
    m = MultiMap()
    m.add("x", 1)
    m.add("y", 9)
    m.add("x", 2)
    assert m["x"] == 2
    assert list(m.matching("x")) == [2, 1]
    assert len(m) == 3


def test_delete_removes_newest_entry_only():
    m = MultiMap()
    m.add("x", 1)
    m.add("x", 2)
    del m["x"]
    assert m["x"] == 1
    del m["x"]
    assert "x" not in m


def test_missing_key_errors():
    m = MultiMap()
    with pytest.raises(KeyError):
        m["nope"]
    with pytest.raises(KeyError):
        del m["nope"]
    assert m.get("nope", 42) == 42


def test_items_and_iter_in_insertion_order():
    m = MultiMap()
    for key in ["c", "a", "b", "a"]:
        m.add(key, key.upper())
    assert list(m.items()) == [("c", "C"), ("a", "A"), ("b", "B"), ("a", "A")]
    assert list(m) == ["c", "a", "b", "a"]


def test_matching_unknown_key_is_empty():
    m = MultiMap()
    m.add("k", 1)
    assert list(m.matching("other")) == []


def test_contains():
    m = MultiMap()
    m["k"] = 0
    assert "k" in m
    assert "j" not in m
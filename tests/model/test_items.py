"""Tests for the observable ItemList."""

from tuimisc.model.items import ItemList


def _recorder(items):
    changes = []
    items.watch(lambda src, action, old, new: changes.append((action, old, new)))
    return changes


def test_behaves_like_a_list():
    items = ItemList(["a", "b"])
    assert list(items) == ["a", "b"]
    assert len(items) == 2
    assert items[1] == "b"
    assert "a" in items
    assert items.index("b") == 1


def test_append_and_insert_notify():
    items = ItemList(["b"])
    changes = _recorder(items)
    items.append("c")
    items.insert(0, "a")
    assert list(items) == ["a", "b", "c"]
    assert changes == [("insert", None, "c"), ("insert", None, "a")]


def test_remove_and_delete_notify():
    items = ItemList(["a", "b", "c"])
    changes = _recorder(items)
    items.remove("b")
    del items[0]
    assert list(items) == ["c"]
    assert changes == [("remove", "b", None), ("remove", "a", None)]


def test_remove_missing_is_noop():
    items = ItemList(["a"])
    changes = _recorder(items)
    items.remove("zzz")
    assert changes == []


def test_setitem_notifies_only_on_change():
    items = ItemList(["a"])
    changes = _recorder(items)
    items[0] = "a"
    items[0] = "b"
    assert changes == [("replace", "a", "b")]


def test_replace_sends_one_reset():
    items = ItemList(["a", "b"])
    changes = _recorder(items)
    items.replace(["x"])
    items.replace(["x"])
    assert list(items) == ["x"]
    assert changes == [("reset", ["a", "b"], ["x"])]


def test_clear():
    items = ItemList(["a"])
    items.clear()
    assert len(items) == 0


def test_extend():
    items = ItemList()
    changes = _recorder(items)
    items.extend(["a", "b"])
    assert list(items) == ["a", "b"]
    assert len(changes) == 2


def test_unwatch_stops_notifications():
    items = ItemList()
    changes = []
    unwatch = items.watch(lambda *args: changes.append(args))
    unwatch()
    items.append("a")
    assert changes == []


def test_unwatch_twice_is_safe():
    items = ItemList()
    unwatch = items.watch(lambda *args: None)
    unwatch()
    unwatch()

"""Tests for collection helpers."""

from functions.collection import group_by, key_by, order_by, uniq_by


class TestOrderBy:
    def test_multi_key(self):
        items = [("b", 2), ("a", 2), ("a", 1)]
        assert order_by(items, [lambda i: i[0], lambda i: i[1]]) == [("a", 1), ("a", 2), ("b", 2)]

    def test_stable_for_equal_keys(self):
        items = [("a", "first"), ("b", "x"), ("a", "second")]
        assert order_by(items, [lambda i: i[0]]) == [("a", "first"), ("a", "second"), ("b", "x")]

    def test_missing_values_last(self):
        items = [(None, 1), ("z", 1), ("", 2), ("a", 1)]
        assert order_by(items, [lambda i: i[0]]) == [("a", 1), ("z", 1), (None, 1), ("", 2)]


class TestUniqBy:
    def test_keeps_first(self):
        items = [("a", 1), ("a", 2), ("b", 3)]
        assert uniq_by(items, lambda i: i[0]) == [("a", 1), ("b", 3)]


class TestGroupAndKey:
    def test_group_by_keeps_order(self):
        groups = group_by(["apple", "bean", "avocado"], lambda s: s[0])
        assert list(groups) == ["a", "b"]
        assert groups["a"] == ["apple", "avocado"]

    def test_key_by_last_wins(self):
        assert key_by([("a", 1), ("a", 2)], lambda i: i[0]) == {"a": ("a", 2)}

# SPDX-License-Identifier: MIT
"""Tests for vsccc.core.namespace."""

import pytest

from vsccc.core.namespace import Namespace


class TestNamespace:
    def test_basic_get_set(self):
        ns = Namespace()
        ns["foo"] = "bar"
        assert ns["foo"] == "bar"
        assert ns.get("foo") == "bar"

    def test_missing_key(self):
        ns = Namespace()
        assert ns.get("missing") is None
        assert ns.get("missing", "default") == "default"
        with pytest.raises(KeyError):
            _ = ns["missing"]

    def test_case_insensitive(self):
        ns = Namespace({"Configuration": "Debug"})
        assert ns["configuration"] == "Debug"
        assert "CONFIGURATION" in ns
        ns["CONFIGURATION"] = "Release"
        assert len(ns) == 1
        assert ns["Configuration"] == "Release"

    def test_iteration_uses_latest_spelling_in_insertion_order(self):
        ns = Namespace({"A": "1", "B": "2"})
        ns["a"] = "3"
        assert list(ns) == ["a", "B"]
        assert dict(ns.items()) == {"a": "3", "B": "2"}

    def test_delete(self):
        ns = Namespace({"Key": "v"})
        del ns["KEY"]
        assert "Key" not in ns

    def test_contains_non_string(self):
        assert 1 not in Namespace({"1": "one"})

    def test_copy_is_independent(self):
        seed = Namespace({"ProjectName": "a"})
        clone = seed.copy()
        clone["ProjectName"] = "b"
        clone["Extra"] = "x"
        assert seed["ProjectName"] == "a"
        assert "Extra" not in seed

    def test_update(self):
        ns = Namespace({"a": "1"})
        ns.update({"B": "2", "c": "3"})
        assert ns["b"] == "2"
        assert ns["C"] == "3"

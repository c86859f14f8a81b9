"""Tests for tally.hierarchy."""

import pytest

from tally.errors import CycleError
from tally.events import Event
from tally.hierarchy import (
    Hierarchy,
    is_deferred,
    is_error_type,
    is_fail_type,
    is_known,
    is_pass,
    is_pending,
)
from tally.types import Kind


class TestIsDescendant:
    def test_every_tag_descends_from_itself(self, hierarchy):
        for tag in [*hierarchy.tags(), "never-registered"]:
            assert hierarchy.is_descendant(tag, tag)

    def test_is_transitive(self, hierarchy):
        assert hierarchy.is_descendant(Kind.FAIL, Kind.FAIL_TYPE)
        assert hierarchy.is_descendant(Kind.FAIL, Kind.KNOWN)
        assert hierarchy.is_descendant(Kind.ERROR, Kind.KNOWN)

    def test_is_not_symmetric(self, hierarchy):
        assert not hierarchy.is_descendant(Kind.FAIL_TYPE, Kind.FAIL)
        assert not hierarchy.is_descendant(Kind.PASS, Kind.FAIL_TYPE)

    def test_unregistered_kind_has_no_ancestors(self, hierarchy):
        assert hierarchy.ancestors("mismatch") == set()
        assert not hierarchy.is_descendant("mismatch", Kind.KNOWN)


class TestDerive:
    def test_registers_edge(self, hierarchy):
        hierarchy.derive("mismatch", Kind.FAIL_TYPE)

        assert hierarchy.is_descendant("mismatch", Kind.FAIL_TYPE)
        assert hierarchy.is_descendant("mismatch", Kind.KNOWN)

    def test_is_idempotent(self, hierarchy):
        hierarchy.derive("mismatch", Kind.FAIL_TYPE)
        hierarchy.derive("mismatch", Kind.FAIL_TYPE)

        assert hierarchy.parents("mismatch") == ("fail-type",)

    def test_cycle_is_rejected_and_leaves_hierarchy_unchanged(self):
        graph = Hierarchy()
        graph.derive("a", "b")

        with pytest.raises(CycleError) as excinfo:
            graph.derive("b", "a")

        assert excinfo.value.child == "b"
        assert excinfo.value.parent == "a"
        assert graph.parents("b") == ()
        assert graph.parents("a") == ("b",)

    def test_indirect_cycle_is_rejected(self):
        graph = Hierarchy()
        graph.derive("a", "b")
        graph.derive("b", "c")

        with pytest.raises(CycleError):
            graph.derive("c", "a")

    def test_self_derivation_is_rejected(self):
        with pytest.raises(CycleError):
            Hierarchy().derive("a", "a")

    def test_copy_is_independent(self, hierarchy):
        clone = hierarchy.copy()
        clone.derive("mismatch", Kind.FAIL_TYPE)

        assert not hierarchy.is_descendant("mismatch", Kind.FAIL_TYPE)


class TestDistances:
    def test_shortest_path_wins(self):
        graph = Hierarchy()
        graph.derive("x", "y")
        graph.derive("y", "z")
        graph.derive("x", "z")

        assert graph.distances("x") == {"x": 0, "y": 1, "z": 1}


class TestPredicates:
    def test_builtin_predicates(self, hierarchy):
        assert is_known(Event(kind=Kind.SUMMARY), hierarchy)
        assert is_fail_type(Event(kind=Kind.ERROR), hierarchy)
        assert is_error_type(Event(kind=Kind.ERROR), hierarchy)
        assert not is_error_type(Event(kind=Kind.FAIL), hierarchy)
        assert is_pass("pass", hierarchy)
        assert is_pending("pending", hierarchy)
        assert is_deferred(Kind.DEFERRED, hierarchy)

    def test_predicates_see_extension_kinds(self, hierarchy):
        hierarchy.derive("snapshot-mismatch", Kind.DEFERRED)

        assert is_deferred(Event(kind="snapshot-mismatch"), hierarchy)
        assert is_known(Event(kind="snapshot-mismatch"), hierarchy)

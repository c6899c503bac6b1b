from __future__ import annotations

"""
Unit tests for the Classes universe collection.
"""

import pytest

from modulescope.core.universe.classes import Classes
from modulescope.core.universe.predicates import has_simple_name, reside_in_a_package
from modulescope.domain.class_models import ClassDescriptor, Modifier


def test_that_returns_new_described_collection(sample_universe: Classes) -> None:
    subset = sample_universe.that(reside_in_a_package("a.b"))

    assert subset is not sample_universe
    assert subset.names() == ["a.b.Foo", "a.b.c.Bar", "a.b.d.Baz"]
    assert subset.description == "sample classes that reside in a package 'a.b..'"
    # Source collection stays untouched
    assert len(sample_universe) == 4


def test_that_rejects_missing_predicate(sample_universe: Classes) -> None:
    with pytest.raises(ValueError):
        sample_universe.that(None)  # type: ignore[arg-type]


def test_contains_by_name_and_descriptor(sample_universe: Classes) -> None:
    assert sample_universe.contains("a.Other")
    assert sample_universe.contains(ClassDescriptor("a.Other"))
    assert not sample_universe.contains(ClassDescriptor("a.Other", modifiers={Modifier.PRIVATE}))
    assert not sample_universe.contains("a.Missing")
    assert 42 not in sample_universe


def test_duplicate_descriptors_are_merged() -> None:
    classes = Classes([ClassDescriptor("a.Foo"), ClassDescriptor("a.Foo")])

    assert len(classes) == 1


def test_conflicting_descriptors_are_rejected() -> None:
    with pytest.raises(ValueError, match="Conflicting descriptors"):
        Classes([ClassDescriptor("a.Foo"), ClassDescriptor("a.Foo", modifiers={Modifier.PRIVATE})])


def test_non_descriptor_entries_are_rejected() -> None:
    with pytest.raises(ValueError):
        Classes(["a.Foo"])  # type: ignore[list-item]


def test_equality_ignores_description_and_order() -> None:
    first = Classes([ClassDescriptor("a.Foo"), ClassDescriptor("a.Bar")], description="first")
    second = Classes([ClassDescriptor("a.Bar"), ClassDescriptor("a.Foo")], description="second")

    assert first == second
    assert hash(first) == hash(second)
    assert first != Classes.of(ClassDescriptor("a.Foo"))


def test_format_shortens_names_relative_to_base(sample_universe: Classes) -> None:
    formatted = sample_universe.that(has_simple_name("Bar")).format("a.b")

    assert formatted == "  - ….c.Bar"
    assert Classes.of(ClassDescriptor("z.Foo")).format("a.b") == "  - z.Foo"


def test_iteration_preserves_insertion_order() -> None:
    classes = Classes([ClassDescriptor("b.Second"), ClassDescriptor("a.First")])

    assert [d.name for d in classes] == ["b.Second", "a.First"]
    assert classes.names() == ["a.First", "b.Second"]
    assert not classes.is_empty()
    assert Classes().is_empty()

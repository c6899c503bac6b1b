from __future__ import annotations

"""
Unit tests for the Namespace Segmenter.

Verifies truncation of descendant package names to the direct child
segment of a base package.
"""

import pytest

from modulescope.core.packages.segmenter import extract_direct_sub_package


@pytest.mark.parametrize(
    "base, candidate, expected",
    [
        ("a.b", "a.b.c.d", "a.b.c"),
        ("a.b", "a.b.c", "a.b.c"),
        ("a.b", "a.b", "a.b"),
        ("com.acme", "com.acme.orders.internal.jpa", "com.acme.orders"),
    ],
)
def test_extract_direct_sub_package(base: str, candidate: str, expected: str) -> None:
    assert extract_direct_sub_package(base, candidate) == expected


def test_shorter_candidate_is_returned_unchanged() -> None:
    """Candidates not longer than the base are passed through."""
    assert extract_direct_sub_package("a.b.c", "a.b") == "a.b"


def test_result_is_always_a_prefix_of_the_candidate() -> None:
    candidate = "org.example.shop.catalog.web.dto"
    result = extract_direct_sub_package("org.example", candidate)

    assert candidate.startswith(result)
    assert result.count(".") == "org.example".count(".") + 1

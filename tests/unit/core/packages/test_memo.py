from __future__ import annotations

"""
Unit tests for the compute-once value cell.
"""

import threading
from typing import List

import pytest

from modulescope.core.packages.memo import Memoized


def test_factory_runs_on_first_access_only() -> None:
    calls: List[int] = []

    def factory() -> List[int]:
        calls.append(1)
        return [len(calls)]

    memo = Memoized(factory)
    assert not memo.is_computed()
    assert "<pending>" in repr(memo)

    first = memo.get()
    second = memo.get()

    assert first is second
    assert len(calls) == 1
    assert memo.is_computed()


def test_none_factory_is_rejected() -> None:
    with pytest.raises(ValueError):
        Memoized(None)  # type: ignore[arg-type]


def test_concurrent_callers_observe_the_same_object() -> None:
    memo = Memoized(lambda: object())
    results: List[object] = []
    barrier = threading.Barrier(8)

    def worker() -> None:
        barrier.wait()
        results.append(memo.get())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 8
    assert all(r is results[0] for r in results)

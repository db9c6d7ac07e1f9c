# tests/pipeline/parallel/test_parallel_executor.py
import os

import pytest

from statlearn.pipeline.parallel.executor import ParallelExecutor
from statlearn.pipeline.parallel.types import ParallelKind


def square(x: int) -> int:
    return x * x


@pytest.mark.parametrize("workers", [1, 2])
def test_results_keep_input_order(workers):
    out = ParallelExecutor.run(
        kind=ParallelKind.CV_FOLD,
        items=range(7),
        handler=square,
        max_workers=workers,
    )
    assert out == [0, 1, 4, 9, 16, 25, 36]


def test_no_items():
    assert ParallelExecutor.run(kind=ParallelKind.KMEANS_RESTART, items=[], handler=square) == []


def test_worker_error_propagates():
    with pytest.raises(ZeroDivisionError):
        ParallelExecutor.run(
            kind=ParallelKind.CV_FOLD,
            items=[1, 0],
            handler=lambda x: 1 / x,
        )


@pytest.mark.parametrize(
    "max_workers, n_items, expected",
    [(1, 5, 1), (4, 2, 2), (0, 3, 1), (3, 10, 3)],
)
def test_resolve_workers(max_workers, n_items, expected):
    assert ParallelExecutor._resolve_workers(list(range(n_items)), max_workers) == expected


def test_resolve_workers_all_cpus():
    items = list(range(1000))
    expected = min(os.cpu_count() or 1, 1000)
    assert ParallelExecutor._resolve_workers(items, None) == expected
    assert ParallelExecutor._resolve_workers(items, -1) == expected

# statlearn/pipeline/parallel/executor.py
from __future__ import annotations

import os
from concurrent.futures import ProcessPoolExecutor
from typing import Any, Callable, Iterable, List, TypeVar

from statlearn import logs
from statlearn.pipeline.parallel.types import ParallelKind

T = TypeVar("T")


class ParallelExecutor:
    """
    ParallelExecutor

    - thin ProcessPoolExecutor wrapper for independent fit units
      (cv folds, k-means restarts)
    - results are returned in input order, so sequential and parallel
      runs are interchangeable
    - handler must be picklable (module-level function / functools.partial)
    """

    @staticmethod
    def run(
            *,
            kind: ParallelKind,
            items: Iterable[T],
            handler: Callable[[T], Any],
            max_workers: int | None = 1,
    ) -> List[Any]:
        items = list(items)
        if not items:
            logs.info(f"[ParallelExecutor] kind={kind.value} no items to process")
            return []

        workers = ParallelExecutor._resolve_workers(items, max_workers)

        logs.debug(
            f"[ParallelExecutor] start kind={kind.value} "
            f"total={len(items)} workers={workers}"
        )

        if workers == 1:
            return [handler(item) for item in items]

        with ProcessPoolExecutor(max_workers=workers) as pool:
            # map() preserves input order
            return list(pool.map(handler, items))

    @staticmethod
    def _resolve_workers(items: list, max_workers: int | None) -> int:
        """
        None / -1 -> one worker per cpu, capped by the number of items.
        """
        if max_workers is None or max_workers < 0:
            cpu = os.cpu_count() or 1
            return max(1, min(cpu, len(items)))
        return max(1, min(max_workers, len(items)))

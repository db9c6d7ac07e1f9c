#!filepath: statlearn/observability/instrumentation.py
from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator

from statlearn.observability.metrics import MetricRecorder
from statlearn.observability.timeline_reporter import report_timeline


class Instrumentation:
    """
    Run-level timing + metrics, owned by steps (engines never see it).

    - timer(name)               leaf timer, lands on the timeline
    - timer(name, record=False) step scope, wall time only
    - snapshot()                {"timeline": ..., "metrics": ...} for run.json
    """

    enabled = True

    def __init__(self):
        self.metrics = MetricRecorder()
        self.timeline: Dict[str, float] = {}

    @contextmanager
    def timer(self, name: str, *, record: bool = True) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            if record:
                # a repeated leaf name accumulates
                elapsed = time.perf_counter() - start
                self.timeline[name] = self.timeline.get(name, 0.0) + elapsed

    def record(self, name: str, value: Any) -> None:
        self.metrics.record(name, value)

    def snapshot(self) -> Dict[str, Any]:
        return {
            "timeline": {k: round(v, 6) for k, v in self.timeline.items()},
            "metrics": self.metrics.snapshot(),
        }

    def generate_timeline_report(self, run_id: str) -> float:
        return report_timeline(self.timeline, run_id)


class NoOpInstrumentation:
    """Steps built without instrumentation."""

    enabled = False

    @contextmanager
    def timer(self, name: str, *, record: bool = True) -> Iterator[None]:
        yield

    def record(self, name: str, value: Any) -> None:
        pass

    def snapshot(self) -> Dict[str, Any]:
        return {"timeline": {}, "metrics": {}}

    def generate_timeline_report(self, run_id: str) -> float:
        return 0.0

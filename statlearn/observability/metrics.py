#!filepath: statlearn/observability/metrics.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict

import numpy as np

from statlearn import logs


def to_plain(value: Any) -> Any:
    """
    numpy scalars / arrays -> python numbers / lists, so a metric
    snapshot can go straight into run.json.
    """
    if isinstance(value, np.generic):
        return value.item()
    if isinstance(value, np.ndarray):
        return value.tolist()
    if isinstance(value, (list, tuple)):
        return [to_plain(v) for v in value]
    return value


@dataclass
class MetricRecorder:
    """
    Fit metrics of one run (lambda_min, cv error, inertia ...).
    Re-recording a name overwrites it.
    """

    enabled: bool = True
    metrics: Dict[str, Any] = field(default_factory=dict)

    def record(self, name: str, value: Any) -> None:
        if not self.enabled:
            return
        value = to_plain(value)
        self.metrics[name] = value
        logs.debug(f"[Metric] {name} = {value}")

    def snapshot(self) -> Dict[str, Any]:
        return dict(self.metrics)

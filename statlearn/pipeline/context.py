# statlearn/pipeline/context.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import numpy as np
import pandas as pd

from statlearn.engines.results import ClusterResult, CVResult, LassoPath


@dataclass
class RunContext:
    """
    Shared run identity

    - one context == one pipeline run
    - run_id is immutable and mandatory
    """

    run_id: str
    cfg: Any
    run_dir: Path

    table: Optional[pd.DataFrame] = None
    artifacts: Dict[str, Path] = field(default_factory=dict)
    metrics: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RegressionContext(RunContext):
    """
    birthweight lasso run

    table -> X / y -> lambdas -> path, cv
    """

    X: Optional[pd.DataFrame] = None
    y: Optional[pd.Series] = None
    levels: Dict[str, List[Any]] = field(default_factory=dict)

    lambdas: Optional[np.ndarray] = None
    path: Optional[LassoPath] = None
    cv: Optional[CVResult] = None


@dataclass
class ClusteringContext(RunContext):
    """
    pokemon k-means run

    table -> points -> clusters -> labeled table
    """

    points: Optional[pd.DataFrame] = None
    clusters: Optional[ClusterResult] = None
    labeled: Optional[pd.DataFrame] = None

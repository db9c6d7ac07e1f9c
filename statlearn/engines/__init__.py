"""
Fitting Engines

Each engine owns the complete numerical semantics of one procedure:

- LassoPathEngine      coordinate-descent lasso over a descending penalty grid
- CrossValidateEngine  K-fold penalty selection on top of LassoPathEngine
- KMeansEngine         Lloyd's k-means with seeded init and restarts

Engines are pure: numpy in, frozen result objects out.
No logging of per-iteration state, no file IO, no Instrumentation.
Steps wrap engines and own timing / artifacts.
"""
from statlearn.engines.results import ClusterResult, CVResult, LassoPath
from statlearn.engines.lasso_path_engine import LassoPathEngine
from statlearn.engines.cross_validate_engine import CrossValidateEngine
from statlearn.engines.kmeans_engine import KMeansEngine

__all__ = [
    "LassoPath",
    "CVResult",
    "ClusterResult",
    "LassoPathEngine",
    "CrossValidateEngine",
    "KMeansEngine",
]

# statlearn/engines/results.py
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

import numpy as np
import pandas as pd

from statlearn.utils.errors import ParameterError


def _grid_index(lambdas: np.ndarray, lam: float) -> int:
    hits = np.flatnonzero(np.isclose(lambdas, lam, rtol=1e-12, atol=0.0))
    if hits.size == 0:
        raise ParameterError(f"lambda={lam} is not a member of the penalty grid")
    return int(hits[0])


@dataclass(frozen=True, eq=False)
class LassoPath:
    """
    LassoPath (FINAL / FROZEN)

    One fitted coefficient path, original feature scale.

    - coefs[j, i]     coefficient of feature j at lambdas[i]
    - intercepts[i]   intercept at lambdas[i]
    - r2[i]           1 - RSS / TSS on the training data
    - n_passes[i]     coordinate-descent passes used at lambdas[i]
    - converged[i]    False when max_passes was hit
    """

    feature_names: List[str]
    lambdas: np.ndarray
    coefs: np.ndarray
    intercepts: np.ndarray
    r2: np.ndarray
    n_passes: np.ndarray
    converged: np.ndarray

    @property
    def n_features(self) -> int:
        return len(self.feature_names)

    def predict(self, X) -> np.ndarray:
        """
        Returns an (n, m) matrix: one prediction column per lambda.
        """
        values = np.asarray(X, dtype=float)
        if values.ndim != 2 or values.shape[1] != self.n_features:
            raise ParameterError(
                f"expected {self.n_features} feature columns, got shape={values.shape}"
            )
        return values @ self.coefs + self.intercepts

    def coef_at(self, lam: float) -> pd.Series:
        i = _grid_index(self.lambdas, lam)
        return pd.Series(self.coefs[:, i], index=self.feature_names, name=float(lam))

    def intercept_at(self, lam: float) -> float:
        return float(self.intercepts[_grid_index(self.lambdas, lam)])

    def n_nonzero(self) -> np.ndarray:
        return np.count_nonzero(self.coefs, axis=0)

    def coef_frame(self) -> pd.DataFrame:
        return pd.DataFrame(self.coefs, index=self.feature_names, columns=self.lambdas)

    def to_chart_table(self) -> pd.DataFrame:
        """
        Long table for the plotting collaborator:
        x = lambda, y = coefficient, group = feature
        """
        m = len(self.lambdas)
        return pd.DataFrame(
            {
                "x": np.tile(self.lambdas, self.n_features),
                "y": self.coefs.reshape(-1),
                "group": np.repeat(self.feature_names, m),
            }
        )

    def summary(self) -> pd.DataFrame:
        return pd.DataFrame(
            {
                "lambda": self.lambdas,
                "n_nonzero": self.n_nonzero(),
                "r2": self.r2,
                "n_passes": self.n_passes,
                "converged": self.converged,
            }
        )


@dataclass(frozen=True, eq=False)
class CVResult:
    """
    CVResult (FINAL / FROZEN)

    - fold_errors[f, i]  held-out MSE of fold f at lambdas[i]
    - cv_mean / cv_se    per-lambda mean and standard error over folds
    - lambda_min         grid member with the lowest cv_mean
    - lambda_1se         largest grid member within one SE of the minimum
    """

    lambdas: np.ndarray
    fold_errors: np.ndarray
    cv_mean: np.ndarray
    cv_se: np.ndarray
    index_min: int
    index_1se: int
    fold_sizes: List[int]
    path: Optional[LassoPath] = None

    @property
    def n_folds(self) -> int:
        return len(self.fold_sizes)

    @property
    def lambda_min(self) -> float:
        return float(self.lambdas[self.index_min])

    @property
    def lambda_1se(self) -> float:
        return float(self.lambdas[self.index_1se])

    def curve(self) -> pd.DataFrame:
        return pd.DataFrame(
            {"lambda": self.lambdas, "cv_mean": self.cv_mean, "cv_se": self.cv_se}
        )

    def to_chart_table(self) -> pd.DataFrame:
        """
        x = lambda, y = error, group in {cv_mean, cv_upper, cv_lower}
        """
        frames = [
            pd.DataFrame({"x": self.lambdas, "y": y, "group": group})
            for group, y in (
                ("cv_mean", self.cv_mean),
                ("cv_upper", self.cv_mean + self.cv_se),
                ("cv_lower", self.cv_mean - self.cv_se),
            )
        ]
        return pd.concat(frames, ignore_index=True)


@dataclass(frozen=True, eq=False)
class ClusterResult:
    """
    ClusterResult (FINAL / FROZEN)

    - labels[i]      cluster id in [0, k) of point i
    - centroids[c]   centroid of cluster c
    - inertia        within-cluster sum of squared distances
    - n_iter         centroid updates of the winning run
    - converged      False when max_iter was hit
    """

    labels: np.ndarray
    centroids: np.ndarray
    inertia: float
    n_iter: int
    converged: bool

    @property
    def k(self) -> int:
        return len(self.centroids)

    def cluster_sizes(self) -> np.ndarray:
        return np.bincount(self.labels, minlength=self.k)

    def labeled_frame(self, frame: pd.DataFrame, column: str = "cluster") -> pd.DataFrame:
        if len(frame) != len(self.labels):
            raise ParameterError(
                f"frame has {len(frame)} rows, result has {len(self.labels)} labels"
            )
        out = frame.copy()
        out[column] = self.labels
        return out

    def to_chart_table(self, points, columns: Optional[Sequence[str]] = None) -> pd.DataFrame:
        """
        x / y = first two feature columns (y = 0 for 1-D data), group = cluster
        """
        values = np.asarray(points, dtype=float)
        if values.ndim != 2 or len(values) != len(self.labels):
            raise ParameterError(f"points shape {values.shape} does not match labels")

        x = values[:, 0]
        y = values[:, 1] if values.shape[1] > 1 else np.zeros(len(values))
        table = pd.DataFrame({"x": x, "y": y, "group": self.labels})
        if columns is not None:
            table.attrs["x"] = columns[0]
            table.attrs["y"] = columns[1] if len(columns) > 1 else None
        return table

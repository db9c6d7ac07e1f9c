# statlearn/engines/cross_validate_engine.py
from __future__ import annotations

from functools import partial
from typing import List, Optional, Sequence

import numpy as np

from statlearn.engines.lasso_path_engine import LassoPathEngine
from statlearn.engines.results import CVResult
from statlearn.engines.validation import as_matrix, as_penalty_grid, as_vector
from statlearn.pipeline.parallel.executor import ParallelExecutor
from statlearn.pipeline.parallel.types import ParallelKind
from statlearn.utils.errors import ParameterError


def _score_fold(
        fold: int,
        *,
        X: np.ndarray,
        y: np.ndarray,
        lambdas: np.ndarray,
        folds: List[np.ndarray],
        engine: LassoPathEngine,
) -> np.ndarray:
    """
    Fit the full grid without fold `fold`, return held-out MSE per lambda.

    Module-level so it can be shipped to a worker process.
    """
    held_out = folds[fold]
    train = np.ones(len(y), dtype=bool)
    train[held_out] = False

    path = engine.fit_path(X[train], y[train], lambdas)
    preds = path.predict(X[held_out])
    errors = (y[held_out][:, None] - preds) ** 2
    return errors.mean(axis=0)


class CrossValidateEngine:
    """
    CrossValidateEngine (FINAL / FROZEN)

    Semantics:
    - folds = seeded permutation split into K near-equal groups
    - every fold refits the FULL penalty grid on the other K-1 folds
    - cv_mean[i] = mean over folds of held-out MSE at lambdas[i]
    - cv_se[i]   = fold std (ddof=1) / sqrt(K)
    - lambda_min ties resolve toward the larger lambda
    """

    # relative tolerance under which two cv errors count as tied
    TIE_RTOL = 1e-12

    def __init__(self, engine: Optional[LassoPathEngine] = None, *, n_jobs: int = 1):
        self.engine = engine if engine is not None else LassoPathEngine()
        self.n_jobs = n_jobs

    # ------------------------------------------------------------------
    # Folds
    # ------------------------------------------------------------------
    @staticmethod
    def make_folds(n: int, n_folds: int, seed: int = 0) -> List[np.ndarray]:
        if n_folds < 2:
            raise ParameterError(f"n_folds must be >= 2, got {n_folds}")
        if n_folds > n:
            raise ParameterError(
                f"n_folds={n_folds} exceeds the number of observations n={n}"
            )

        rng = np.random.default_rng(seed)
        order = rng.permutation(n)
        folds = [np.sort(part) for part in np.array_split(order, n_folds)]

        for f, part in enumerate(folds):
            if part.size == 0:
                raise ParameterError(f"fold {f} is empty")
        return folds

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def cross_validate(
            self,
            X,
            y,
            lambdas,
            *,
            n_folds: int = 10,
            seed: int = 0,
            feature_names: Optional[Sequence[str]] = None,
            refit: bool = True,
    ) -> CVResult:
        values, names = as_matrix(X, feature_names)
        target = as_vector(y, len(values))
        grid = as_penalty_grid(lambdas)

        folds = self.make_folds(len(values), n_folds, seed)

        handler = partial(
            _score_fold,
            X=values,
            y=target,
            lambdas=grid,
            folds=folds,
            engine=self.engine,
        )
        fold_errors = np.vstack(
            ParallelExecutor.run(
                kind=ParallelKind.CV_FOLD,
                items=range(n_folds),
                handler=handler,
                max_workers=self.n_jobs,
            )
        )

        cv_mean = fold_errors.mean(axis=0)
        cv_se = fold_errors.std(axis=0, ddof=1) / np.sqrt(n_folds)

        index_min = self._select_min(cv_mean)
        index_1se = self._select_1se(cv_mean, cv_se, index_min)

        path = self.engine.fit_path(values, target, grid, names) if refit else None

        return CVResult(
            lambdas=grid,
            fold_errors=fold_errors,
            cv_mean=cv_mean,
            cv_se=cv_se,
            index_min=index_min,
            index_1se=index_1se,
            fold_sizes=[int(f.size) for f in folds],
            path=path,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    @classmethod
    def _select_min(cls, cv_mean: np.ndarray) -> int:
        # grid is descending: the first tied index is the largest lambda
        best = float(cv_mean.min())
        tied = cv_mean <= best + cls.TIE_RTOL * max(1.0, abs(best))
        return int(np.flatnonzero(tied)[0])

    @staticmethod
    def _select_1se(cv_mean: np.ndarray, cv_se: np.ndarray, index_min: int) -> int:
        threshold = cv_mean[index_min] + cv_se[index_min]
        within = np.flatnonzero(cv_mean[: index_min + 1] <= threshold)
        return int(within[0])

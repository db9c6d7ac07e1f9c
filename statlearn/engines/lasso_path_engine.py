# statlearn/engines/lasso_path_engine.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from statlearn.engines.results import LassoPath
from statlearn.engines.validation import as_matrix, as_penalty_grid, as_vector
from statlearn.utils.errors import ParameterError


def soft_threshold(z: float, gamma: float) -> float:
    if z > gamma:
        return z - gamma
    if z < -gamma:
        return z + gamma
    return 0.0


@dataclass(frozen=True)
class _Standardized:
    Z: np.ndarray
    mean: np.ndarray
    scale: np.ndarray
    active: np.ndarray


def _standardize(X: np.ndarray) -> _Standardized:
    """
    Zero mean, unit population scale per column.

    Constant columns get scale 1 and an all-zero standardized column;
    they are excluded from the coordinate sweep.
    """
    mean = X.mean(axis=0)
    scale = X.std(axis=0)

    degenerate = scale <= 1e-12 * np.maximum(1.0, np.abs(mean))
    scale = np.where(degenerate, 1.0, scale)

    Z = (X - mean) / scale
    Z[:, degenerate] = 0.0

    return _Standardized(Z=Z, mean=mean, scale=scale, active=np.flatnonzero(~degenerate))


class LassoPathEngine:
    """
    LassoPathEngine (FINAL / FROZEN)

    Objective at each penalty, on standardized X:

        (1 / 2n) * ||y - b0 - Z b||^2 + lambda * ||b||_1

    Contract:
    - penalty grid strictly descending, all > 0
    - each penalty warm-starts from the previous converged solution
      (the first one from zeros)
    - coefficients / intercepts reported in the original feature scale
    - constant columns are tolerated and keep a zero coefficient
    """

    def __init__(self, *, tol: float = 1e-7, max_passes: int = 1000):
        if tol <= 0:
            raise ParameterError(f"tol must be > 0, got {tol}")
        if max_passes < 1:
            raise ParameterError(f"max_passes must be >= 1, got {max_passes}")
        self.tol = tol
        self.max_passes = max_passes

    # ------------------------------------------------------------------
    # Grid helpers
    # ------------------------------------------------------------------
    @staticmethod
    def lambda_max(X, y) -> float:
        """
        Smallest penalty at which every coefficient is exactly zero:
        max_j |<z_j, y - mean(y)>| / n
        """
        values, _ = as_matrix(X)
        target = as_vector(y, len(values))

        std = _standardize(values)
        if std.active.size == 0:
            return 0.0

        centered = target - target.mean()
        corr = std.Z[:, std.active].T @ centered / len(values)
        return float(np.max(np.abs(corr)))

    @classmethod
    def lambda_grid(
            cls,
            X,
            y,
            *,
            n_lambdas: int = 100,
            lambda_eps: float = 1e-3,
    ) -> np.ndarray:
        """
        Geometric descending grid lambda_max -> lambda_max * lambda_eps.
        """
        if n_lambdas < 1:
            raise ParameterError(f"n_lambdas must be >= 1, got {n_lambdas}")
        if not 0 < lambda_eps < 1:
            raise ParameterError(f"lambda_eps must be in (0, 1), got {lambda_eps}")

        top = cls.lambda_max(X, y)
        if top <= 0:
            raise ParameterError(
                "cannot derive a penalty grid: no feature varies or the response is constant"
            )
        if n_lambdas == 1:
            return np.array([top])
        return np.geomspace(top, top * lambda_eps, n_lambdas)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------
    def fit_path(
            self,
            X,
            y,
            lambdas,
            feature_names: Optional[Sequence[str]] = None,
    ) -> LassoPath:
        values, names = as_matrix(X, feature_names)
        target = as_vector(y, len(values))
        grid = as_penalty_grid(lambdas)

        n, p = values.shape
        m = len(grid)
        std = _standardize(values)
        Z = std.Z

        tss = float(np.sum((target - target.mean()) ** 2))

        beta = np.zeros(p)
        # start from the intercept-only fit
        b0 = float(target.mean())
        resid = target - b0

        coefs = np.zeros((p, m))
        intercepts = np.zeros(m)
        r2 = np.zeros(m)
        n_passes = np.zeros(m, dtype=int)
        converged = np.zeros(m, dtype=bool)

        for i, lam in enumerate(grid):
            b0, passes, ok = self._descend(Z, std.active, resid, beta, b0, lam, n)

            scaled = beta / std.scale
            coefs[:, i] = scaled
            intercepts[i] = b0 - float(scaled @ std.mean)

            rss = float(resid @ resid)
            r2[i] = 1.0 - rss / tss if tss > 0 else 0.0
            n_passes[i] = passes
            converged[i] = ok

        return LassoPath(
            feature_names=names,
            lambdas=grid,
            coefs=coefs,
            intercepts=intercepts,
            r2=r2,
            n_passes=n_passes,
            converged=converged,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _descend(
            self,
            Z: np.ndarray,
            active: np.ndarray,
            resid: np.ndarray,
            beta: np.ndarray,
            b0: float,
            lam: float,
            n: int,
    ) -> tuple[float, int, bool]:
        """
        Cyclic coordinate descent at one penalty.

        beta / resid are updated in place; resid always equals
        y - b0 - Z @ beta.
        """
        for sweep in range(1, self.max_passes + 1):
            max_delta = 0.0

            for j in active:
                z_j = Z[:, j]
                old = beta[j]
                # (1/n) * z_j . z_j == 1 for standardized columns
                rho = float(z_j @ resid) / n + old
                new = soft_threshold(rho, lam)

                if new != old:
                    resid -= (new - old) * z_j
                    beta[j] = new
                    max_delta = max(max_delta, abs(new - old))

            shift = float(resid.mean())
            b0 += shift
            resid -= shift
            max_delta = max(max_delta, abs(shift))

            scale = max(1.0, float(np.max(np.abs(beta))) if beta.size else 1.0)
            if max_delta <= self.tol * scale:
                return b0, sweep, True

        return b0, self.max_passes, False

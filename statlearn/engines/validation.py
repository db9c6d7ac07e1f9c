# statlearn/engines/validation.py
from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
import pandas as pd

from statlearn.utils.errors import DataValidationError, ParameterError


def as_matrix(
        X, feature_names: Optional[Sequence[str]] = None
) -> Tuple[np.ndarray, List[str]]:
    """
    Coerce a DataFrame / 2-D array-like into a finite float matrix.

    Feature names: explicit > DataFrame columns > x0..x{p-1}
    """
    if isinstance(X, pd.DataFrame):
        names = [str(c) for c in X.columns]
        values = X.to_numpy()
    else:
        values = np.asarray(X)
        names = None

    if values.ndim != 2:
        raise ParameterError(f"expected a 2-D matrix, got ndim={values.ndim}")

    n, p = values.shape
    if n < 1 or p < 1:
        raise ParameterError(f"matrix must be non-empty, got shape={values.shape}")

    try:
        values = values.astype(float)
    except (TypeError, ValueError) as e:
        raise DataValidationError(f"matrix is not numeric: {e}") from e

    if names is None:
        names = [f"x{j}" for j in range(p)]
    if feature_names is not None:
        names = [str(c) for c in feature_names]
        if len(names) != p:
            raise ParameterError(
                f"feature_names has {len(names)} entries, matrix has {p} columns"
            )

    bad = ~np.isfinite(values).all(axis=0)
    if bad.any():
        col = names[int(np.flatnonzero(bad)[0])]
        raise DataValidationError(f"column '{col}' contains NaN or infinite values")

    return values, names


def as_vector(y, n: int) -> np.ndarray:
    values = np.asarray(y, dtype=float).reshape(-1)
    if len(values) != n:
        raise ParameterError(
            f"response has {len(values)} rows, design matrix has {n}"
        )
    if not np.isfinite(values).all():
        raise DataValidationError("response contains NaN or infinite values")
    return values


def as_penalty_grid(lambdas) -> np.ndarray:
    grid = np.asarray(lambdas, dtype=float).reshape(-1)
    if grid.size == 0:
        raise ParameterError("penalty grid is empty")
    if not np.isfinite(grid).all() or (grid <= 0).any():
        raise ParameterError("penalty grid values must be finite and > 0")
    if (np.diff(grid) >= 0).any():
        raise ParameterError("penalty grid must be strictly descending")
    return grid

# statlearn/config/lasso_config.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class LassoConfig(BaseModel):
    """
    LassoConfig

    lambdas:
    - explicit descending grid, or None to derive a geometric grid
      from lambda_max(X, y) with n_lambdas / lambda_eps
    """

    lambdas: Optional[List[float]] = None
    n_lambdas: int = Field(default=100, ge=1)
    lambda_eps: float = Field(default=1e-3, gt=0, lt=1)

    tol: float = Field(default=1e-7, gt=0)
    max_passes: int = Field(default=1000, ge=1)

    # cross validation
    n_folds: int = Field(default=10, ge=2)
    cv_seed: int = 0
    n_jobs: int = 1

    @field_validator("lambdas")
    @classmethod
    def _strictly_descending(cls, v):
        if v is None:
            return v
        if not v:
            raise ValueError("lambdas must not be empty")
        if any(x <= 0 for x in v):
            raise ValueError("lambdas must be positive")
        if any(a <= b for a, b in zip(v, v[1:])):
            raise ValueError("lambdas must be strictly descending")
        return v

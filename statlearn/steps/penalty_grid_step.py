# statlearn/steps/penalty_grid_step.py
from __future__ import annotations

from typing import Optional, Sequence

import numpy as np

from statlearn import logs
from statlearn.engines.lasso_path_engine import LassoPathEngine
from statlearn.engines.validation import as_penalty_grid
from statlearn.pipeline.context import RegressionContext
from statlearn.pipeline.step import PipelineStep


class PenaltyGridStep(PipelineStep):
    """
    PenaltyGridStep

    - explicit lambdas win
    - otherwise a geometric grid from lambda_max(X, y)
    """

    requires = ("X", "y")

    def __init__(
            self,
            *,
            lambdas: Optional[Sequence[float]] = None,
            n_lambdas: int = 100,
            lambda_eps: float = 1e-3,
            inst=None,
    ):
        super().__init__(inst)
        self.lambdas = lambdas
        self.n_lambdas = n_lambdas
        self.lambda_eps = lambda_eps

    def run(self, ctx: RegressionContext) -> RegressionContext:
        if self.lambdas is not None:
            grid = as_penalty_grid(self.lambdas)
        else:
            grid = LassoPathEngine.lambda_grid(
                ctx.X, ctx.y, n_lambdas=self.n_lambdas, lambda_eps=self.lambda_eps
            )

        ctx.lambdas = np.asarray(grid, dtype=float)
        logs.info(
            f"[{self.step_name}] m={len(grid)} "
            f"lambda_max={grid[0]:.6g} lambda_min={grid[-1]:.6g}"
        )
        return ctx

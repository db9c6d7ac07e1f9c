# statlearn/steps/lasso_path_step.py
from __future__ import annotations

import numpy as np

from statlearn import logs
from statlearn.engines.lasso_path_engine import LassoPathEngine
from statlearn.pipeline.context import RegressionContext
from statlearn.pipeline.step import PipelineStep


class LassoPathStep(PipelineStep):
    """
    LassoPathStep

    Contract:
    - consumes ctx.X / ctx.y / ctx.lambdas
    - produces ctx.path
    """

    requires = ("X", "y", "lambdas")

    def __init__(self, engine: LassoPathEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: RegressionContext) -> RegressionContext:
        with self.timed():
            with self.inst.timer("LassoPath_fit"):
                path = self.engine.fit_path(ctx.X, ctx.y, ctx.lambdas)

        if not path.converged.all():
            logs.warning(
                f"[{self.step_name}] {int((~path.converged).sum())} penalties hit "
                f"max_passes={self.engine.max_passes}"
            )

        ctx.path = path
        ctx.metrics["r2_max"] = float(np.max(path.r2))
        ctx.metrics["n_nonzero_final"] = int(path.n_nonzero()[-1])
        self.inst.record("lasso.r2_max", ctx.metrics["r2_max"])
        return ctx

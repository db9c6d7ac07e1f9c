# statlearn/steps/cross_validate_step.py
from __future__ import annotations

from statlearn import logs
from statlearn.engines.cross_validate_engine import CrossValidateEngine
from statlearn.pipeline.context import RegressionContext
from statlearn.pipeline.step import PipelineStep


class CrossValidateStep(PipelineStep):
    """
    CrossValidateStep

    Contract:
    - consumes ctx.X / ctx.y / ctx.lambdas
    - produces ctx.cv (lambda_min, lambda_1se, error curve)
    """

    requires = ("X", "y", "lambdas")

    def __init__(self, engine: CrossValidateEngine, *, n_folds: int, seed: int, inst=None):
        super().__init__(inst)
        self.engine = engine
        self.n_folds = n_folds
        self.seed = seed

    def run(self, ctx: RegressionContext) -> RegressionContext:
        with self.timed():
            with self.inst.timer(f"CrossValidate_k{self.n_folds}"):
                cv = self.engine.cross_validate(
                    ctx.X,
                    ctx.y,
                    ctx.lambdas,
                    n_folds=self.n_folds,
                    seed=self.seed,
                    refit=ctx.path is None,
                )

        if ctx.path is None:
            ctx.path = cv.path
        ctx.cv = cv

        ctx.metrics["lambda_min"] = cv.lambda_min
        ctx.metrics["lambda_1se"] = cv.lambda_1se
        ctx.metrics["cv_mse_min"] = float(cv.cv_mean[cv.index_min])

        coefs = ctx.path.coef_at(cv.lambda_min)
        kept = [name for name, value in coefs.items() if value != 0]
        logs.info(
            f"[{self.step_name}] lambda_min={cv.lambda_min:.6g} "
            f"lambda_1se={cv.lambda_1se:.6g} kept={kept}"
        )
        self.inst.record("cv.lambda_min", cv.lambda_min)
        return ctx

# statlearn/steps/kmeans_step.py
from __future__ import annotations

from statlearn import logs
from statlearn.engines.kmeans_engine import KMeansEngine
from statlearn.pipeline.context import ClusteringContext
from statlearn.pipeline.step import PipelineStep


class KMeansStep(PipelineStep):
    """
    KMeansStep

    Contract:
    - consumes ctx.points
    - produces ctx.clusters and ctx.labeled (selected rows + cluster column)
    """

    requires = ("table", "points")

    def __init__(self, engine: KMeansEngine, *, k: int, inst=None):
        super().__init__(inst)
        self.engine = engine
        self.k = k

    def run(self, ctx: ClusteringContext) -> ClusteringContext:
        with self.timed():
            with self.inst.timer(f"KMeans_k{self.k}"):
                result = self.engine.fit(ctx.points, self.k)

        if not result.converged:
            logs.warning(
                f"[{self.step_name}] stopped at max_iter={self.engine.max_iter}"
            )

        ctx.clusters = result
        ctx.labeled = result.labeled_frame(ctx.table.loc[ctx.points.index])

        ctx.metrics["inertia"] = result.inertia
        ctx.metrics["cluster_sizes"] = result.cluster_sizes().tolist()
        logs.info(
            f"[{self.step_name}] k={self.k} inertia={result.inertia:.4f} "
            f"iters={result.n_iter} sizes={ctx.metrics['cluster_sizes']}"
        )
        self.inst.record("kmeans.inertia", result.inertia)
        return ctx

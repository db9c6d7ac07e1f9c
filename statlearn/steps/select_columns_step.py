# statlearn/steps/select_columns_step.py
from __future__ import annotations

from typing import Iterable

from statlearn import logs
from statlearn.data.table_loader import select_numeric
from statlearn.pipeline.context import ClusteringContext
from statlearn.pipeline.step import PipelineStep


class SelectColumnsStep(PipelineStep):
    """
    SelectColumnsStep

    - consumes ctx.table
    - produces ctx.points (numeric, complete rows; index kept for labeling)
    """

    requires = ("table",)

    def __init__(self, columns: Iterable[str], inst=None):
        super().__init__(inst)
        self.columns = list(columns)

    def run(self, ctx: ClusteringContext) -> ClusteringContext:
        points = select_numeric(ctx.table, self.columns)
        dropped = len(ctx.table) - len(points)
        if dropped:
            logs.warning(f"[{self.step_name}] dropped {dropped} incomplete rows")

        ctx.points = points
        logs.info(f"[{self.step_name}] n={len(points)} columns={self.columns}")
        return ctx

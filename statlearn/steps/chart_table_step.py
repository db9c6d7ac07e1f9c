# statlearn/steps/chart_table_step.py
from __future__ import annotations

from pathlib import Path
from typing import Dict

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from statlearn import logs
from statlearn.pipeline.context import ClusteringContext, RegressionContext, RunContext
from statlearn.pipeline.step import PipelineStep


class ChartTableStep(PipelineStep):
    """
    ChartTableStep

    Semantics:
    - collect long (x, y, group) tables for the plotting collaborator
    - write each one as <run_dir>/<name>.parquet
    - register paths in ctx.artifacts
    """

    def run(self, ctx: RunContext) -> RunContext:
        tables = self._collect(ctx)
        if not tables:
            logs.warning(f"[{self.step_name}] nothing to write")
            return ctx

        with self.timed():
            for name, frame in tables.items():
                with self.inst.timer(f"ChartTable_{name}"):
                    ctx.artifacts[name] = self._write(ctx.run_dir, name, frame)

        logs.info(f"[{self.step_name}] wrote {sorted(tables)} -> {ctx.run_dir}")
        return ctx

    # ------------------------------------------------------------------
    @staticmethod
    def _collect(ctx: RunContext) -> Dict[str, pd.DataFrame]:
        tables: Dict[str, pd.DataFrame] = {}

        if isinstance(ctx, RegressionContext):
            if ctx.path is not None:
                tables["coef_path"] = ctx.path.to_chart_table()
                tables["path_summary"] = ctx.path.summary()
            if ctx.cv is not None:
                tables["cv_curve"] = ctx.cv.to_chart_table()

        if isinstance(ctx, ClusteringContext) and ctx.clusters is not None:
            tables["clusters"] = ctx.clusters.to_chart_table(
                ctx.points.to_numpy(), list(ctx.points.columns)
            )
            tables["labeled"] = ctx.labeled

        return tables

    @staticmethod
    def _write(run_dir: Path, name: str, frame: pd.DataFrame) -> Path:
        output = Path(run_dir) / f"{name}.parquet"
        if "group" in frame.columns:
            # feature names and cluster ids share one string column type
            frame = frame.astype({"group": str})
        pq.write_table(pa.Table.from_pandas(frame, preserve_index=False), output)
        return output

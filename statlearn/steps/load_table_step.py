# statlearn/steps/load_table_step.py
from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from statlearn import logs
from statlearn.data.table_loader import TableLoadEngine
from statlearn.pipeline.context import RunContext
from statlearn.pipeline.step import PipelineStep


class LoadTableStep(PipelineStep):
    """
    LoadTableStep

    Contract:
    - produces ctx.table
    - fails fast on missing / unusable input (see TableLoadEngine)
    """

    def __init__(
            self,
            path: str | Path,
            *,
            required_columns: Optional[Iterable[str]] = None,
            engine: Optional[TableLoadEngine] = None,
            inst=None,
    ):
        super().__init__(inst)
        self.path = Path(path)
        self.required_columns = list(required_columns) if required_columns else None
        self.engine = engine if engine is not None else TableLoadEngine()

    def run(self, ctx: RunContext) -> RunContext:
        with self.timed():
            with self.inst.timer(f"LoadTable_{self.path.stem}"):
                ctx.table = self.engine.load(
                    self.path, required_columns=self.required_columns
                )

        ctx.metrics["rows_loaded"] = len(ctx.table)
        logs.info(f"[{self.step_name}] {self.path.name} -> {ctx.table.shape}")
        return ctx

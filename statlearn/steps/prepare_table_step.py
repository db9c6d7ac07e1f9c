# statlearn/steps/prepare_table_step.py
from __future__ import annotations

from typing import Iterable, Mapping, Optional

from statlearn import logs
from statlearn.data.table_loader import apply_labels, sample_rows
from statlearn.pipeline.context import RunContext
from statlearn.pipeline.step import PipelineStep
from statlearn.utils.errors import DataValidationError


class PrepareTableStep(PipelineStep):
    """
    PrepareTableStep

    Semantics (in order):
    - drop unused columns
    - replace coded factor values with labels
    - drop incomplete rows
    - take a seeded fixed-size sample
    """

    requires = ("table",)

    def __init__(
            self,
            *,
            drop_columns: Iterable[str] = (),
            labels: Optional[Mapping[str, Mapping[str, str]]] = None,
            sample_size: Optional[int] = None,
            seed: int = 0,
            inst=None,
    ):
        super().__init__(inst)
        self.drop_columns = list(drop_columns)
        self.labels = dict(labels or {})
        self.sample_size = sample_size
        self.seed = seed

    def run(self, ctx: RunContext) -> RunContext:
        table = ctx.table

        missing = [c for c in self.drop_columns if c not in table.columns]
        if missing:
            raise DataValidationError(
                f"cannot drop missing column(s): {', '.join(missing)}"
            )
        table = table.drop(columns=self.drop_columns)

        if self.labels:
            table = apply_labels(table, self.labels)

        before = len(table)
        table = table.dropna()
        if len(table) < before:
            logs.warning(f"[{self.step_name}] dropped {before - len(table)} incomplete rows")

        table = sample_rows(table, self.sample_size, self.seed)

        ctx.table = table
        ctx.metrics["rows_used"] = len(table)
        logs.info(f"[{self.step_name}] rows={len(table)} seed={self.seed}")
        return ctx

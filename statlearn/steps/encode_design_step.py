# statlearn/steps/encode_design_step.py
from __future__ import annotations

from typing import Iterable, Mapping, Optional

import pandas as pd

from statlearn import logs
from statlearn.data.encoder import encode_categoricals
from statlearn.pipeline.context import RegressionContext
from statlearn.pipeline.step import PipelineStep
from statlearn.utils.errors import DataValidationError


class EncodeDesignStep(PipelineStep):
    """
    EncodeDesignStep

    Contract:
    - consumes ctx.table
    - produces ctx.X (indicator-expanded design matrix), ctx.y, ctx.levels
    """

    requires = ("table",)

    def __init__(
            self,
            *,
            response: str,
            categorical_columns: Iterable[str] = (),
            reference_levels: Optional[Mapping[str, str]] = None,
            inst=None,
    ):
        super().__init__(inst)
        self.response = response
        self.categorical_columns = list(categorical_columns)
        self.reference_levels = dict(reference_levels or {})

    def run(self, ctx: RegressionContext) -> RegressionContext:
        table = ctx.table

        if self.response not in table.columns:
            raise DataValidationError(f"response column '{self.response}' not found")
        if self.response in self.categorical_columns:
            raise DataValidationError(
                f"response column '{self.response}' cannot be categorical"
            )

        y = table[self.response]
        if not pd.api.types.is_numeric_dtype(y):
            raise DataValidationError(f"response column '{self.response}' is not numeric")

        with self.timed():
            encoded = encode_categoricals(
                table.drop(columns=[self.response]),
                self.categorical_columns,
                reference=self.reference_levels,
            )

        ctx.X = encoded.frame
        ctx.y = y.astype(float)
        ctx.levels = encoded.levels

        logs.info(
            f"[{self.step_name}] n={len(ctx.X)} p={ctx.X.shape[1]} "
            f"features={encoded.feature_names}"
        )
        return ctx

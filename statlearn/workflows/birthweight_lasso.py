# statlearn/workflows/birthweight_lasso.py
from __future__ import annotations

from typing import Optional

from statlearn.config.app_config import AppConfig
from statlearn.engines.cross_validate_engine import CrossValidateEngine
from statlearn.engines.lasso_path_engine import LassoPathEngine
from statlearn.observability.instrumentation import Instrumentation
from statlearn.pipeline.context import RegressionContext
from statlearn.pipeline.pipeline import StatsPipeline
from statlearn.steps.artifact_persist_step import ArtifactPersistStep
from statlearn.steps.chart_table_step import ChartTableStep
from statlearn.steps.cross_validate_step import CrossValidateStep
from statlearn.steps.encode_design_step import EncodeDesignStep
from statlearn.steps.lasso_path_step import LassoPathStep
from statlearn.steps.load_table_step import LoadTableStep
from statlearn.steps.penalty_grid_step import PenaltyGridStep
from statlearn.steps.prepare_table_step import PrepareTableStep
from statlearn.utils.path import PathManager


def build_birthweight_lasso(
        cfg: Optional[AppConfig] = None,
        inst: Optional[Instrumentation] = None,
) -> StatsPipeline:
    """
    birthweight.csv -> labels -> sample -> indicators -> lasso path -> CV -> artifacts
    """
    if cfg is None:
        cfg = AppConfig.load()
    inst = inst if inst is not None else Instrumentation()

    data = cfg.data.birthweight
    lasso = cfg.lasso

    engine = LassoPathEngine(tol=lasso.tol, max_passes=lasso.max_passes)

    steps = [
        LoadTableStep(
            PathManager.data_file(data.path),
            required_columns=[data.response, *data.categorical_columns, *data.drop_columns],
            inst=inst,
        ),
        PrepareTableStep(
            drop_columns=data.drop_columns,
            labels=data.labels,
            sample_size=data.sample_size,
            seed=data.sample_seed,
            inst=inst,
        ),
        EncodeDesignStep(
            response=data.response,
            categorical_columns=data.categorical_columns,
            reference_levels=data.reference_levels,
            inst=inst,
        ),
        PenaltyGridStep(
            lambdas=lasso.lambdas,
            n_lambdas=lasso.n_lambdas,
            lambda_eps=lasso.lambda_eps,
            inst=inst,
        ),
        LassoPathStep(engine, inst=inst),
        CrossValidateStep(
            CrossValidateEngine(engine, n_jobs=lasso.n_jobs),
            n_folds=lasso.n_folds,
            seed=lasso.cv_seed,
            inst=inst,
        ),
        ChartTableStep(inst=inst),
    ]
    if cfg.output.persist_models:
        steps.append(ArtifactPersistStep(inst=inst))

    return StatsPipeline(
        name="birthweight-lasso",
        steps=steps,
        context_factory=RegressionContext,
        cfg=cfg,
        inst=inst,
        output_dir=cfg.output.dir,
    )

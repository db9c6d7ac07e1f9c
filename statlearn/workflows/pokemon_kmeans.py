# statlearn/workflows/pokemon_kmeans.py
from __future__ import annotations

from typing import Optional

from statlearn.config.app_config import AppConfig
from statlearn.engines.kmeans_engine import KMeansEngine
from statlearn.observability.instrumentation import Instrumentation
from statlearn.pipeline.context import ClusteringContext
from statlearn.pipeline.pipeline import StatsPipeline
from statlearn.steps.artifact_persist_step import ArtifactPersistStep
from statlearn.steps.chart_table_step import ChartTableStep
from statlearn.steps.kmeans_step import KMeansStep
from statlearn.steps.load_table_step import LoadTableStep
from statlearn.steps.select_columns_step import SelectColumnsStep
from statlearn.utils.path import PathManager


def build_pokemon_kmeans(
        cfg: Optional[AppConfig] = None,
        inst: Optional[Instrumentation] = None,
) -> StatsPipeline:
    """
    pokemon.csv -> feature columns -> k-means -> cluster-labeled table -> artifacts
    """
    if cfg is None:
        cfg = AppConfig.load()
    inst = inst if inst is not None else Instrumentation()

    km = cfg.kmeans

    steps = [
        LoadTableStep(
            PathManager.data_file(cfg.data.pokemon.path),
            required_columns=km.feature_columns,
            inst=inst,
        ),
        SelectColumnsStep(km.feature_columns, inst=inst),
        KMeansStep(
            KMeansEngine(
                init=km.init,
                n_init=km.n_init,
                max_iter=km.max_iter,
                seed=km.seed,
                n_jobs=km.n_jobs,
            ),
            k=km.k,
            inst=inst,
        ),
        ChartTableStep(inst=inst),
    ]
    if cfg.output.persist_models:
        steps.append(ArtifactPersistStep(inst=inst))

    return StatsPipeline(
        name="pokemon-kmeans",
        steps=steps,
        context_factory=ClusteringContext,
        cfg=cfg,
        inst=inst,
        output_dir=cfg.output.dir,
    )

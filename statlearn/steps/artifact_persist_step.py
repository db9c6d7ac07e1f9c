# statlearn/steps/artifact_persist_step.py
from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

import joblib

from statlearn import logs
from statlearn.observability.metrics import to_plain
from statlearn.pipeline.context import ClusteringContext, RegressionContext, RunContext
from statlearn.pipeline.step import PipelineStep


class ArtifactPersistStep(PipelineStep):
    """
    ArtifactPersistStep

    Semantics:
    - persist run-scoped fitted results (joblib)
    - persist the effective config (config.yml)
    - persist run.json: run id, metrics, timeline, artifact paths
    """

    @logs.catch()
    def run(self, ctx: RunContext) -> RunContext:
        run_dir = Path(ctx.run_dir)
        run_dir.mkdir(parents=True, exist_ok=True)

        results = {}
        if isinstance(ctx, RegressionContext):
            results = {"lasso_path": ctx.path, "cv": ctx.cv}
        elif isinstance(ctx, ClusteringContext):
            results = {"kmeans": ctx.clusters}

        for name, obj in results.items():
            if obj is None:
                continue
            out = run_dir / f"{name}.joblib"
            joblib.dump(obj, out)
            ctx.artifacts[name] = out

        if hasattr(ctx.cfg, "dump"):
            ctx.artifacts["config"] = ctx.cfg.dump(run_dir / "config.yml")

        meta = {
            "run_id": ctx.run_id,
            "created_at": datetime.now(timezone.utc).isoformat(),
            "metrics": {k: to_plain(v) for k, v in ctx.metrics.items()},
            "instrumentation": self.inst.snapshot(),
            "artifacts": {k: str(v) for k, v in ctx.artifacts.items()},
        }
        if isinstance(ctx, RegressionContext):
            meta["levels"] = ctx.levels

        meta_path = run_dir / "run.json"
        meta_path.write_text(json.dumps(meta, indent=2, default=str), encoding="utf-8")
        ctx.artifacts["run"] = meta_path

        logs.info(f"[{self.step_name}] persisted {sorted(ctx.artifacts)} -> {run_dir}")
        return ctx

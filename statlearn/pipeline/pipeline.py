# statlearn/pipeline/pipeline.py
from __future__ import annotations

from datetime import datetime
from typing import Callable, List, Optional

from statlearn import logs
from statlearn.observability.instrumentation import Instrumentation
from statlearn.pipeline.context import RunContext
from statlearn.pipeline.step import PipelineStep
from statlearn.utils.path import PathManager


def new_run_id(prefix: str) -> str:
    return f"{prefix}-{datetime.now().strftime('%Y%m%d-%H%M%S')}"


class StatsPipeline:
    """
    StatsPipeline = scheduler

    - the pipeline owns ordering and the context
    - steps own their timing (PipelineStep.timed)
    - one run() == one batch computation; nothing to roll back
    """

    def __init__(
            self,
            *,
            name: str,
            steps: List[PipelineStep],
            context_factory: Callable[..., RunContext],
            cfg,
            inst: Instrumentation,
            output_dir: Optional[str] = None,
    ):
        self.name = name
        self.steps = steps
        self.context_factory = context_factory
        self.cfg = cfg
        self.inst = inst
        self.output_dir = output_dir

    def run(self, run_id: Optional[str] = None) -> RunContext:
        run_id = run_id or new_run_id(self.name)
        logs.info(f"[Pipeline] ====== START {self.name} run_id={run_id} ======")

        if self.output_dir:
            run_dir = PathManager.ensure_dir(f"{self.output_dir}/{run_id}")
        else:
            run_dir = PathManager.ensure_dir(PathManager.run_dir(run_id))

        ctx = self.context_factory(run_id=run_id, cfg=self.cfg, run_dir=run_dir)

        for step in self.steps:
            step.check_inputs(ctx)
            ctx = step.run(ctx)

        self.inst.generate_timeline_report(run_id)
        logs.info(f"[Pipeline] ====== DONE {self.name} run_id={run_id} ======")
        return ctx

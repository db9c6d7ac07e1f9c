#!filepath: statlearn/pipeline/step.py
from __future__ import annotations

from typing import Tuple

from statlearn.observability.instrumentation import (
    Instrumentation,
    NoOpInstrumentation,
)


class PipelineStep:
    """
    PipelineStep base

    A step wraps exactly one engine call (or one table transform):
      - `requires` names the context fields an upstream step must have set;
        StatsPipeline checks them before run()
      - timed() is the step scope; leaf timers inside it land on the timeline
      - behaviour never depends on whether instrumentation is enabled
    """

    requires: Tuple[str, ...] = ()

    def __init__(self, inst: Instrumentation | None = None):
        self.inst: Instrumentation | NoOpInstrumentation = (
            inst if inst is not None else NoOpInstrumentation()
        )

    @property
    def step_name(self) -> str:
        return self.__class__.__name__

    def check_inputs(self, ctx) -> None:
        missing = [name for name in self.requires if getattr(ctx, name, None) is None]
        if missing:
            raise RuntimeError(
                f"[{self.step_name}] upstream output(s) not set: {', '.join(missing)}"
            )

    def timed(self):
        return self.inst.timer(self.step_name, record=False)

    def run(self, ctx):
        raise NotImplementedError

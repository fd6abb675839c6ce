from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Protocol, Sequence

from .errors import InstallerError
from .installer_config import InstallerConfig
from .lib.command import CmdResult, OutputSink
from .state import ERROR, INFO, SUCCESS, Options, PipelineState

logger = logging.getLogger(__name__)


class Runner(Protocol):
    def exists(self, command: str) -> bool:
        ...

    def run(
        self,
        command: str,
        args: Sequence[str],
        cwd: str | None,
        sink: Optional[OutputSink] = None,
    ) -> CmdResult:
        ...


@dataclass(frozen=True)
class StepContext:
    runner: Runner
    config: InstallerConfig
    install_path: str
    options: Options
    sink: Optional[OutputSink] = None


@dataclass(frozen=True)
class PipelineStep:
    """One install step. ``action`` raises InstallerError on failure."""

    step_id: str
    label: str
    start_message: str
    success_message: str
    action: Callable[[StepContext], None]
    target_progress: float
    fatal_on_failure: bool = True


@dataclass(frozen=True)
class PipelineResult:
    ran_steps: List[str]
    failed_step: Optional[str] = None
    error: Optional[InstallerError] = None


def run_pipeline(
    *,
    steps: Sequence[PipelineStep],
    state: PipelineState,
    ctx: StepContext,
) -> PipelineResult:
    """Run steps in order; the first fatal failure stops the rest."""

    ran: List[str] = []
    state.start()

    for step in steps:
        logger.info("Running step %s", step.step_id)
        state.append_log(INFO, step.start_message)

        try:
            step.action(ctx)
        except InstallerError as e:
            state.append_log(ERROR, f"✗ {step.label} failed: {e}")
            if step.fatal_on_failure:
                logger.error("Step %s failed: %s", step.step_id, e)
                state.fail(str(e))
                return PipelineResult(ran_steps=ran, failed_step=step.step_id, error=e)

            logger.warning("Step %s failed (continuing): %s", step.step_id, e)
            ran.append(step.step_id)
            state.advance(step.target_progress)
            continue

        state.append_log(SUCCESS, step.success_message)
        state.advance(step.target_progress)
        ran.append(step.step_id)

    state.finish()
    logger.info("Pipeline complete (ran=%s)", ",".join(ran))
    return PipelineResult(ran_steps=ran)


def start_pipeline_thread(
    *,
    steps: Sequence[PipelineStep],
    state: PipelineState,
    ctx: StepContext,
) -> threading.Thread:
    """Run the pipeline on a daemon thread; quitting the app does not wait for it."""

    def _target() -> None:
        try:
            run_pipeline(steps=steps, state=state, ctx=ctx)
        except Exception as e:
            logger.exception("Install pipeline crashed")
            state.append_log(ERROR, f"✗ Unexpected error: {e}")
            state.fail(f"Unexpected error: {e}")

    t = threading.Thread(target=_target, name="install-pipeline", daemon=True)
    t.start()
    return t

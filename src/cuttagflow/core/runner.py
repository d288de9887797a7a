"""Checkpoint-aware stage execution with two-sample fan-out."""

from __future__ import annotations

import time
from concurrent.futures import ALL_COMPLETED, ThreadPoolExecutor, wait
from typing import Callable, Mapping, Optional

from cuttagflow.core.checkpoint import CheckpointStore
from cuttagflow.core.pipeline_types import PipelineStage, SampleRole
from cuttagflow.exceptions import PipelineError, StageExecutionError
from cuttagflow.utils.logging import LogTemplates, get_logger

WorkUnit = Callable[[], object]


class StageRunner:
    """Run a stage's work unit(s) unless its checkpoint marker exists.

    Paired work units (one per sample) run concurrently on two threads. The
    runner always waits for both to finish; a failure in one does not cancel
    the other. The marker is written only when every unit succeeds.
    """

    def __init__(self, checkpoints: CheckpointStore):
        self.checkpoints = checkpoints
        self.logger = get_logger("runner")

    def run(
        self,
        stage: PipelineStage,
        work_unit: Optional[WorkUnit] = None,
        paired: Optional[Mapping[SampleRole, WorkUnit]] = None,
        finalize: Optional[WorkUnit] = None,
    ) -> bool:
        """Execute the stage if pending.

        `finalize` runs after every work unit succeeded and before the marker
        is written; an error there fails the stage too.

        Returns:
            True if the stage ran, False if it was skipped as already done.

        Raises:
            StageExecutionError: if any work unit raised.
        """
        if (work_unit is None) == (paired is None):
            raise PipelineError(
                f"Stage {stage.name} needs exactly one of work_unit or paired work units"
            )

        if self.checkpoints.is_stage_done(stage):
            self.logger.info(
                LogTemplates.STAGE_SKIPPED.format(stage_number=stage.number, stage_name=stage.name)
            )
            return False

        self.logger.info(
            LogTemplates.STAGE_START.format(stage_number=stage.number, stage_name=stage.name)
        )
        start = time.time()

        if paired is not None:
            failures = self._run_paired(stage, paired)
        else:
            failures = self._run_single(work_unit)
        if not failures and finalize is not None:
            failures = self._run_single(finalize)

        duration = time.time() - start
        if failures:
            detail = "; ".join(f"{name}: {exc}" for name, exc in failures.items())
            self.logger.error(
                LogTemplates.STAGE_FAILURE.format(
                    stage_number=stage.number, stage_name=stage.name, error=detail
                )
            )
            first = next(iter(failures.values()))
            raise StageExecutionError(
                f"Stage {stage.number} ({stage.name}) failed: {detail}",
                stage=stage.name,
                failures=failures,
            ) from first

        self.checkpoints.mark_stage_done(stage)
        self.logger.info(
            LogTemplates.STAGE_SUCCESS.format(
                stage_number=stage.number, stage_name=stage.name, duration=duration
            )
        )
        return True

    @staticmethod
    def _run_single(work_unit: WorkUnit) -> dict[str, BaseException]:
        try:
            work_unit()
        except Exception as exc:
            return {"stage": exc}
        return {}

    def _run_paired(
        self, stage: PipelineStage, paired: Mapping[SampleRole, WorkUnit]
    ) -> dict[str, BaseException]:
        failures: dict[str, BaseException] = {}
        with ThreadPoolExecutor(max_workers=2, thread_name_prefix=stage.name) as executor:
            futures = {executor.submit(unit): role for role, unit in paired.items()}
            wait(futures, return_when=ALL_COMPLETED)

        for future, role in futures.items():
            exc = future.exception()
            if exc is not None:
                self.logger.error(f"{stage.name} failed for {role.label}: {exc}")
                failures[role.label] = exc
        return failures

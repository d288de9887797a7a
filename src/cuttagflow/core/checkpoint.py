"""File-backed stage checkpoints and cached spike-in counts.

A stage is DONE iff its marker file ``<prefix>.<n>_<name>.done`` exists in
the checkpoint directory. Markers are created only after a stage succeeds
and are never removed by the pipeline; delete a marker by hand to force a
stage to run again.

Spike-in counts are cached as decimal text in ``<prefix>.<key>.count`` so a
resumed run can recompute normalization factors without realigning.
"""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

from cuttagflow.core.pipeline_types import PipelineStage, SampleRole, StageStatus
from cuttagflow.exceptions import SpikeinCountError
from cuttagflow.utils.logging import get_logger


class CheckpointStore:
    """Stage markers and scalar caches for one run prefix."""

    def __init__(self, checkpoint_dir: Path, prefix: str):
        self.checkpoint_dir = Path(checkpoint_dir)
        self.prefix = prefix
        self.logger = get_logger("checkpoint")

    def marker_path(self, stage: PipelineStage) -> Path:
        return self.checkpoint_dir / f"{self.prefix}.{stage.label}.done"

    def cache_path(self, key: str) -> Path:
        return self.checkpoint_dir / f"{self.prefix}.{key}.count"

    def status(self, stage: PipelineStage) -> StageStatus:
        return StageStatus.DONE if self.marker_path(stage).exists() else StageStatus.PENDING

    def is_stage_done(self, stage: PipelineStage) -> bool:
        return self.status(stage) is StageStatus.DONE

    def mark_stage_done(self, stage: PipelineStage) -> None:
        marker = self.marker_path(stage)
        marker.parent.mkdir(parents=True, exist_ok=True)
        marker.touch()
        self.logger.debug(f"Checkpoint written: {marker}")

    def cache_value(self, key: str, value) -> None:
        path = self.cache_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(f"{value}\n", encoding="utf-8")

    def read_cached_value(self, key: str) -> Optional[str]:
        """Return the cached text (stripped), or None if the cache file is absent."""
        path = self.cache_path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8").strip()

    def cache_count(self, role: SampleRole, count: int) -> None:
        self.cache_value(role.cache_key, count)

    def read_count(self, role: SampleRole) -> int:
        """Return a cached spike-in count; missing, empty or non-integer caches are fatal."""
        text = self.read_cached_value(role.cache_key)
        if not text:
            raise SpikeinCountError(
                f"Spike-in count for {role.label} is missing or empty "
                f"({self.cache_path(role.cache_key)})"
            )
        try:
            return int(text)
        except ValueError:
            raise SpikeinCountError(
                f"Spike-in count for {role.label} is not an integer: {text!r}"
            ) from None

    def summary(self, stages: Iterable[PipelineStage]) -> dict[str, StageStatus]:
        return {stage.name: self.status(stage) for stage in stages}

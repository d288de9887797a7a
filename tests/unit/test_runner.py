"""Tests for checkpoint-aware stage execution."""

import threading

import pytest

from cuttagflow.core.checkpoint import CheckpointStore
from cuttagflow.core.pipeline_types import SampleRole
from cuttagflow.core.runner import StageRunner
from cuttagflow.core.steps.definitions import STAGES_BY_NAME
from cuttagflow.exceptions import PipelineError, StageExecutionError


@pytest.fixture
def store(tmp_path):
    return CheckpointStore(tmp_path / "0_Checkpoints", "exp")


@pytest.fixture
def runner(store):
    return StageRunner(store)


def test_single_unit_runs_and_marks(runner, store):
    calls = []
    stage = STAGES_BY_NAME["peakcall"]
    assert runner.run(stage, work_unit=lambda: calls.append("ran")) is True
    assert calls == ["ran"]
    assert store.is_stage_done(stage)


def test_done_stage_is_skipped(runner, store):
    stage = STAGES_BY_NAME["motif"]
    store.mark_stage_done(stage)
    calls = []
    assert runner.run(stage, work_unit=lambda: calls.append("ran")) is False
    assert calls == []


def test_single_failure_leaves_no_marker(runner, store):
    stage = STAGES_BY_NAME["annotation"]

    def boom():
        raise RuntimeError("bedtools exploded")

    with pytest.raises(StageExecutionError, match="bedtools exploded") as excinfo:
        runner.run(stage, work_unit=boom)
    assert excinfo.value.stage == "annotation"
    assert not store.is_stage_done(stage)


def test_paired_units_run_concurrently(runner, store):
    stage = STAGES_BY_NAME["qc"]
    barrier = threading.Barrier(2, timeout=5)
    seen = {}

    def unit(role):
        def _run():
            # both units must be in flight at once to pass the barrier
            barrier.wait()
            seen[role] = threading.current_thread().name

        return _run

    assert runner.run(stage, paired={role: unit(role) for role in SampleRole}) is True
    assert set(seen) == set(SampleRole)
    assert all(name.startswith("qc") for name in seen.values())
    assert store.is_stage_done(stage)


def test_paired_failure_waits_for_other_sample(runner, store):
    stage = STAGES_BY_NAME["genome"]
    finished = threading.Event()

    def fail():
        raise RuntimeError("bowtie2 exit 1")

    def slow_success():
        finished.wait(0.2)
        finished.set()

    with pytest.raises(StageExecutionError) as excinfo:
        runner.run(
            stage,
            paired={SampleRole.TREATMENT: fail, SampleRole.CONTROL: slow_success},
        )

    assert finished.is_set()
    assert list(excinfo.value.failures) == ["Treatment"]
    assert not store.is_stage_done(stage)


def test_paired_failures_are_aggregated(runner):
    stage = STAGES_BY_NAME["spikein"]

    def fail(msg):
        def _run():
            raise RuntimeError(msg)

        return _run

    with pytest.raises(StageExecutionError) as excinfo:
        runner.run(stage, paired={role: fail(role.label) for role in SampleRole})
    assert set(excinfo.value.failures) == {"Treatment", "Control"}


def test_finalize_failure_blocks_marker(runner, store):
    stage = STAGES_BY_NAME["spikein"]

    def check():
        raise PipelineError("count cache missing")

    with pytest.raises(StageExecutionError, match="count cache missing"):
        runner.run(stage, paired={role: (lambda: None) for role in SampleRole}, finalize=check)
    assert not store.is_stage_done(stage)


def test_requires_exactly_one_kind_of_unit(runner):
    stage = STAGES_BY_NAME["qc"]
    with pytest.raises(PipelineError):
        runner.run(stage)
    with pytest.raises(PipelineError):
        runner.run(stage, work_unit=lambda: None, paired={SampleRole.TREATMENT: lambda: None})

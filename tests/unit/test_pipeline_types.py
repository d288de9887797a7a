"""Tests for pipeline types and the fixed stage order."""

from pathlib import Path

import pytest

from cuttagflow.core.pipeline_types import Sample, SampleRole
from cuttagflow.core.steps.definitions import PIPELINE_STAGES, STAGES_BY_NAME


def test_stage_order_and_numbers():
    assert [(s.number, s.name) for s in PIPELINE_STAGES] == [
        (1, "qc"), (2, "spikein"), (3, "genome"), (4, "peakcall"),
        (5, "annotation"), (6, "metaplot"), (7, "motif"),
    ]


def test_only_first_three_stages_are_paired():
    assert [s.name for s in PIPELINE_STAGES if s.paired] == ["qc", "spikein", "genome"]


def test_stage_label_and_hashable():
    stage = STAGES_BY_NAME["metaplot"]
    assert stage.label == "6_metaplot"
    assert {stage: 1}[stage] == 1
    with pytest.raises(AttributeError):
        stage.number = 9


def test_sample_identity():
    sample = Sample(SampleRole.TREATMENT, Path("r1"), Path("r2"), "exp")
    assert sample.sample_id == "exp_Treatment"
    assert SampleRole.TREATMENT.cache_key == "treat"
    assert SampleRole.CONTROL.cache_key == "ctrl"

"""Tests for the ExternalTool base class."""

import subprocess
from unittest.mock import MagicMock, patch

import pytest

from cuttagflow.exceptions import ExternalToolError
from cuttagflow.external.base import ExternalTool


class DummyTool(ExternalTool):
    tool_name = "dummy"


def test_missing_tool_raises():
    with patch("cuttagflow.external.base.shutil.which", return_value=None):
        with pytest.raises(ExternalToolError, match="dummy not found"):
            DummyTool()


@patch.object(DummyTool, "_check_installation")
def test_run_failure_wrapped(mock_check):
    error = subprocess.CalledProcessError(3, ["dummy"], stderr="bad input")
    with patch("cuttagflow.external.base.subprocess.run", side_effect=error):
        with pytest.raises(ExternalToolError) as excinfo:
            DummyTool().run(["dummy", "x"])
    assert excinfo.value.returncode == 3
    assert excinfo.value.stderr == "bad input"
    assert excinfo.value.command == ["dummy", "x"]


@patch.object(DummyTool, "_check_installation")
def test_run_missing_executable_wrapped(mock_check):
    with patch("cuttagflow.external.base.subprocess.run", side_effect=FileNotFoundError("dummy")):
        with pytest.raises(ExternalToolError):
            DummyTool().run(["dummy"])


@patch.object(DummyTool, "_check_installation")
def test_run_stringifies_arguments(mock_check, tmp_path):
    result = MagicMock(stdout="out", stderr="", returncode=0)
    with patch("cuttagflow.external.base.subprocess.run", return_value=result) as mock_run:
        assert DummyTool().run(["dummy", tmp_path, 3]) == ("out", "")
    assert mock_run.call_args[0][0] == ["dummy", str(tmp_path), "3"]


@patch.object(DummyTool, "_check_installation")
def test_run_log_file_failure_reports_tail(mock_check, tmp_path):
    log = tmp_path / "logs" / "tool.log"

    def fake_run(cmd, **kwargs):
        kwargs["stdout"].write("fatal: index missing\n")
        return MagicMock(returncode=2)

    with patch("cuttagflow.external.base.subprocess.run", side_effect=fake_run):
        with pytest.raises(ExternalToolError) as excinfo:
            DummyTool().run(["dummy"], log_file=log)
    assert "index missing" in excinfo.value.stderr
    assert log.exists()


@patch.object(DummyTool, "_check_installation")
def test_run_stdout_file(mock_check, tmp_path):
    out = tmp_path / "nested" / "out.txt"

    def fake_run(cmd, **kwargs):
        kwargs["stdout"].write("row\n")
        return MagicMock(returncode=0, stderr="")

    with patch("cuttagflow.external.base.subprocess.run", side_effect=fake_run):
        assert DummyTool().run(["dummy"], stdout_file=out) == ("", "")
    assert out.read_text() == "row\n"


@patch.object(DummyTool, "_check_installation")
def test_run_has_no_timeout(mock_check):
    result = MagicMock(stdout="", stderr="", returncode=0)
    with patch("cuttagflow.external.base.subprocess.run", return_value=result) as mock_run:
        DummyTool().run(["dummy"])
    assert "timeout" not in mock_run.call_args.kwargs

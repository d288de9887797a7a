"""Unit tests for CLI commands."""

from pathlib import Path
from unittest.mock import patch

from click.testing import CliRunner

from cuttagflow.cli import cli, main
from cuttagflow.cli.exit_codes import EXIT_ERROR, EXIT_SUCCESS, EXIT_USAGE


def _input_args(tmp_path: Path) -> list:
    args = []
    for flag, name in [
        ("-a", "t_R1.fq.gz"), ("-b", "t_R2.fq.gz"), ("-d", "c_R1.fq.gz"), ("-e", "c_R2.fq.gz"),
        ("-f", "genome.fa"), ("-g", "genome.gff"), ("-s", "ecoli.fa"),
    ]:
        path = tmp_path / name
        path.write_text("x")
        args.extend([flag, str(path)])
    return args + ["-n", "exp"]


class TestCLIBasics:
    def test_help_exits_zero(self):
        result = CliRunner().invoke(cli, ["-h"])
        assert result.exit_code == EXIT_SUCCESS
        assert "CutTagFlow" in result.output
        for flag in ("--treat-r1", "--spikein-fasta", "--prefix", "--threads"):
            assert flag in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["-V"])
        assert result.exit_code == EXIT_SUCCESS
        assert "CutTagFlow" in result.output

    def test_no_arguments_is_usage_error(self):
        result = CliRunner().invoke(cli, [])
        assert result.exit_code == EXIT_USAGE
        assert "Missing required option(s)" in result.output
        assert "-a/--treat-r1" in result.output

    def test_partial_arguments_lists_only_missing(self, tmp_path):
        args = _input_args(tmp_path)
        # drop the spike-in FASTA
        i = args.index("-s")
        del args[i:i + 2]
        result = CliRunner().invoke(cli, args)
        assert result.exit_code == EXIT_USAGE
        assert "-s/--spikein-fasta" in result.output
        assert "-a/--treat-r1" not in result.output

    def test_nonexistent_input_is_usage_error(self, tmp_path):
        result = CliRunner().invoke(cli, ["-a", str(tmp_path / "nope.fq")])
        assert result.exit_code == EXIT_USAGE

    def test_show_steps(self):
        result = CliRunner().invoke(cli, ["--show-steps"])
        assert result.exit_code == EXIT_SUCCESS
        assert "peakcall" in result.output
        assert "Total: 7 stages" in result.output

    def test_dry_run_does_not_create_outputs(self, tmp_path):
        out = tmp_path / "out"
        result = CliRunner().invoke(cli, _input_args(tmp_path) + ["-o", str(out), "--dry-run"])
        assert result.exit_code == EXIT_SUCCESS, result.output
        assert "Using 16 threads" in result.output
        assert not out.exists()


class TestCLIErrors:
    def test_pipeline_error_exits_one(self, tmp_path):
        from cuttagflow.exceptions import DependencyError

        with patch(
            "cuttagflow.core.pipeline.Pipeline.run",
            side_effect=DependencyError("Required tool(s) not found in PATH: macs2", ["macs2"]),
        ):
            result = CliRunner().invoke(cli, _input_args(tmp_path) + ["-o", str(tmp_path / "o")])
        assert result.exit_code == EXIT_ERROR
        assert "macs2" in result.output

    def test_interrupt_exits_130(self, tmp_path):
        with patch("cuttagflow.core.pipeline.Pipeline.run", side_effect=KeyboardInterrupt):
            result = CliRunner().invoke(cli, _input_args(tmp_path) + ["-o", str(tmp_path / "o")])
        assert result.exit_code == 130

    def test_main_returns_exit_code(self):
        assert main(["-h"]) == EXIT_SUCCESS
        assert main([]) == EXIT_USAGE


class TestSubcommands:
    def test_init_config_stdout(self):
        result = CliRunner().invoke(cli, ["init-config", "--stdout"])
        assert result.exit_code == EXIT_SUCCESS
        assert "rebuild_stale_indices" in result.output

    def test_init_config_file(self, tmp_path):
        target = tmp_path / "cfg.yaml"
        result = CliRunner().invoke(cli, ["init-config", "--output-file", str(target)])
        assert result.exit_code == EXIT_SUCCESS
        assert target.read_text().startswith("# CutTagFlow Configuration File")

    def test_show_checkpoint(self, tmp_path):
        ckpt = tmp_path / "0_Checkpoints"
        ckpt.mkdir()
        (ckpt / "exp.1_qc.done").touch()
        (ckpt / "exp.treat.count").write_text("1000\n")
        result = CliRunner().invoke(cli, ["show-checkpoint", "-o", str(tmp_path), "-n", "exp"])
        assert result.exit_code == EXIT_SUCCESS
        assert "1/7 stages completed" in result.output
        assert "Next stage: spikein" in result.output
        assert "Treatment spike-in count: 1000" in result.output
        assert "Control spike-in count: not cached" in result.output

    def test_validate_reports_missing(self):
        with patch("cuttagflow.utils.dependency_checker.shutil.which", return_value=None):
            result = CliRunner().invoke(cli, ["validate"])
        assert result.exit_code == EXIT_ERROR
        assert "Missing REQUIRED tools" in result.output

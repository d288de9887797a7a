"""Base class for external tool execution."""

from __future__ import annotations

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Sequence

from cuttagflow.exceptions import ExternalToolError
from cuttagflow.utils.logging import get_logger


class ExternalTool:
    """Base class for external tool wrappers.

    Commands are always argument lists (never shell strings). A non-zero exit
    status is reported as ExternalToolError carrying the command, return code
    and a stderr excerpt. Commands run without a timeout.
    """

    tool_name: str = ""

    def __init__(self, logger: Optional[logging.Logger] = None, threads: int = 1):
        self.threads = threads
        self.logger = logger or get_logger(f"external.{self.tool_name}")
        self._check_installation()

    def check_tool_availability(self, tool_name: str) -> bool:
        """Check if a tool is available in PATH."""
        return shutil.which(tool_name) is not None

    def _check_installation(self) -> None:
        if not self.check_tool_availability(self.tool_name):
            raise ExternalToolError(
                f"{self.tool_name} not found in PATH. "
                f"Please install it via: conda install -c bioconda {self.tool_name}"
            )

    def run(
        self,
        cmd: Sequence[str],
        cwd: Optional[Path] = None,
        check: bool = True,
        capture_output: bool = True,
        log_file: Optional[Path] = None,
        stdout_file: Optional[Path] = None,
    ) -> tuple[str, str]:
        """Execute command with enhanced error handling.

        Args:
            cmd: Command and arguments to execute
            cwd: Working directory for the command
            check: Whether to raise on non-zero exit code
            capture_output: Whether to capture stdout/stderr
            log_file: Write combined stdout/stderr to this file instead of capturing
            stdout_file: Write stdout to this file; stderr is still captured

        Returns:
            Tuple of (stdout, stderr) if output is captured, else ("", "")
        """
        cmd = [str(c) for c in cmd]
        cmd_str = " ".join(cmd)
        self.logger.info(f"Running: {cmd_str}")

        try:
            if stdout_file is not None:
                stdout_file = Path(stdout_file)
                stdout_file.parent.mkdir(parents=True, exist_ok=True)
                with open(stdout_file, "w") as out_handle:
                    result = subprocess.run(
                        cmd,
                        cwd=cwd,
                        stdout=out_handle,
                        stderr=subprocess.PIPE,
                        text=True,
                        check=check,
                    )
                return "", result.stderr or ""

            if log_file is not None:
                log_file = Path(log_file)
                log_file.parent.mkdir(parents=True, exist_ok=True)
                with open(log_file, "w") as log_handle:
                    result = subprocess.run(
                        cmd,
                        cwd=cwd,
                        stdout=log_handle,
                        stderr=subprocess.STDOUT,
                        text=True,
                        check=False,
                    )
                if check and result.returncode != 0:
                    raise subprocess.CalledProcessError(
                        result.returncode, cmd, stderr=_read_tail(log_file)
                    )
                return "", ""

            result = subprocess.run(
                cmd,
                cwd=cwd,
                capture_output=capture_output,
                text=True,
                check=check,
            )

            if result.stderr and not result.returncode:
                self.logger.debug(f"Command stderr: {result.stderr[:500]}")

            if capture_output:
                return result.stdout, result.stderr
            return "", ""

        except subprocess.CalledProcessError as e:
            self.logger.error(f"Command failed: {cmd_str}")
            self.logger.error(f"Return code: {e.returncode}")
            self.logger.error(f"Error: {e.stderr[-1000:] if e.stderr else 'No error output'}")
            raise ExternalToolError(
                f"{self.tool_name} failed with exit code {e.returncode}",
                command=cmd,
                returncode=e.returncode,
                stderr=e.stderr,
            )
        except OSError as e:
            self.logger.error(f"OS error running command: {cmd_str}")
            self.logger.error(f"Error: {e}")
            raise ExternalToolError(
                f"Failed to execute {self.tool_name}", command=cmd, returncode=-1, stderr=str(e)
            )


def _read_tail(path: Path, max_bytes: int = 32_000) -> str:
    """Return the last bytes of a log file, decoded leniently."""
    try:
        with open(path, "rb") as handle:
            handle.seek(0, 2)
            size = handle.tell()
            handle.seek(max(0, size - max_bytes))
            data = handle.read()
        return data.decode(errors="replace")
    except OSError:
        return ""

"""Custom exceptions for CutTagFlow."""


class CutTagFlowError(Exception):
    """Base exception for all CutTagFlow errors."""

    pass


class ConfigurationError(CutTagFlowError):
    """Raised when configuration is invalid or required inputs are missing."""

    pass


class DependencyError(CutTagFlowError):
    """Raised when required external executables cannot be resolved."""

    def __init__(self, message="", missing=None):
        super().__init__(message)
        self.missing = list(missing or [])


class ExternalToolError(CutTagFlowError):
    """Raised when an external tool execution fails."""

    def __init__(self, message="", command=None, returncode=None, stderr=None):
        """Initialize ExternalToolError with optional command details.

        Args:
            message: Error message
            command: Command that was executed (list of strings)
            returncode: Exit code from the command
            stderr: Standard error output from the command
        """
        super().__init__(message)
        self.command = command
        self.returncode = returncode
        self.stderr = stderr


class IndexBuildError(CutTagFlowError):
    """Raised when a reference index could not be built.

    Partially written index files are left on disk and must be removed
    before retrying.
    """

    pass


class ValidationError(CutTagFlowError):
    """Raised when data validation fails."""

    pass


class SpikeinCountError(CutTagFlowError):
    """Raised when a spike-in read count is zero or cannot be read."""

    pass


class PipelineError(CutTagFlowError):
    """Raised when the pipeline cannot continue."""

    pass


class StageExecutionError(PipelineError):
    """Raised when a stage fails; carries the per-sample failures."""

    def __init__(self, message="", stage=None, failures=None):
        super().__init__(message)
        self.stage = stage
        self.failures = dict(failures or {})


class FileFormatError(CutTagFlowError):
    """Raised when an input file is not in the expected format."""

    pass

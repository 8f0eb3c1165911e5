from typing import List, Optional


# ============================================================================
# Error Hierarchy
# ============================================================================


class CompressionError(Exception):
    """Base class for every failure raised by a compression operation."""

    stage: Optional[str] = None


class ValidationError(CompressionError, ValueError):
    """Raised when a request is rejected before any external tool is started."""

    stage = "validation"


class ExternalToolError(CompressionError):
    """Raised when an external tool exits non-zero or cannot be started."""

    stage = "execution"

    def __init__(
        self,
        message: str,
        tool: str,
        command: Optional[List[str]] = None,
        returncode: Optional[int] = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.tool = tool
        self.command = list(command or [])
        self.returncode = returncode
        self.stderr = stderr


class ResultMeasurementError(CompressionError):
    """Raised when the output file cannot be measured after a successful run."""

    stage = "measurement"

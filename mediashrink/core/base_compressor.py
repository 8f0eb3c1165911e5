from pathlib import Path
from typing import List, Tuple

from mediashrink.utils.file_processor import FileProcessor


# ============================================================================
# Base Compressor
# ============================================================================


class BaseCompressor:
    """
    Describes one media format for the compression pipeline.

    Subclasses set which tool runs and which input extensions are accepted,
    check their own options, and turn resolved paths into an argument list.
    """

    name: str = ""
    tool: str = ""
    supported_extensions: Tuple[str, ...] = ()
    extension_error: str = ""

    def validate_input(self, in_path: Path) -> None:
        """Reject inputs whose extension this format does not accept."""
        if not self.supported_extensions:
            return
        FileProcessor.check_extension(
            in_path,
            self.supported_extensions,
            f"{self.extension_error} Got: {in_path.name}",
        )

    def validate_options(self) -> None:
        """Validate option ranges. Formats without options accept everything."""

    def build_args(self, in_path: Path, out_path: Path) -> List[str]:
        """
        Build the argument list for the external tool.

        Args:
            in_path: Resolved input path
            out_path: Resolved output path

        Returns:
            List of arguments, not including the executable
        """
        raise NotImplementedError

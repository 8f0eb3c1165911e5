import os
from pathlib import Path
from typing import Iterable, Tuple, Union

from mediashrink.core.errors import ResultMeasurementError, ValidationError


PathLike = Union[str, os.PathLike]


# ============================================================================
# File Processor
# ============================================================================


class FileProcessor:
    """Handles path resolution, access checks and output measurement."""

    @staticmethod
    def resolve_paths(input_path: PathLike, output_path: PathLike) -> Tuple[Path, Path]:
        """
        Resolve input and output paths to absolute, normalized form.

        No filesystem access happens here, so symlinks are not followed.
        """
        return (
            Path(os.path.abspath(os.fspath(input_path))),
            Path(os.path.abspath(os.fspath(output_path))),
        )

    @staticmethod
    def check_extension(path: Path, allowed: Iterable[str], message: str) -> None:
        """Raise ValidationError unless path's name ends with one of allowed (case-insensitive)."""
        # Path(".mp3").suffix is empty, so match on the name
        if not path.name.lower().endswith(tuple(ext.lower() for ext in allowed)):
            raise ValidationError(message)

    @staticmethod
    def check_input_readable(path: Path) -> None:
        """Ensure the input exists, is a regular file and can be read."""
        if not path.is_file() or not os.access(path, os.R_OK):
            raise ValidationError(f"Input file not accessible: {path}")

    @staticmethod
    def check_output_writable(path: Path) -> None:
        """Ensure the directory that will hold path exists and is writable."""
        output_dir = path.parent
        if not output_dir.is_dir() or not os.access(output_dir, os.W_OK):
            raise ValidationError(f"Output directory not writable: {output_dir}")

    @staticmethod
    def size_kb(path: Path) -> float:
        """Return the size of path in kilobytes (1 KB = 1024 bytes)."""
        try:
            return path.stat().st_size / 1024
        except OSError as e:
            raise ResultMeasurementError(f"Could not read size of output file {path}: {e}") from e

# ============================================================================
# Utility Functions
# ============================================================================

import re
from typing import Optional, Tuple


def format_size(size_bytes: float) -> str:
    """Format bytes to human-readable size."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if abs(size_bytes) < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} PB"


# Named resolution mappings
NAMED_RESOLUTIONS = {
    "480p": (854, 480),
    "720p": (1280, 720),
    "1080p": (1920, 1080),
    "1440p": (2560, 1440),
    "2160p": (3840, 2160),
    "2k": (2048, 1080),
    "4k": (3840, 2160),
    "8k": (7680, 4320),
}


def parse_scale(scale_str: str) -> Tuple[Optional[int], Optional[int]]:
    """
    Parse a scale string to a (width, height) tuple.

    Supports formats like:
    - "1920x1080" (explicit width x height)
    - "1280x" or "x720" (one dimension; the other keeps the aspect ratio)
    - "720p", "1080p", "4k" (standard resolutions)
    - Case insensitive

    Args:
        scale_str: Scale string to parse

    Returns:
        Tuple of (width, height); a missing dimension is None

    Raises:
        ValueError: If the string format is invalid
    """
    if not scale_str or not isinstance(scale_str, str):
        raise ValueError(f"Invalid scale string: {scale_str}")

    scale_str = scale_str.strip().lower()

    if scale_str in NAMED_RESOLUTIONS:
        return NAMED_RESOLUTIONS[scale_str]

    match = re.match(r"^(\d*)x(\d*)$", scale_str)
    if not match or not (match.group(1) or match.group(2)):
        raise ValueError(
            f"Invalid scale format: {scale_str}. "
            f"Expected formats: '1920x1080', '1280x', 'x720', '720p', '1080p', '4k'"
        )

    width = int(match.group(1)) if match.group(1) else None
    height = int(match.group(2)) if match.group(2) else None
    if width == 0 or height == 0:
        raise ValueError(f"Scale dimensions must be positive: {scale_str}")

    return (width, height)

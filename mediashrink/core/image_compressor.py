from pathlib import Path
from typing import List

from mediashrink.core.base_compressor import BaseCompressor
from mediashrink.core.config import ParameterValidator


# ============================================================================
# Image Compressors
# ============================================================================


class ImageCompressor(BaseCompressor):
    """Shared settings for ImageMagick-based image compression."""

    tool = "magick"
    supported_extensions = (".jpg", ".jpeg", ".png")
    extension_error = "Unsupported file format. Use JPG, JPEG, or PNG."


class LossyImageCompressor(ImageCompressor):
    """Re-encodes JPG/PNG images at a lower quality and strips metadata."""

    name = "image_lossy"

    def __init__(self, quality: int = 75):
        """
        Initialize lossy image compressor.

        Args:
            quality: Output quality (0-100)
        """
        self.quality = quality

    def validate_options(self) -> None:
        ParameterValidator.validate_image_quality(self.quality)

    def build_args(self, in_path: Path, out_path: Path) -> List[str]:
        return [str(in_path), "-quality", str(self.quality), "-strip", str(out_path)]


class LosslessImageCompressor(ImageCompressor):
    """Strips metadata and recompresses PNG data without changing pixels."""

    name = "image_lossless"

    def __init__(self, compression_level: int = 75):
        """
        Initialize lossless image compressor.

        Args:
            compression_level: PNG compression level (0-100)
        """
        self.compression_level = compression_level

    def validate_options(self) -> None:
        ParameterValidator.validate_compression_level(self.compression_level)

    def build_args(self, in_path: Path, out_path: Path) -> List[str]:
        return [
            str(in_path),
            "-strip",
            "-define",
            f"png:compression-level={self.compression_level}",
            str(out_path),
        ]

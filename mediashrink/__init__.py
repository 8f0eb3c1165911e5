"""
mediashrink - Shrink PDF, image, video and audio files with external media tools.
"""

__version__ = "0.1.0"

# Package-level exports for convenience
from mediashrink.core.config import (
    AudioBitrate,
    AudioOptions,
    CompressionEvent,
    CompressResult,
    ParameterValidator,
    ScaleOptions,
    ToolPaths,
    VideoCodec,
    VideoOptions,
    VideoPreset,
)
from mediashrink.core.errors import (
    CompressionError,
    ExternalToolError,
    ResultMeasurementError,
    ValidationError,
)
from mediashrink.core.media_compressor import MediaCompressor
from mediashrink.core.operations import (
    compress_image_lossless,
    compress_image_lossy,
    compress_mp3,
    compress_pdf,
    compress_video,
)
from mediashrink.core.tool_executor import ToolExecutor
from mediashrink.utils.logger import get_logger


__all__ = [
    "compress_pdf",
    "compress_image_lossy",
    "compress_image_lossless",
    "compress_video",
    "compress_mp3",
    "CompressResult",
    "CompressionEvent",
    "VideoOptions",
    "AudioOptions",
    "ScaleOptions",
    "ToolPaths",
    "VideoCodec",
    "VideoPreset",
    "AudioBitrate",
    "ParameterValidator",
    "MediaCompressor",
    "ToolExecutor",
    "CompressionError",
    "ValidationError",
    "ExternalToolError",
    "ResultMeasurementError",
    "get_logger",
]

"""
Public compression operations.

Each function validates its request, runs one external tool and returns a
CompressResult, or raises a CompressionError subclass without returning a
partial result.
"""

from typing import Any, Optional

from mediashrink.core.audio_compressor import AudioCompressor
from mediashrink.core.config import CompressResult, ToolPaths
from mediashrink.core.image_compressor import LosslessImageCompressor, LossyImageCompressor
from mediashrink.core.media_compressor import EventCallback, MediaCompressor
from mediashrink.core.pdf_compressor import PdfCompressor
from mediashrink.core.video_compressor import VideoCompressor
from mediashrink.utils.file_processor import PathLike


async def compress_pdf(
    input_path: PathLike,
    output_path: PathLike,
    *,
    tools: Optional[ToolPaths] = None,
    on_event: Optional[EventCallback] = None,
) -> CompressResult:
    """
    Compress a PDF with Ghostscript at the /screen quality tier.

    Example:
        result = await compress_pdf("input.pdf", "output.pdf")
        print(result.output_path, result.compressed_size_kb)
    """
    return await MediaCompressor(PdfCompressor(), tools, on_event).compress(input_path, output_path)


async def compress_image_lossy(
    input_path: PathLike,
    output_path: PathLike,
    quality: int = 75,
    *,
    tools: Optional[ToolPaths] = None,
    on_event: Optional[EventCallback] = None,
) -> CompressResult:
    """
    Compress a JPG/JPEG/PNG image with ImageMagick at the given quality (0-100).

    Metadata is stripped from the output.
    """
    compressor = LossyImageCompressor(quality)
    return await MediaCompressor(compressor, tools, on_event).compress(input_path, output_path)


async def compress_image_lossless(
    input_path: PathLike,
    output_path: PathLike,
    compression_level: int = 75,
    *,
    tools: Optional[ToolPaths] = None,
    on_event: Optional[EventCallback] = None,
) -> CompressResult:
    """Recompress a JPG/JPEG/PNG image with ImageMagick using a PNG compression level (0-100)."""
    compressor = LosslessImageCompressor(compression_level)
    return await MediaCompressor(compressor, tools, on_event).compress(input_path, output_path)


async def compress_video(
    input_path: PathLike,
    output_path: PathLike,
    options: Any = None,
    *,
    tools: Optional[ToolPaths] = None,
    on_event: Optional[EventCallback] = None,
) -> CompressResult:
    """
    Compress a video with FFmpeg.

    Args:
        input_path: Video to compress
        output_path: Where to write the result; the container follows its extension
        options: VideoOptions, a mapping with the same keys, or None. Keys:
            codec (H264, H265, VP9 or GIF), crf (0-51), preset, fps,
            scale ({"width": ..., "height": ...}, either may be omitted)
        tools: Optional executable overrides
        on_event: Optional per-stage callback

    Example:
        await compress_video("in.mov", "out.mp4", {"crf": 30, "scale": {"width": 1280}})
    """
    compressor = VideoCompressor(options)
    return await MediaCompressor(compressor, tools, on_event).compress(input_path, output_path)


async def compress_mp3(
    input_path: PathLike,
    output_path: PathLike,
    options: Any = None,
    *,
    tools: Optional[ToolPaths] = None,
    on_event: Optional[EventCallback] = None,
) -> CompressResult:
    """
    Re-encode an MP3 with FFmpeg.

    An explicit bitrate (64k, 128k, 192k, 320k) selects constant bitrate and
    quality is ignored. Otherwise VBR quality (0-9, default 4) is used.
    Set mono to downmix to one channel.
    """
    compressor = AudioCompressor(options)
    return await MediaCompressor(compressor, tools, on_event).compress(input_path, output_path)

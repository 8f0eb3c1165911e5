"""Command-line entry point for mediashrink."""

import argparse
import asyncio
import sys
from typing import List, Optional

from mediashrink.core.config import (
    AudioBitrate,
    AudioOptions,
    CompressionEvent,
    ScaleOptions,
    ToolPaths,
    VideoCodec,
    VideoOptions,
    VideoPreset,
)
from mediashrink.core.errors import CompressionError
from mediashrink.core.operations import (
    compress_image_lossless,
    compress_image_lossy,
    compress_mp3,
    compress_pdf,
    compress_video,
)
from mediashrink.utils.format import format_size, parse_scale
from mediashrink.utils.logger import get_logger


# ============================================================================
# Argument Parsing
# ============================================================================


def _scale_arg(value: str) -> ScaleOptions:
    try:
        width, height = parse_scale(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    return ScaleOptions(width=width, height=height)


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with one subcommand per media type."""
    parser = argparse.ArgumentParser(
        prog="mediashrink",
        description="Shrink PDF, image, video and MP3 files with Ghostscript, ImageMagick and FFmpeg.",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "NOTICE", "WARNING", "ERROR"],
        help="Console and log file verbosity (default: INFO)",
    )
    parser.add_argument("--log-file", default=None, help="Also write detailed logs to this file")
    parser.add_argument("--gs-path", default=None, help="Path to the Ghostscript executable")
    parser.add_argument("--magick-path", default=None, help="Path to the ImageMagick executable")
    parser.add_argument("--ffmpeg-path", default=None, help="Path to the FFmpeg executable")

    subparsers = parser.add_subparsers(dest="command", required=True)

    pdf = subparsers.add_parser("pdf", help="Compress a PDF with Ghostscript")
    _add_paths(pdf)

    image = subparsers.add_parser("image", help="Compress a JPG/JPEG/PNG image with ImageMagick")
    _add_paths(image)
    image.add_argument("--quality", type=int, default=75, help="Lossy quality, 0-100 (default: 75)")
    image.add_argument("--lossless", action="store_true", help="Use lossless PNG recompression instead")
    image.add_argument("--level", type=int, default=75, help="Lossless compression level, 0-100 (default: 75)")

    video = subparsers.add_parser("video", help="Compress a video with FFmpeg")
    _add_paths(video)
    video.add_argument("--codec", choices=[c.name.lower() for c in VideoCodec], default=None)
    video.add_argument("--crf", type=int, default=None, help="Constant rate factor, 0-51")
    video.add_argument("--preset", choices=[p.value for p in VideoPreset], default=None)
    video.add_argument("--fps", type=int, default=None, help="Target frame rate")
    video.add_argument("--scale", type=_scale_arg, default=None, help="e.g. 1280x720, 1280x, x720, 720p")

    mp3 = subparsers.add_parser("mp3", help="Re-encode an MP3 with FFmpeg")
    _add_paths(mp3)
    mp3.add_argument("--bitrate", choices=[b.value for b in AudioBitrate], default=None, help="Constant bitrate")
    mp3.add_argument("--quality", type=int, default=None, help="VBR quality, 0 (best) to 9 (default: 4)")
    mp3.add_argument("--mono", action="store_true", help="Downmix to a single channel")

    return parser


def _add_paths(subparser: argparse.ArgumentParser) -> None:
    subparser.add_argument("input", help="File to compress")
    subparser.add_argument("output", help="Where to write the compressed file")


# ============================================================================
# Execution
# ============================================================================


async def _dispatch(args: argparse.Namespace, tools: ToolPaths, on_event):
    common = {"tools": tools, "on_event": on_event}

    if args.command == "pdf":
        return await compress_pdf(args.input, args.output, **common)
    if args.command == "image":
        if args.lossless:
            return await compress_image_lossless(args.input, args.output, args.level, **common)
        return await compress_image_lossy(args.input, args.output, args.quality, **common)
    if args.command == "video":
        options = VideoOptions(
            codec=args.codec,
            crf=args.crf,
            preset=args.preset,
            fps=args.fps,
            scale=args.scale,
        )
        return await compress_video(args.input, args.output, options, **common)
    options = AudioOptions(bitrate=args.bitrate, quality=args.quality, mono=args.mono)
    return await compress_mp3(args.input, args.output, options, **common)


def _report(event: CompressionEvent) -> None:
    """Print the result summary; shown whatever the log level."""
    print(f"Compressed: {event.output_path}")
    print(f"  Original:   {format_size(event.original_size_kb * 1024)}")
    print(f"  Compressed: {format_size(event.compressed_size_kb * 1024)}")
    if event.reduction_percent is not None:
        print(f"  Reduction:  {event.reduction_percent:.2f}%")


def main(argv: Optional[List[str]] = None) -> int:
    """Run the CLI and return a process exit code."""
    args = build_parser().parse_args(argv)

    logger = get_logger()
    logger.configure(log_level=args.log_level, log_file=args.log_file)
    tools = ToolPaths(gs=args.gs_path, magick=args.magick_path, ffmpeg=args.ffmpeg_path)

    def on_event(event: CompressionEvent) -> None:
        logger.debug(f"[{event.operation}] {event.stage}")
        if event.stage == "done":
            logger.debug(f"[{event.operation}] {event.output_path}: {event.compressed_size_kb:.2f} KB")
            _report(event)

    try:
        asyncio.run(_dispatch(args, tools, on_event))
    except CompressionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0

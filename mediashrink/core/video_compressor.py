from pathlib import Path
from typing import Any, List

from mediashrink.core.base_compressor import BaseCompressor
from mediashrink.core.config import ParameterValidator, VideoCodec, VideoOptions
from mediashrink.core.errors import ValidationError


# Palette-based GIF conversion at a fixed 15 fps and 640 px width
GIF_FILTER_GRAPH = "fps=15,scale=640:-1:flags=lanczos,split[s0][s1];[s0]palettegen[p];[s1][p]paletteuse"

DEFAULT_CRF = 28
DEFAULT_VP9_CRF = 30


# ============================================================================
# Video Compressor
# ============================================================================


class VideoCompressor(BaseCompressor):
    """Handles video compression using FFmpeg."""

    name = "video"
    tool = "ffmpeg"

    def __init__(self, options: Any = None):
        """
        Initialize video compressor.

        Args:
            options: VideoOptions, a mapping with the same keys, or None; unset
                fields fall back to H.264, CRF 28 (30 for VP9) and the medium preset
        """
        self._options = options

    @property
    def options(self) -> VideoOptions:
        return VideoOptions.from_value(self._options)

    def validate_options(self) -> None:
        ParameterValidator.validate_video_options(self.options)

    def build_args(self, in_path: Path, out_path: Path) -> List[str]:
        """
        Build FFmpeg arguments for video compression.

        Args:
            in_path: Input video path
            out_path: Output video path

        Returns:
            List of FFmpeg arguments
        """
        codec = ParameterValidator.validate_video_codec(self.options.codec)
        args = ["-i", str(in_path)]

        if codec in (VideoCodec.H264, VideoCodec.H265):
            args.extend(["-c:v", codec.value, "-crf", str(self._crf(codec))])
            args.extend(["-preset", ParameterValidator.validate_video_preset(self.options.preset).value])
            args.extend(["-c:a", "aac", "-b:a", "128k"])
            args.extend(self._frame_args())
            # Move the moov atom up front so playback can start while streaming
            args.extend(["-movflags", "+faststart"])
        elif codec == VideoCodec.VP9:
            args.extend(["-c:v", "libvpx-vp9", "-crf", str(self._crf(codec)), "-b:v", "0"])
            args.extend(["-c:a", "libopus", "-b:a", "128k"])
            args.extend(self._frame_args())
        elif codec == VideoCodec.GIF:
            args.extend(["-vf", GIF_FILTER_GRAPH, "-loop", "0"])
        else:
            raise ValidationError(f"Unsupported codec: {codec!r}")

        args.extend(["-y", str(out_path)])
        return args

    def _crf(self, codec: VideoCodec) -> int:
        if self.options.crf is not None:
            return self.options.crf
        return DEFAULT_VP9_CRF if codec == VideoCodec.VP9 else DEFAULT_CRF

    def _frame_args(self) -> List[str]:
        args: List[str] = []
        if self.options.fps is not None:
            args.extend(["-r", str(self.options.fps)])
        if self.options.scale is not None:
            args.extend(["-vf", self._scale_filter_expression()])
        return args

    def _scale_filter_expression(self) -> str:
        # -1 lets FFmpeg derive the missing dimension from the aspect ratio
        width = self.options.scale.width or -1
        height = self.options.scale.height or -1
        return f"scale={width}:{height}"

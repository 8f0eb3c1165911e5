from pathlib import Path
from typing import Any, List

from mediashrink.core.base_compressor import BaseCompressor
from mediashrink.core.config import AudioOptions, ParameterValidator


DEFAULT_VBR_QUALITY = 4


# ============================================================================
# Audio Compressor
# ============================================================================


class AudioCompressor(BaseCompressor):
    """Handles MP3 re-encoding using FFmpeg's libmp3lame encoder."""

    name = "mp3"
    tool = "ffmpeg"
    supported_extensions = (".mp3",)
    extension_error = "Input file must be an MP3."

    def __init__(self, options: Any = None):
        self._options = options

    @property
    def options(self) -> AudioOptions:
        """Options normalized from an AudioOptions, a mapping or None."""
        return AudioOptions.from_value(self._options)

    def validate_options(self) -> None:
        ParameterValidator.validate_audio_options(self.options)

    def build_args(self, in_path: Path, out_path: Path) -> List[str]:
        args = ["-i", str(in_path), "-c:a", "libmp3lame"]
        args.extend(self._rate_args())
        if self.options.mono:
            args.extend(["-ac", "1"])
        args.extend(["-y", str(out_path)])
        return args

    def _rate_args(self) -> List[str]:
        """Constant bitrate when one was given, otherwise VBR quality."""
        bitrate = ParameterValidator.validate_audio_bitrate(self.options.bitrate)
        if bitrate is not None:
            return ["-b:a", bitrate.value]
        quality = self.options.quality if self.options.quality is not None else DEFAULT_VBR_QUALITY
        return ["-q:a", str(quality)]

from dataclasses import dataclass, fields, replace
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Optional, Type, TypeVar, Union

from mediashrink.core.errors import ValidationError


# ============================================================================
# Enumerations
# ============================================================================


class VideoCodec(str, Enum):
    """Video codecs understood by compress_video."""

    H264 = "libx264"
    H265 = "libx265"
    VP9 = "vp9"
    GIF = "gif"


class VideoPreset(str, Enum):
    """Encoder speed/compression tradeoff presets."""

    ULTRAFAST = "ultrafast"
    SUPERFAST = "superfast"
    VERYFAST = "veryfast"
    FASTER = "faster"
    FAST = "fast"
    MEDIUM = "medium"
    SLOW = "slow"
    SLOWER = "slower"
    VERYSLOW = "veryslow"


class AudioBitrate(str, Enum):
    """Constant bitrates for MP3 output."""

    LOW = "64k"
    MEDIUM = "128k"
    HIGH = "192k"
    VERY_HIGH = "320k"


# ============================================================================
# Option Classes
# ============================================================================

_T = TypeVar("_T")


def _from_mapping(cls: Type[_T], value: Any, label: str) -> _T:
    if value is None:
        return cls()
    if isinstance(value, cls):
        return value
    if not isinstance(value, Mapping):
        raise ValidationError(f"{label} must be a {cls.__name__} or a mapping, got {type(value).__name__}")

    known = {f.name for f in fields(cls)}
    unknown = sorted(repr(key) if not isinstance(key, str) else key for key in value if key not in known)
    if unknown:
        raise ValidationError(f"Unknown {label} field(s): {', '.join(unknown)}. Expected: {', '.join(sorted(known))}")
    return cls(**value)


@dataclass
class ScaleOptions:
    """Target frame size; a missing dimension keeps the aspect ratio."""

    width: Optional[int] = None
    height: Optional[int] = None

    @classmethod
    def from_value(cls, value: Any) -> "ScaleOptions":
        return _from_mapping(cls, value, "scale options")


@dataclass
class VideoOptions:
    """Options for compress_video. Defaults are applied when the command is built."""

    codec: Optional[Union[VideoCodec, str]] = None
    crf: Optional[int] = None
    preset: Optional[Union[VideoPreset, str]] = None
    fps: Optional[int] = None
    scale: Optional[ScaleOptions] = None

    @classmethod
    def from_value(cls, value: Any) -> "VideoOptions":
        """Normalize None, a mapping or a VideoOptions into a VideoOptions."""
        options = _from_mapping(cls, value, "video options")
        if options.scale is not None and not isinstance(options.scale, ScaleOptions):
            options = replace(options, scale=ScaleOptions.from_value(options.scale))
        return options


@dataclass
class AudioOptions:
    """
    Options for compress_mp3.

    An explicit bitrate selects constant-bitrate mode and quality is ignored;
    otherwise variable-bitrate mode is used with quality (0 best, 9 worst).
    """

    bitrate: Optional[Union[AudioBitrate, str]] = None
    quality: Optional[int] = None
    mono: bool = False

    @classmethod
    def from_value(cls, value: Any) -> "AudioOptions":
        return _from_mapping(cls, value, "audio options")


@dataclass
class ToolPaths:
    """Per-call executable overrides for the external tools."""

    gs: Optional[str] = None
    magick: Optional[str] = None
    ffmpeg: Optional[str] = None

    def get(self, tool: str) -> Optional[str]:
        return getattr(self, tool, None)


# ============================================================================
# Results and Events
# ============================================================================


@dataclass(frozen=True)
class CompressResult:
    """Outcome of a successful compression."""

    output_path: Path
    compressed_size_kb: float


@dataclass(frozen=True)
class CompressionEvent:
    """Structured notification passed to an on_event callback."""

    stage: str
    operation: str
    input_path: Path
    output_path: Path
    command: Optional[List[str]] = None
    original_size_kb: Optional[float] = None
    compressed_size_kb: Optional[float] = None
    error: Optional[BaseException] = None

    @property
    def reduction_percent(self) -> Optional[float]:
        if not self.original_size_kb or self.compressed_size_kb is None:
            return None
        return (self.original_size_kb - self.compressed_size_kb) / self.original_size_kb * 100


# ============================================================================
# Parameter Validator
# ============================================================================

_E = TypeVar("_E", bound=Enum)


class ParameterValidator:
    """Validates compression options before any tool is started."""

    @staticmethod
    def validate_int_range(value: Any, name: str, minimum: int, maximum: Optional[int] = None) -> None:
        """Validate that value is an int within [minimum, maximum]."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(f"{name} must be an integer, got {value!r}")
        if maximum is None:
            if value < minimum:
                raise ValidationError(f"{name} must be at least {minimum}, got {value}")
        elif not (minimum <= value <= maximum):
            raise ValidationError(f"{name} must be between {minimum} and {maximum}, got {value}")

    @staticmethod
    def coerce_enum(enum_cls: Type[_E], value: Any, label: str) -> _E:
        """Accept an enum member, its value, or its name (case-insensitive)."""
        if isinstance(value, enum_cls):
            return value
        if isinstance(value, str):
            for member in enum_cls:
                if value == member.value or value.upper() == member.name:
                    return member
        allowed = ", ".join(member.value for member in enum_cls)
        raise ValidationError(f"Unsupported {label}: {value!r}. Expected one of: {allowed}")

    @staticmethod
    def validate_image_quality(quality: Any) -> None:
        ParameterValidator.validate_int_range(quality, "quality", 0, 100)

    @staticmethod
    def validate_compression_level(level: Any) -> None:
        ParameterValidator.validate_int_range(level, "compression_level", 0, 100)

    @staticmethod
    def validate_video_codec(codec: Any) -> VideoCodec:
        """Return the codec as a VideoCodec, defaulting to H.264."""
        if codec is None:
            return VideoCodec.H264
        return ParameterValidator.coerce_enum(VideoCodec, codec, "codec")

    @staticmethod
    def validate_video_preset(preset: Any) -> VideoPreset:
        if preset is None:
            return VideoPreset.MEDIUM
        return ParameterValidator.coerce_enum(VideoPreset, preset, "preset")

    @staticmethod
    def validate_audio_bitrate(bitrate: Any) -> Optional[AudioBitrate]:
        if bitrate is None:
            return None
        return ParameterValidator.coerce_enum(AudioBitrate, bitrate, "bitrate")

    @staticmethod
    def validate_scale(scale: Optional[ScaleOptions]) -> None:
        """Validate scale dimensions; either may be omitted."""
        if scale is None:
            return
        if scale.width is not None:
            ParameterValidator.validate_int_range(scale.width, "scale.width", 1)
        if scale.height is not None:
            ParameterValidator.validate_int_range(scale.height, "scale.height", 1)

    @staticmethod
    def validate_video_options(options: VideoOptions) -> None:
        """Validate all video options that were supplied."""
        ParameterValidator.validate_video_codec(options.codec)
        ParameterValidator.validate_video_preset(options.preset)
        if options.crf is not None:
            ParameterValidator.validate_int_range(options.crf, "crf", 0, 51)
        if options.fps is not None:
            ParameterValidator.validate_int_range(options.fps, "fps", 1)
        ParameterValidator.validate_scale(options.scale)

    @staticmethod
    def validate_audio_options(options: AudioOptions) -> None:
        """Validate all audio options that were supplied."""
        ParameterValidator.validate_audio_bitrate(options.bitrate)
        if options.quality is not None:
            ParameterValidator.validate_int_range(options.quality, "quality", 0, 9)
        if not isinstance(options.mono, bool):
            raise ValidationError(f"mono must be a boolean, got {options.mono!r}")

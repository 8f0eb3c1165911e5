"""
Tests for mediashrink.core.audio_compressor module.
"""

from pathlib import Path

import pytest

from mediashrink.core.audio_compressor import AudioCompressor
from mediashrink.core.config import AudioBitrate, AudioOptions
from mediashrink.core.errors import ValidationError


IN_PATH = Path("/music/song.mp3")
OUT_PATH = Path("/music/song_small.mp3")


@pytest.mark.unit
class TestAudioCompressor:
    """Tests for AudioCompressor class."""

    def test_build_args_default_vbr(self):
        args = AudioCompressor().build_args(IN_PATH, OUT_PATH)

        assert args == ["-i", str(IN_PATH), "-c:a", "libmp3lame", "-q:a", "4", "-y", str(OUT_PATH)]

    def test_build_args_vbr_quality(self):
        args = AudioCompressor(AudioOptions(quality=7)).build_args(IN_PATH, OUT_PATH)

        assert args[args.index("-q:a") + 1] == "7"
        assert "-b:a" not in args

    def test_bitrate_takes_precedence_over_quality(self):
        options = AudioOptions.from_value({"bitrate": "192k", "quality": 5})
        args = AudioCompressor(options).build_args(IN_PATH, OUT_PATH)

        assert args[args.index("-b:a") + 1] == "192k"
        assert "-q:a" not in args

    def test_bitrate_enum(self):
        args = AudioCompressor(AudioOptions(bitrate=AudioBitrate.LOW)).build_args(IN_PATH, OUT_PATH)

        assert args[args.index("-b:a") + 1] == "64k"

    def test_mono(self):
        args = AudioCompressor(AudioOptions(mono=True)).build_args(IN_PATH, OUT_PATH)

        assert args[args.index("-ac") + 1] == "1"

    def test_stereo_by_default(self):
        args = AudioCompressor().build_args(IN_PATH, OUT_PATH)

        assert "-ac" not in args

    @pytest.mark.parametrize("name", ["song.mp3", "SONG.MP3", "Song.Mp3"])
    def test_accepts_mp3(self, name):
        # Should not raise any exception
        AudioCompressor().validate_input(Path("/music") / name)

    @pytest.mark.parametrize("name", ["song.wav", "song.flac", "song.mp3.bak", "song"])
    def test_rejects_non_mp3(self, name):
        with pytest.raises(ValidationError, match="Input file must be an MP3"):
            AudioCompressor().validate_input(Path("/music") / name)

    def test_validate_options_rejects_unknown_bitrate(self):
        with pytest.raises(ValidationError, match="Unsupported bitrate"):
            AudioCompressor(AudioOptions(bitrate="256k")).validate_options()

    def test_mapping_options_normalized(self):
        args = AudioCompressor({"bitrate": "320k", "mono": True}).build_args(IN_PATH, OUT_PATH)

        assert args[args.index("-b:a") + 1] == "320k"
        assert "-ac" in args

    def test_validate_options_rejects_non_mapping(self):
        with pytest.raises(ValidationError, match="audio options must be a"):
            AudioCompressor(["64k"]).validate_options()

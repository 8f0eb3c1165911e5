"""
Integration tests for end-to-end workflows.

These run real child processes: small POSIX shell scripts stand in for
Ghostscript, ImageMagick and FFmpeg and are wired in through ToolPaths.
"""

import asyncio
import stat
import sys
from pathlib import Path

import pytest

from mediashrink import (
    ExternalToolError,
    ToolPaths,
    ValidationError,
    compress_image_lossless,
    compress_image_lossy,
    compress_mp3,
    compress_pdf,
    compress_video,
)
from mediashrink.cli import main


pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(sys.platform == "win32", reason="requires a POSIX shell"),
]


# Writes 120 KB to the output path and records its arguments next to itself
SUCCESS_SCRIPT = """#!/bin/sh
printf '%s\\n' "$@" > "$0.args"
out=""
for arg; do
  case "$arg" in
    -sOutputFile=*) out="${arg#-sOutputFile=}" ;;
  esac
  last="$arg"
done
[ -n "$out" ] || out="$last"
dd if=/dev/zero of="$out" bs=1024 count=120 2>/dev/null
"""

FAILING_SCRIPT = """#!/bin/sh
echo "boom: cannot decode input" >&2
exit 3
"""


def _install(directory: Path, name: str, body: str) -> Path:
    script = directory / name
    script.write_text(body, encoding="utf-8")
    script.chmod(script.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return script


def _recorded_args(script: Path):
    return Path(str(script) + ".args").read_text(encoding="utf-8").splitlines()


@pytest.fixture
def stub_tools(temp_dir):
    """Install succeeding gs, magick and ffmpeg stand-ins."""
    bin_dir = temp_dir / "bin"
    bin_dir.mkdir()
    return ToolPaths(
        gs=str(_install(bin_dir, "gs", SUCCESS_SCRIPT)),
        magick=str(_install(bin_dir, "magick", SUCCESS_SCRIPT)),
        ffmpeg=str(_install(bin_dir, "ffmpeg", SUCCESS_SCRIPT)),
    )


@pytest.fixture
def failing_tools(temp_dir):
    """Install gs, magick and ffmpeg stand-ins that always fail."""
    bin_dir = temp_dir / "failing"
    bin_dir.mkdir()
    return ToolPaths(
        gs=str(_install(bin_dir, "gs", FAILING_SCRIPT)),
        magick=str(_install(bin_dir, "magick", FAILING_SCRIPT)),
        ffmpeg=str(_install(bin_dir, "ffmpeg", FAILING_SCRIPT)),
    )


class TestEndToEnd:
    """Full pipeline runs against real processes."""

    @pytest.mark.asyncio
    async def test_pdf(self, stub_tools, sample_pdf, temp_dir):
        result = await compress_pdf(sample_pdf, temp_dir / "out file.pdf", tools=stub_tools)

        assert result.output_path == temp_dir / "out file.pdf"
        assert result.compressed_size_kb == 120
        args = _recorded_args(Path(stub_tools.gs))
        assert "-sOutputFile=" + str(temp_dir / "out file.pdf") in args
        assert args[-1] == str(sample_pdf)

    @pytest.mark.asyncio
    async def test_image_lossy_scenario(self, stub_tools, sample_image_jpg, temp_dir):
        result = await compress_image_lossy(sample_image_jpg, temp_dir / "photo_small.jpg", 40, tools=stub_tools)

        assert result.compressed_size_kb == 120
        assert (temp_dir / "photo_small.jpg").stat().st_size == 120 * 1024
        assert _recorded_args(Path(stub_tools.magick)) == [
            str(sample_image_jpg),
            "-quality",
            "40",
            "-strip",
            str(temp_dir / "photo_small.jpg"),
        ]

    @pytest.mark.asyncio
    async def test_image_lossless(self, stub_tools, sample_image_png, temp_dir):
        result = await compress_image_lossless(sample_image_png, temp_dir / "out.png", 90, tools=stub_tools)

        assert result.compressed_size_kb == 120
        assert "png:compression-level=90" in _recorded_args(Path(stub_tools.magick))

    @pytest.mark.asyncio
    async def test_video_gif(self, stub_tools, sample_video, temp_dir):
        result = await compress_video(sample_video, temp_dir / "clip.gif", {"codec": "gif"}, tools=stub_tools)

        assert result.output_path.name == "clip.gif"
        args = _recorded_args(Path(stub_tools.ffmpeg))
        assert args[args.index("-loop") + 1] == "0"

    @pytest.mark.asyncio
    async def test_mp3(self, stub_tools, sample_mp3, temp_dir):
        result = await compress_mp3(sample_mp3, temp_dir / "out.mp3", {"bitrate": "64k", "mono": True}, tools=stub_tools)

        assert result.compressed_size_kb == 120
        args = _recorded_args(Path(stub_tools.ffmpeg))
        assert args[args.index("-b:a") + 1] == "64k"

    @pytest.mark.asyncio
    async def test_concurrent_runs(self, stub_tools, temp_dir):
        sources = []
        for i in range(4):
            source = temp_dir / f"track{i}.mp3"
            source.write_bytes(b"0" * 2048)
            sources.append(source)

        results = await asyncio.gather(
            *[compress_mp3(s, temp_dir / f"small{i}.mp3", tools=stub_tools) for i, s in enumerate(sources)]
        )

        assert [r.output_path.name for r in results] == [f"small{i}.mp3" for i in range(4)]
        assert all(r.compressed_size_kb == 120 for r in results)

    @pytest.mark.asyncio
    async def test_failing_tool(self, failing_tools, sample_video, temp_dir):
        with pytest.raises(ExternalToolError) as exc_info:
            await compress_video(sample_video, temp_dir / "out.mp4", tools=failing_tools)

        error = exc_info.value
        assert error.returncode == 3
        assert "boom: cannot decode input" in str(error)
        assert not (temp_dir / "out.mp4").exists()

    @pytest.mark.asyncio
    async def test_missing_executable(self, sample_pdf, temp_dir):
        tools = ToolPaths(gs=str(temp_dir / "no-such-gs"))

        with pytest.raises(ExternalToolError, match="Could not start gs"):
            await compress_pdf(sample_pdf, temp_dir / "out.pdf", tools=tools)

    @pytest.mark.asyncio
    async def test_validation_happens_before_spawn(self, stub_tools, temp_dir):
        source = temp_dir / "anim.gif"
        source.write_bytes(b"GIF89a")

        with pytest.raises(ValidationError):
            await compress_image_lossy(source, temp_dir / "out.jpg", tools=stub_tools)

        assert not Path(stub_tools.magick + ".args").exists()


class TestCliEndToEnd:
    """The console entry point against real processes."""

    def test_cli_success(self, stub_tools, sample_mp3, temp_dir, capsys):
        code = main(["--ffmpeg-path", stub_tools.ffmpeg, "mp3", str(sample_mp3), str(temp_dir / "o.mp3")])

        assert code == 0
        assert "Compressed: " in capsys.readouterr().out

    def test_cli_failure(self, failing_tools, sample_pdf, temp_dir, capsys):
        code = main(["--gs-path", failing_tools.gs, "pdf", str(sample_pdf), str(temp_dir / "o.pdf")])

        assert code == 1
        assert "boom" in capsys.readouterr().err

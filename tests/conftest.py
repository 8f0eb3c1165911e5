"""
Shared pytest fixtures and configuration.
"""

import shutil
import tempfile
from pathlib import Path
from typing import List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from mediashrink.utils.logger import get_logger


@pytest.fixture(autouse=True)
def reset_logger():
    """Keep the package logger silent between tests."""
    yield
    get_logger().reset()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    if temp_path.exists():
        shutil.rmtree(temp_path)


def _write_file(path: Path, size: int) -> Path:
    with open(path, "wb") as f:
        f.write(b"0" * size)
    return path


@pytest.fixture
def sample_pdf(temp_dir):
    """Create a 4 KB PDF placeholder."""
    return _write_file(temp_dir / "input.pdf", 4096)


@pytest.fixture
def sample_image_jpg(temp_dir):
    """Create a 500 KB JPEG placeholder."""
    return _write_file(temp_dir / "photo.jpg", 500 * 1024)


@pytest.fixture
def sample_image_png(temp_dir):
    """Create a 2 KB PNG placeholder."""
    return _write_file(temp_dir / "image.png", 2048)


@pytest.fixture
def sample_video(temp_dir):
    """Create an 8 KB video placeholder."""
    return _write_file(temp_dir / "clip.mp4", 8192)


@pytest.fixture
def sample_mp3(temp_dir):
    """Create a 4 KB MP3 placeholder."""
    return _write_file(temp_dir / "song.mp3", 4096)


def output_path_from_command(cmd: List[str]) -> Path:
    """Find the output file in a Ghostscript, ImageMagick or FFmpeg command."""
    for arg in cmd:
        if arg.startswith("-sOutputFile="):
            return Path(arg[len("-sOutputFile="):].replace("%%", "%"))
    return Path(cmd[-1])


class FakeTool:
    """
    Stand-in for asyncio.create_subprocess_exec.

    On success it writes output_size bytes to the command's output path,
    the way a real tool would.
    """

    def __init__(self):
        self.output_size: Optional[int] = 1024
        self.returncode = 0
        self.stdout = b""
        self.stderr = b""
        self.spawn_error: Optional[OSError] = None
        self.calls: List[List[str]] = []
        self.kwargs: List[dict] = []

    async def __call__(self, *cmd, **kwargs):
        self.calls.append(list(cmd))
        self.kwargs.append(kwargs)
        if self.spawn_error is not None:
            raise self.spawn_error

        if self.returncode == 0 and self.output_size is not None:
            _write_file(output_path_from_command(list(cmd)), self.output_size)

        process = MagicMock()
        process.returncode = self.returncode
        process.communicate = AsyncMock(return_value=(self.stdout, self.stderr))
        return process

    @property
    def last_args(self) -> List[str]:
        """Arguments of the most recent call, without the executable."""
        return self.calls[-1][1:]


@pytest.fixture
def fake_tool(mocker):
    """Patch process creation with a FakeTool."""
    tool = FakeTool()
    mocker.patch("mediashrink.core.tool_executor.asyncio.create_subprocess_exec", new=tool)
    return tool

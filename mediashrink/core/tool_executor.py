import asyncio
import shutil
import subprocess  # nosec B404
from typing import Dict, List, Optional, Tuple

from mediashrink.core.config import ToolPaths
from mediashrink.core.errors import ExternalToolError
from mediashrink.utils.logger import get_logger


# Executable names tried on PATH, in order, for each tool
TOOL_CANDIDATES: Dict[str, Tuple[str, ...]] = {
    "gs": ("gs", "gswin64c", "gswin32c"),
    "magick": ("magick",),
    "ffmpeg": ("ffmpeg",),
}


# ============================================================================
# Tool Executor
# ============================================================================


class ToolExecutor:
    """Runs Ghostscript, ImageMagick and FFmpeg as child processes."""

    def __init__(self, tool_paths: Optional[ToolPaths] = None):
        """
        Initialize tool executor.

        Args:
            tool_paths: Explicit executable paths. Tools without an override are
                looked up on PATH when they are first run.
        """
        self.tool_paths = tool_paths or ToolPaths()
        self.logger = get_logger()

    @staticmethod
    def find_tool(tool: str) -> Optional[str]:
        """Find the executable for tool on PATH."""
        for candidate in TOOL_CANDIDATES.get(tool, (tool,)):
            found = shutil.which(candidate)
            if found:
                return found
        return None

    def resolve_executable(self, tool: str) -> str:
        """
        Return the executable to launch for tool.

        Falls back to the bare tool name, so a missing binary surfaces as a
        spawn failure rather than being checked up front.
        """
        return self.tool_paths.get(tool) or self.find_tool(tool) or tool

    async def run(self, tool: str, args: List[str]) -> subprocess.CompletedProcess:
        """
        Run tool with args and wait for it to exit.

        Args:
            tool: Tool name ("gs", "magick" or "ffmpeg")
            args: Argument list, passed to the process without a shell

        Returns:
            CompletedProcess with decoded stdout and stderr

        Raises:
            ExternalToolError: If the process cannot be started or exits non-zero
        """
        cmd = [self.resolve_executable(tool)] + [str(arg) for arg in args]
        self.logger.debug(f"Running {tool}: {cmd}")

        process = await self._launch_process(tool, cmd)
        stdout, stderr = await process.communicate()
        result = subprocess.CompletedProcess(cmd, process.returncode, self._decode(stdout), self._decode(stderr))

        self._raise_on_error(tool, result)
        self.logger.debug(f"{tool} finished with exit code {result.returncode}")
        return result

    async def _launch_process(self, tool: str, cmd: List[str]) -> asyncio.subprocess.Process:
        try:
            return await asyncio.create_subprocess_exec(  # nosec B603
                *cmd,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            raise ExternalToolError(
                f"Could not start {tool} ({cmd[0]}): {e}",
                tool=tool,
                command=cmd,
                stderr=str(e),
            ) from e

    @staticmethod
    def _decode(data: Optional[bytes]) -> str:
        if not data:
            return ""
        return data.decode("utf-8", errors="replace")

    @staticmethod
    def _raise_on_error(tool: str, result: subprocess.CompletedProcess) -> None:
        if result.returncode == 0:
            return
        diagnostic = result.stderr.strip() or result.stdout.strip()
        message = f"{tool} exited with code {result.returncode}"
        if diagnostic:
            message = f"{message}: {diagnostic}"
        raise ExternalToolError(
            message,
            tool=tool,
            command=list(result.args),
            returncode=result.returncode,
            stderr=result.stderr,
        )

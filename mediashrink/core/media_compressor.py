from pathlib import Path
from typing import Callable, List, Optional

from mediashrink.core.base_compressor import BaseCompressor
from mediashrink.core.config import CompressionEvent, CompressResult, ToolPaths
from mediashrink.core.errors import CompressionError, ValidationError
from mediashrink.core.tool_executor import ToolExecutor
from mediashrink.utils.file_processor import FileProcessor, PathLike
from mediashrink.utils.logger import get_logger


EventCallback = Callable[[CompressionEvent], None]


# ============================================================================
# Media Compressor
# ============================================================================


class MediaCompressor:
    """
    Runs one compression request through the shared pipeline.

    Stages: resolve paths, validate, build the command, run the tool, measure
    the output. Every stage fails fast; nothing is retried and no partial
    result is returned.
    """

    def __init__(
        self,
        compressor: BaseCompressor,
        tool_paths: Optional[ToolPaths] = None,
        on_event: Optional[EventCallback] = None,
        executor: Optional[ToolExecutor] = None,
    ):
        """
        Initialize the pipeline for one format.

        Args:
            compressor: Format compressor supplying validation and arguments
            tool_paths: Optional executable overrides
            on_event: Optional callback receiving a CompressionEvent per stage
            executor: Tool executor; built from tool_paths when omitted
        """
        self.compressor = compressor
        self.executor = executor or ToolExecutor(tool_paths)
        self.on_event = on_event
        self.file_processor = FileProcessor()
        self.logger = get_logger()

    async def compress(self, input_path: PathLike, output_path: PathLike) -> CompressResult:
        """
        Compress input_path into output_path.

        Returns:
            CompressResult with the absolute output path and its size in KB

        Raises:
            ValidationError: Bad extension, options, or file access
            ExternalToolError: The tool could not be started or failed
            ResultMeasurementError: The output could not be measured
        """
        in_path, out_path = self.file_processor.resolve_paths(input_path, output_path)
        name = self.compressor.name
        self.logger.debug(f"Compressing {name}: {in_path} -> {out_path}")

        try:
            self._emit("validating", in_path, out_path)
            original_size_kb = self._validate(in_path, out_path)

            self._emit("synthesizing", in_path, out_path)
            args = self.compressor.build_args(in_path, out_path)
            self.logger.debug(f"{self.compressor.tool} args for {in_path.name}: {' '.join(args)}")

            self._emit("executing", in_path, out_path, command=args)
            await self.executor.run(self.compressor.tool, args)

            self._emit("measuring", in_path, out_path)
            compressed_size_kb = self.file_processor.size_kb(out_path)
        except CompressionError as e:
            self.logger.debug(f"{name} compression failed during {e.stage}: {e}")
            self._emit("failed", in_path, out_path, error=e)
            raise

        self.logger.debug(f"Compressed {in_path.name}: {original_size_kb:.2f} KB -> {compressed_size_kb:.2f} KB")
        self._emit(
            "done",
            in_path,
            out_path,
            original_size_kb=original_size_kb,
            compressed_size_kb=compressed_size_kb,
        )
        return CompressResult(output_path=out_path, compressed_size_kb=compressed_size_kb)

    def _validate(self, in_path: Path, out_path: Path) -> float:
        """Run every pre-flight check and return the input size in KB."""
        self.compressor.validate_input(in_path)
        self.compressor.validate_options()
        self.file_processor.check_input_readable(in_path)
        self.file_processor.check_output_writable(out_path)
        try:
            return in_path.stat().st_size / 1024
        except OSError as e:
            raise ValidationError(f"Input file not accessible: {in_path}") from e

    def _emit(
        self,
        stage: str,
        in_path: Path,
        out_path: Path,
        command: Optional[List[str]] = None,
        original_size_kb: Optional[float] = None,
        compressed_size_kb: Optional[float] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        if self.on_event is None:
            return
        self.on_event(
            CompressionEvent(
                stage=stage,
                operation=self.compressor.name,
                input_path=in_path,
                output_path=out_path,
                command=command,
                original_size_kb=original_size_kb,
                compressed_size_kb=compressed_size_kb,
                error=error,
            )
        )

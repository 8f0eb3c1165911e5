"""
Package logging for mediashrink.

The library is silent until an embedding application (or the CLI) calls
``get_logger().configure(...)``; before that the ``mediashrink`` logger only
carries a NullHandler and does not propagate.
"""

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional, Union


# Severity between INFO and WARNING, used for per-file results
NOTICE = 25

logging.addLevelName(NOTICE, "NOTICE")


# ============================================================================
# Formatters
# ============================================================================


class DetailedFormatter(logging.Formatter):
    """Formatter with location tracking (module:function:line)."""

    def format(self, record: logging.LogRecord) -> str:
        record.location = f"{record.module}:{record.funcName}:{record.lineno}"
        return super().format(record)


# ============================================================================
# Singleton Logger
# ============================================================================


class MediaShrinkLogger:
    """
    Thread-safe singleton wrapper around the ``mediashrink`` logger.

    Features:
    - Silent by default (NullHandler, no propagation)
    - Optional console output with plain messages
    - Optional file output with location tracking and size-based rotation
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if getattr(self, "_initialized", False):
            return

        self._initialized = True
        self._logger = logging.getLogger("mediashrink")
        self._logger.setLevel(logging.DEBUG)
        self._logger.propagate = False

        self._console_handler: Optional[logging.Handler] = None
        self._file_handler: Optional[logging.Handler] = None
        self._reset_handlers()

    def configure(
        self,
        log_level: str = "INFO",
        enable_console: bool = True,
        log_file: Optional[Union[str, Path]] = None,
        rotation_enabled: bool = False,
        max_bytes: int = 10485760,  # 10 MB
        backup_count: int = 5,
    ) -> None:
        """
        Configure logging output.

        Args:
            log_level: Logging level name (DEBUG, INFO, NOTICE, WARNING, ERROR)
            enable_console: Write messages to stdout
            log_file: Optional file to write detailed records to
            rotation_enabled: Rotate the log file once it reaches max_bytes
            max_bytes: Max bytes for size-based rotation
            backup_count: Number of rotated files to keep
        """
        self._reset_handlers()

        level = logging.getLevelName(log_level.upper())
        if not isinstance(level, int):
            raise ValueError(f"Invalid log level: {log_level}")
        self._logger.setLevel(level)

        if enable_console:
            self._console_handler = logging.StreamHandler(sys.stdout)
            self._console_handler.setLevel(level)
            self._console_handler.setFormatter(logging.Formatter(fmt="%(message)s"))
            self._logger.addHandler(self._console_handler)

        if log_file is not None:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            if rotation_enabled:
                self._file_handler = RotatingFileHandler(
                    log_path,
                    maxBytes=max_bytes,
                    backupCount=backup_count,
                    encoding="utf-8",
                    delay=True,
                )
            else:
                self._file_handler = logging.FileHandler(log_path, encoding="utf-8", delay=True)

            self._file_handler.setLevel(level)
            self._file_handler.setFormatter(
                DetailedFormatter(
                    fmt="%(asctime)s [%(levelname)s] [%(location)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            self._logger.addHandler(self._file_handler)

    def reset(self) -> None:
        """Return to the silent default state."""
        self._reset_handlers()
        self._logger.setLevel(logging.DEBUG)

    def get_logger(self) -> logging.Logger:
        """Get the underlying logger instance."""
        return self._logger

    def _reset_handlers(self) -> None:
        for handler in list(self._logger.handlers):
            handler.close()
            self._logger.removeHandler(handler)
        self._console_handler = None
        self._file_handler = None
        self._logger.addHandler(logging.NullHandler())

    def notice(self, msg: str, *args, **kwargs) -> None:
        """Log a notice (normal but significant condition)."""
        # Attribute the record to the caller rather than this wrapper
        kwargs.setdefault("stacklevel", 2)
        self._logger.log(NOTICE, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.error(msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.warning(msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.info(msg, *args, **kwargs)

    def debug(self, msg: str, *args, **kwargs) -> None:
        kwargs.setdefault("stacklevel", 2)
        self._logger.debug(msg, *args, **kwargs)


def get_logger() -> MediaShrinkLogger:
    """Return the package-wide MediaShrinkLogger instance."""
    return MediaShrinkLogger()

"""Logging configuration and setup utilities."""

import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional, TextIO, Union

if TYPE_CHECKING:
    from ..config.settings import DayPickerSettings

# Between DEBUG and INFO: per-request navigation and selection detail.
VERBOSE = 15
logging.addLevelName(VERBOSE, "VERBOSE")

logger = logging.getLogger(__name__)


def get_log_level(level_name: str) -> int:
    """Numeric level for a level name, including ``VERBOSE``.

    Raises:
        ValueError: If the name is not a registered level

    Example:
        >>> get_log_level("verbose")
        15
    """
    level = logging.getLevelName(level_name.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level {level_name!r}")
    return level


class AutoColoredFormatter(logging.Formatter):
    """Console formatter that colours the level name on capable terminals.

    Colours are used only when enabled, the stream is a TTY, ``NO_COLOR`` is
    unset and ``TERM`` is not ``dumb``.
    """

    LEVEL_COLORS = {
        "DEBUG": "\033[35m",
        "VERBOSE": "\033[32m",
        "INFO": "\033[34m",
        "WARNING": "\033[33m",
        "ERROR": "\033[31m",
        "CRITICAL": "\033[31;1m",
    }
    RESET = "\033[0m"

    def __init__(
        self,
        *args: Any,
        enable_colors: bool = True,
        stream: Optional[TextIO] = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(*args, **kwargs)
        self.use_colors = enable_colors and self.stream_supports_color(stream or sys.stderr)

    @staticmethod
    def stream_supports_color(stream: TextIO) -> bool:
        if "NO_COLOR" in os.environ or os.environ.get("TERM", "") == "dumb":
            return False
        isatty = getattr(stream, "isatty", None)
        return bool(isatty and isatty())

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelname)
        if not self.use_colors or color is None:
            return formatted
        return formatted.replace(record.levelname, f"{color}{record.levelname}{self.RESET}", 1)


class TimestampedFileHandler(logging.FileHandler):
    """Writes each run to ``<prefix>_<timestamp>.log`` and prunes older runs."""

    def __init__(
        self, log_dir: Union[str, Path], prefix: str = "daypicker", max_files: int = 5
    ) -> None:
        self.log_dir = Path(log_dir)
        self.prefix = prefix
        self.max_files = max_files
        self.log_dir.mkdir(parents=True, exist_ok=True)

        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        super().__init__(str(self.log_dir / f"{prefix}_{stamp}.log"), encoding="utf-8")
        self.prune()

    def prune(self) -> list[Path]:
        """Delete all but the ``max_files`` most recent run logs.

        Returns:
            The files that were removed
        """
        current = Path(self.baseFilename)
        runs = sorted(
            (p for p in self.log_dir.glob(f"{self.prefix}_*.log") if p != current),
            key=lambda p: p.stat().st_mtime,
            reverse=True,
        )
        removed = []
        for stale in runs[max(self.max_files - 1, 0) :]:
            try:
                stale.unlink()
            except OSError as e:
                logger.warning(f"Could not remove old log file {stale}: {e}")
                continue
            removed.append(stale)
        return removed


def setup_logging(settings: "DayPickerSettings") -> logging.Logger:
    """Set up the ``daypicker`` logger from settings.

    Args:
        settings: Settings carrying a ``logging`` section

    Returns:
        Configured ``daypicker`` logger
    """
    logger = logging.getLogger("daypicker")
    logger.setLevel(logging.DEBUG)  # Allow all levels, handlers will filter
    logger.handlers.clear()

    if settings.logging.console_enabled:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(get_log_level(settings.logging.console_level))
        console_handler.setFormatter(
            AutoColoredFormatter(
                "%(asctime)s - %(levelname)s - %(message)s",
                datefmt="%H:%M:%S",
                enable_colors=settings.logging.console_colors,
            )
        )
        logger.addHandler(console_handler)

    if settings.logging.file_enabled:
        file_handler = TimestampedFileHandler(
            log_dir=settings.log_directory,
            prefix=settings.logging.file_prefix,
            max_files=settings.logging.max_log_files,
        )
        file_handler.setLevel(get_log_level(settings.logging.file_level))
        file_handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        logger.addHandler(file_handler)
        logger.info(f"Logging to file: {file_handler.baseFilename}")

    third_party_level = get_log_level(settings.logging.third_party_level)
    for lib in ("asyncio", "dateutil"):
        logging.getLogger(lib).setLevel(third_party_level)

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``daypicker``.

    Example:
        >>> get_logger("cli").name
        'daypicker.cli'
    """
    return logging.getLogger(f"daypicker.{name}")


def apply_command_line_overrides(
    settings: "DayPickerSettings", args: Any
) -> "DayPickerSettings":
    """Apply command-line argument overrides to logging settings.

    Priority: Command-line > Environment > YAML > Defaults. Modifies the
    settings object in place and returns it.
    """
    if getattr(args, "log_level", None):
        settings.logging.console_level = args.log_level.upper()
        settings.logging.file_level = args.log_level.upper()

    if getattr(args, "verbose", False):
        settings.logging.console_level = "VERBOSE"
        settings.logging.file_level = "VERBOSE"

    if getattr(args, "quiet", False):
        settings.logging.console_level = "ERROR"

    if getattr(args, "log_dir", None):
        settings.logging.file_enabled = True
        settings.logging.file_directory = args.log_dir

    if getattr(args, "no_log_colors", False):
        settings.logging.console_colors = False

    return settings

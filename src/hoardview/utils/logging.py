"""Logging utilities for hoardview."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

_HANDLER_NAME = "hoardview"


@dataclass
class RevealStats:
    """Statistics from a reveal run."""

    revealed_count: int = 0
    cached_count: int = 0
    error_count: int = 0
    errors: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate reveal duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    @property
    def failed_paths(self) -> list[str]:
        return [path for path, _ in self.errors]


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Handlers installed by an earlier call are replaced, so configuring twice
    in one process does not duplicate output.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output except errors

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    for handler in list(root_logger.handlers):
        if handler.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    console_handler = logging.StreamHandler()
    console_handler.set_name(_HANDLER_NAME)
    console_handler.setLevel(logging.ERROR if quiet else getattr(logging, console_level.upper()))
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(console_handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("hoardview")
    logger.info(
        "Logging initialized",
        log_file=str(log_file) if log_file else None,
        level=console_level,
    )

    return logger


def get_logger(name: str = "hoardview") -> structlog.stdlib.BoundLogger:
    """Return a structlog logger for a hoardview component."""
    return structlog.get_logger(name)


class RevealLogger:
    """Logger for tracking reveal progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = RevealStats()

    def log_font_start(self, path: str) -> None:
        """Log start of a font reveal."""
        self._logger.debug("Revealing font", font=path)

    def log_font_revealed(self, path: str, name: str, cached: bool, duration_ms: float) -> None:
        """Log a successful reveal."""
        self._logger.info(
            "Font revealed",
            font=path,
            name=name,
            cached=cached,
            duration_ms=round(duration_ms, 2),
        )
        self._stats.revealed_count += 1
        if cached:
            self._stats.cached_count += 1

    def log_font_error(
        self,
        path: str,
        error: Exception,
        traceback: str | None = None,
    ) -> None:
        """Log a failed reveal."""
        self._logger.error(
            "Font reveal failed",
            font=path,
            error=str(error),
            error_type=type(error).__name__,
            traceback=traceback,
        )
        self._stats.error_count += 1
        self._stats.errors.append((path, str(error)))

    @property
    def stats(self) -> RevealStats:
        """Get current reveal statistics."""
        return self._stats

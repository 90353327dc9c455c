"""
Logging system for ZapGo.

Everything logs below the "zapgo" logger. setup_logging() attaches a colored
stderr handler and, when a log file is configured, a size-rotated file of
JSON lines. Both handlers redact secrets from assembled link URLs.

    from zapgo.utils.logging import setup_logging, get_logger, log_performance

    setup_logging(settings)
    logger = get_logger(__name__)
    with log_performance("Input resolution"):
        ...
"""

import os
import re
import sys
import json
import time
import logging
import logging.handlers
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

ROOT_LOGGER = "zapgo"
PERFORMANCE_LOGGER = "zapgo.performance"

REDACTED = "***REDACTED***"

RESET = "\033[0m"
LEVEL_STYLES = {
    logging.DEBUG: "\033[2m",
    logging.INFO: "\033[36m",
    logging.WARNING: "\033[33m",
    logging.ERROR: "\033[31m",
    logging.CRITICAL: "\033[1;41m",
}


class UrlSecretFilter(logging.Filter):
    """Masks credentials inside URLs before a record is emitted.

    Link templates may carry API keys in their query string or user:password
    in their authority, and the link opener logs every URL it assembles.
    """

    QUERY_SECRET = re.compile(
        r"([?&](?:api[_-]?key|key|token|access_token|secret|password|sig)=)[^&#\s]+",
        re.IGNORECASE,
    )
    USERINFO = re.compile(r"(\b[a-z][a-z0-9+.-]*://[^:/@\s]+:)[^@/\s]+@", re.IGNORECASE)
    BEARER = re.compile(r"(bearer\s+)\S{16,}", re.IGNORECASE)

    def mask(self, text: str) -> str:
        text = self.QUERY_SECRET.sub(rf"\1{REDACTED}", text)
        text = self.USERINFO.sub(rf"\1{REDACTED}@", text)
        return self.BEARER.sub(rf"\1{REDACTED}", text)

    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, str):
            record.msg = self.mask(record.msg)
        if isinstance(record.args, tuple):
            record.args = tuple(self.mask(a) if isinstance(a, str) else a for a in record.args)
        return True


def _stderr_has_color() -> bool:
    if os.getenv("NO_COLOR"):
        return False
    if os.getenv("FORCE_COLOR"):
        return True
    isatty = getattr(sys.stderr, "isatty", None)
    return bool(isatty and isatty()) and os.getenv("TERM", "") != "dumb"


class ConsoleFormatter(logging.Formatter):
    """Compact one-line console format, tinted by level when stderr allows it."""

    def __init__(self, color: Optional[bool] = None):
        super().__init__("%(asctime)s %(levelname)-7s %(name)s: %(message)s", datefmt="%H:%M:%S")
        self.color = _stderr_has_color() if color is None else color

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        style = LEVEL_STYLES.get(record.levelno) if self.color else None
        return f"{style}{line}{RESET}" if style else line


class JsonLineFormatter(logging.Formatter):
    """One JSON object per line, with any `extra=` fields under "context"."""

    _RECORD_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {"message", "asctime"}

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": datetime.fromtimestamp(record.created).isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "logger": record.name,
            "msg": record.getMessage(),
            "at": f"{record.module}:{record.lineno}",
        }

        context = {k: v for k, v in vars(record).items() if k not in self._RECORD_FIELDS}
        if context:
            entry["context"] = context
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str, ensure_ascii=False)


class PerformanceTimer:
    """Context manager logging how long a block took, in milliseconds."""

    def __init__(self, logger: logging.Logger, operation: str, level: int = logging.DEBUG):
        self.logger = logger
        self.operation = operation
        self.level = level
        self._started: Optional[float] = None
        self.elapsed_ms: Optional[float] = None

    def __enter__(self) -> "PerformanceTimer":
        self._started = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.elapsed_ms = (time.perf_counter() - self._started) * 1000
        outcome = "failed after" if exc_type else "took"
        self.logger.log(self.level, f"{self.operation} {outcome} {self.elapsed_ms:.2f}ms")

    @property
    def duration(self) -> Optional[float]:
        """Elapsed seconds, once the block has finished."""
        return None if self.elapsed_ms is None else self.elapsed_ms / 1000


class LoggingManager:
    """Owns the handlers attached to the "zapgo" logger."""

    def __init__(self):
        self._initialized = False
        self._loggers: Dict[str, logging.Logger] = {}

    def setup_logging(self, settings, verbose: bool = False, force_reinit: bool = False):
        """Attach handlers according to settings.app.

        Args:
            settings: ZapgoSettings instance
            verbose: Force DEBUG level
            force_reinit: Replace handlers from an earlier call
        """
        if self._initialized and not force_reinit:
            return

        app = settings.app
        level = logging.DEBUG if verbose or app.verbose_logging else logging.getLevelName(app.log_level.value)

        root = logging.getLogger(ROOT_LOGGER)
        root.setLevel(level)
        root.propagate = False
        for handler in list(root.handlers):
            root.removeHandler(handler)
            handler.close()

        for handler in self._build_handlers(app):
            handler.setLevel(level)
            handler.addFilter(UrlSecretFilter())
            root.addHandler(handler)

        self._initialized = True
        root.debug(f"Logging ready at {logging.getLevelName(level)}")

    def _build_handlers(self, app) -> List[logging.Handler]:
        console = logging.StreamHandler(sys.stderr)
        console.setFormatter(ConsoleFormatter())
        handlers: List[logging.Handler] = [console]

        if app.log_file:
            try:
                Path(app.log_file).parent.mkdir(parents=True, exist_ok=True)
                rotating = logging.handlers.RotatingFileHandler(
                    app.log_file,
                    maxBytes=app.max_log_size_mb * 1024 * 1024,
                    backupCount=app.backup_count,
                    encoding="utf-8",
                )
            except OSError as e:
                print(f"Warning: file logging disabled ({app.log_file}): {e}", file=sys.stderr)
            else:
                rotating.setFormatter(JsonLineFormatter())
                handlers.append(rotating)

        return handlers

    def get_logger(self, name: str) -> logging.Logger:
        logger = self._loggers.get(name)
        if logger is None:
            logger = self._loggers[name] = logging.getLogger(name)
        return logger

    def create_performance_timer(self, operation: str, level: int = logging.DEBUG) -> PerformanceTimer:
        return PerformanceTimer(self.get_logger(PERFORMANCE_LOGGER), operation, level)

    def is_initialized(self) -> bool:
        return self._initialized


_logging_manager = LoggingManager()


def setup_logging(settings, verbose: bool = False, force_reinit: bool = False):
    """Configure ZapGo logging from a ZapgoSettings instance."""
    _logging_manager.setup_logging(settings, verbose, force_reinit)


def get_logger(name: str) -> logging.Logger:
    return _logging_manager.get_logger(name)


@contextmanager
def log_performance(operation: str, level: int = logging.DEBUG):
    """Time the enclosed block under the zapgo.performance logger."""
    with _logging_manager.create_performance_timer(operation, level) as timer:
        yield timer


def is_logging_initialized() -> bool:
    return _logging_manager.is_initialized()

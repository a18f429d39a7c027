import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Iterable, Optional


DEFAULT_FORMAT = "%(asctime)s  [%(levelname)s]  %(name)s › %(message)s"
DEFAULT_DATEFMT = "%H:%M:%S"
LOG_LEVEL_ENV = "MULTICAL_LOG_LEVEL"
LOG_FILE_MAX_BYTES = 2_000_000
LOG_FILE_BACKUPS = 2

# Calendar libraries that log their own internals at DEBUG
NOISY_LOGGERS = ("jdatetime", "hijri_converter", "pydantic")


class TruncateLongMsgs(logging.Filter):
    """Cuts console lines (zone-offset tables, profile dumps) to `max_len` characters."""

    def __init__(self, max_len: int = 200):
        super().__init__()
        self.max_len = max_len

    def filter(self, record: logging.LogRecord) -> bool:
        text = record.getMessage()
        if 0 < self.max_len < len(text):
            record.msg, record.args = f"{text[: self.max_len]} …(truncated)", ()
        return True


_configured = False


def _level_from_env(default: int) -> int:
    name = (os.getenv(LOG_LEVEL_ENV) or "").strip().upper()
    level = logging.getLevelName(name) if name else default
    return level if isinstance(level, int) else default


def _console_handler(formatter: logging.Formatter, truncate_len: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)
    if truncate_len > 0:
        handler.addFilter(TruncateLongMsgs(truncate_len))
    return handler


def _file_handler(formatter: logging.Formatter, path: str) -> logging.Handler:
    handler = RotatingFileHandler(
        path, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUPS, encoding="utf-8"
    )
    handler.setFormatter(formatter)
    return handler


def setup_logging(
    *,
    level: Optional[int] = None,
    console: bool = True,
    console_truncate_len: int = 200,
    log_file: Optional[str] = None,
    quiet: Iterable[str] = NOISY_LOGGERS,
) -> None:
    """
    Configure the root logger for an entry point; later calls are no-ops.

    Engine modules only ever call `logging.getLogger(__name__)`. `level`
    defaults to $MULTICAL_LOG_LEVEL, then INFO. The file log, when asked for,
    rotates and is never truncated.
    """
    global _configured
    if _configured:
        return

    if level is None:
        level = _level_from_env(logging.INFO)

    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)
    root.setLevel(level)

    formatter = logging.Formatter(fmt=DEFAULT_FORMAT, datefmt=DEFAULT_DATEFMT)
    if console:
        root.addHandler(_console_handler(formatter, console_truncate_len))
    if log_file:
        root.addHandler(_file_handler(formatter, log_file))

    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True
    logging.getLogger(__name__).debug("🚀 Logging initialised (level=%s)", logging.getLevelName(level))


def get_logger(name: Optional[str] = None) -> logging.Logger:
    return logging.getLogger(name or "multical")

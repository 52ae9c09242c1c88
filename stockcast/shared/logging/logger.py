"""Logging setup and helpers shared by every stockcast layer."""
import logging
import logging.handlers
import os
import sys
import time
from typing import Optional

# Chatty HTTP and charting libraries only surface warnings.
QUIET_LOGGERS = ('urllib3', 'requests', 'yfinance', 'plotly', 'werkzeug')


def setup_logging(
    level: int = logging.INFO,
    format_string: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    log_file: Optional[str] = None,
    max_file_size: int = 10 * 1024 * 1024,
    backup_count: int = 5
) -> None:
    """
    Configure the root logger with a stdout handler and, when ``log_file``
    is given, a size-rotated file handler.

    Args:
        level: Logging level for the root logger and its handlers
        format_string: Log record format
        log_file: Optional log file path; missing directories are created
        max_file_size: Bytes before the log file is rotated
        backup_count: Rotated files to keep
    """
    handlers = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        handlers.append(logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_file_size,
            backupCount=backup_count
        ))

    formatter = logging.Formatter(format_string)
    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger, by convention ``get_logger(__name__)``."""
    return logging.getLogger(name)


class ContextualLogger(logging.LoggerAdapter):
    """Prefixes every message with ``[key=value | ...]`` context."""

    def process(self, msg, kwargs):
        if not self.extra:
            return msg, kwargs
        context = " | ".join(f"{k}={v}" for k, v in self.extra.items())
        return f"[{context}] {msg}", kwargs


def get_contextual_logger(name: str, **context) -> ContextualLogger:
    """
    Get a logger whose messages carry ``context``.

    Args:
        name: Logger name
        **context: Key/value pairs shown in front of each message,
            e.g. ``symbol='AAPL'``

    Returns:
        ContextualLogger instance
    """
    return ContextualLogger(get_logger(name), context)


class TimedOperation:
    """Context manager logging how long a block took, or that it failed."""

    def __init__(self, logger, operation: str):
        self.logger = logger
        self.operation = operation
        self.started: Optional[float] = None

    @property
    def elapsed(self) -> float:
        return time.perf_counter() - self.started if self.started is not None else 0.0

    def __enter__(self) -> 'TimedOperation':
        self.started = time.perf_counter()
        self.logger.debug(f"Starting {self.operation}")
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None:
            self.logger.info(f"Completed {self.operation} in {self.elapsed:.2f}s")
        else:
            self.logger.warning(f"Failed {self.operation} after {self.elapsed:.2f}s: {exc_val}")
        return False


def timed_operation(logger, operation: str) -> TimedOperation:
    """Time ``operation`` with ``logger`` (a Logger or ContextualLogger)."""
    return TimedOperation(logger, operation)

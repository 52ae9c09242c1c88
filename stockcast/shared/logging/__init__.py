"""Logging utilities for the stockcast application."""
from .logger import (
    get_logger,
    setup_logging,
    get_contextual_logger,
    timed_operation,
)

__all__ = [
    'get_logger',
    'setup_logging',
    'get_contextual_logger',
    'timed_operation'
]

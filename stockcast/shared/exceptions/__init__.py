"""Custom exceptions for the stockcast application."""
from .base import StockcastError
from .data import DataError, DataValidationError, DataNotFoundError
from .provider import ProviderError, RateLimitError, NetworkError
from .config import ConfigurationError
from .watchlist import (
    WatchlistError,
    DuplicateSymbolError,
    WatchlistFullError,
    SymbolNotFoundError,
)

__all__ = [
    'StockcastError',
    'DataError',
    'DataValidationError',
    'DataNotFoundError',
    'ProviderError',
    'RateLimitError',
    'NetworkError',
    'ConfigurationError',
    'WatchlistError',
    'DuplicateSymbolError',
    'WatchlistFullError',
    'SymbolNotFoundError'
]

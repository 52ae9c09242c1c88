"""Watchlist exceptions."""
from .base import StockcastError


class WatchlistError(StockcastError):
    """Base exception for watchlist errors."""
    pass


class DuplicateSymbolError(WatchlistError):
    """Exception raised when a symbol is already on the watchlist."""
    pass


class WatchlistFullError(WatchlistError):
    """Exception raised when the watchlist has reached its limit."""
    pass


class SymbolNotFoundError(WatchlistError):
    """Exception raised when removing a symbol that is not loaded."""
    pass

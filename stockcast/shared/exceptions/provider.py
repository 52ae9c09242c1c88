"""Quote provider exceptions."""
from .base import StockcastError


class ProviderError(StockcastError):
    """Base exception for quote provider errors."""
    pass


class RateLimitError(ProviderError):
    """Exception raised when API rate limits are exceeded."""
    pass


class NetworkError(ProviderError):
    """Exception raised for network-related errors."""
    pass

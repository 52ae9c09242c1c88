"""Configuration-related exceptions."""
from .base import StockcastError


class ConfigurationError(StockcastError):
    """Exception raised for configuration-related errors."""
    pass

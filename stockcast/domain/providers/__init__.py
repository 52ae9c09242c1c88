"""Provider interfaces for the stockcast application."""
from .quote_provider import IQuoteProvider

__all__ = ['IQuoteProvider']

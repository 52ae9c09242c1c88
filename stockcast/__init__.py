"""Daily stock prices with a short-horizon heuristic forecast."""

__version__ = '1.0.0'

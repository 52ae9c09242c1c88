"""Application services for the stockcast application."""
from .stock_data_service import StockDataService, normalize_symbol, build_forecast_points
from .watchlist_service import WatchlistService

__all__ = [
    'StockDataService',
    'normalize_symbol',
    'build_forecast_points',
    'WatchlistService'
]

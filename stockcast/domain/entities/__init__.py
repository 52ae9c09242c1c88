"""Domain entities for the stockcast application."""
from .stock import StockPrice, StockMetadata, StockSeries
from .forecast import IndicatorSnapshot, ForecastPoint, StockForecast

__all__ = [
    'StockPrice',
    'StockMetadata',
    'StockSeries',
    'IndicatorSnapshot',
    'ForecastPoint',
    'StockForecast'
]

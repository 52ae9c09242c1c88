"""Quote provider interface."""
from abc import ABC, abstractmethod

from ..entities.stock import StockSeries


class IQuoteProvider(ABC):
    """Interface for fetching daily price series from a market data source."""

    name = 'abstract'

    @abstractmethod
    def get_daily_series(self, symbol: str) -> StockSeries:
        """Fetch the daily series for a symbol, oldest price first.

        Raises DataNotFoundError when the symbol has no usable data and a
        ProviderError subclass when the source itself fails.
        """
        pass

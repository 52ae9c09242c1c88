"""Application service managing the symbols shown on the chart."""
import threading
from collections import OrderedDict
from typing import List, Optional

from ...domain.entities.forecast import StockForecast
from ...shared.config import WatchlistSettings, get_settings
from ...shared.exceptions import (
    DuplicateSymbolError,
    SymbolNotFoundError,
    WatchlistFullError,
)
from ...shared.logging import get_logger
from .stock_data_service import StockDataService, normalize_symbol


class WatchlistService:
    """In-memory, insertion-ordered set of loaded forecasts."""

    def __init__(
        self,
        stock_data_service: StockDataService,
        settings: Optional[WatchlistSettings] = None
    ):
        self.stock_data_service = stock_data_service
        self.settings = settings or get_settings().watchlist
        self._entries: 'OrderedDict[str, StockForecast]' = OrderedDict()
        self._lock = threading.Lock()
        self.logger = get_logger(__name__)

    @property
    def max_symbols(self) -> int:
        return self.settings.max_symbols

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, symbol: str) -> bool:
        return symbol.strip().upper() in self._entries

    def forecasts(self) -> List[StockForecast]:
        with self._lock:
            return list(self._entries.values())

    def get(self, symbol: str) -> Optional[StockForecast]:
        return self._entries.get(symbol.strip().upper())

    def _check_can_add(self, symbol: str) -> None:
        if len(self._entries) >= self.max_symbols:
            raise WatchlistFullError(
                f"Maximum of {self.max_symbols} stocks allowed. Remove some stocks to add new ones."
            )
        if symbol in self._entries:
            raise DuplicateSymbolError('This stock is already added to the chart.', {'symbol': symbol})

    def add(self, forecast: StockForecast) -> StockForecast:
        """Add an already fetched forecast."""
        with self._lock:
            self._check_can_add(forecast.symbol)
            self._entries[forecast.symbol] = forecast
        self.logger.info(f"Added {forecast.symbol} ({len(self._entries)}/{self.max_symbols})")
        return forecast

    def load(self, symbol: str) -> StockForecast:
        """Validate ``symbol``, fetch its data and forecast, and add it.

        Limits are checked before any network call so a full or duplicate
        watchlist costs no API quota.
        """
        symbol = normalize_symbol(symbol)
        with self._lock:
            self._check_can_add(symbol)

        forecast = self.stock_data_service.get_stock_forecast(symbol)
        return self.add(forecast)

    def remove(self, symbol: str) -> StockForecast:
        key = symbol.strip().upper()
        with self._lock:
            if key not in self._entries:
                raise SymbolNotFoundError(f"{key} is not on the chart.", {'symbol': key})
            removed = self._entries.pop(key)
        self.logger.info(f"Removed {key}")
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

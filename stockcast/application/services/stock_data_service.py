"""Application service for fetching stock data and attaching forecasts."""
import re
import time
from datetime import timedelta
from typing import Callable, List, Optional

from ...domain.entities.forecast import ForecastPoint, StockForecast
from ...domain.entities.stock import StockSeries
from ...domain.providers.quote_provider import IQuoteProvider
from ...domain.services.forecast_service import ForecastService
from ...shared.config import Settings, get_settings
from ...shared.exceptions import DataValidationError, StockcastError
from ...shared.logging import get_contextual_logger, get_logger, timed_operation

SYMBOL_PATTERN = re.compile(r'^[A-Z0-9.]+$')


def normalize_symbol(symbol: str) -> str:
    """Upper-case and validate a ticker symbol."""
    normalized = str(symbol or '').strip().upper()
    if not SYMBOL_PATTERN.match(normalized):
        raise DataValidationError(
            'Invalid symbol format. Please use only letters, numbers, and dots.',
            {'symbol': symbol}
        )
    return normalized


def build_forecast_points(series: StockSeries, prices: List[float]) -> List[ForecastPoint]:
    """Date predicted prices on consecutive calendar days after the last close."""
    last_date = series.last_date
    if last_date is None:
        return []
    return [
        ForecastPoint(offset_day=offset, date=last_date + timedelta(days=offset), price=price)
        for offset, price in enumerate(prices, start=1)
    ]


class StockDataService:
    """Fetches a target series plus a market reference and projects its closes."""

    def __init__(
        self,
        provider: IQuoteProvider,
        forecast_service: Optional[ForecastService] = None,
        settings: Optional[Settings] = None,
        sleep: Callable[[float], None] = time.sleep
    ):
        self.provider = provider
        self.settings = settings or get_settings()
        self.forecast_service = forecast_service or ForecastService(self.settings.forecast)
        self.sleep = sleep
        self.logger = get_logger(__name__)

    def fetch_reference_closes(self) -> Optional[List[float]]:
        """Fetch reference symbols in order and return the first usable closes.

        Each call waits ``request_delay`` seconds first to stay under the
        provider's rate limit. Failures are logged and skipped.
        """
        for reference_symbol in self.settings.provider.reference_symbols:
            self.logger.info(f"Fetching correlation data for {reference_symbol}...")
            self.sleep(self.settings.provider.request_delay)
            try:
                series = self.provider.get_daily_series(reference_symbol)
            except StockcastError as e:
                self.logger.warning(f"Failed to fetch correlation data for {reference_symbol}: {e}")
                continue

            closes = series.closes
            if closes:
                return closes
        return None

    def get_stock_forecast(self, symbol: str, horizon_days: Optional[int] = None) -> StockForecast:
        """Fetch ``symbol``, its reference market series, and project ``horizon_days`` closes."""
        symbol = normalize_symbol(symbol)
        horizon = horizon_days if horizon_days is not None else self.settings.forecast.horizon_days
        log = get_contextual_logger(__name__, symbol=symbol)

        with timed_operation(log, f"fetching {symbol}"):
            series = self.provider.get_daily_series(symbol)
            reference_closes = self.fetch_reference_closes()

        target_closes = series.closes
        if reference_closes is None:
            log.warning("No reference data available, using the target series as reference")
            reference_closes = target_closes

        predicted = self.forecast_service.project(target_closes, reference_closes, horizon)
        if not predicted:
            log.info(
                f"Not enough history to forecast ({len(target_closes)} prices, "
                f"need {self.forecast_service.settings.min_history})"
            )

        return StockForecast(
            metadata=series.metadata,
            prices=series.prices,
            predictions=build_forecast_points(series, predicted)
        )

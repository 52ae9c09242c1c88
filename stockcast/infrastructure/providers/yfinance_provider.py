"""Yahoo Finance daily series provider backed by yfinance."""
from typing import Optional

import curl_cffi.requests as curl_requests
import pandas as pd
import yfinance as yf

from ...domain.entities.stock import StockMetadata, StockPrice, StockSeries
from ...domain.providers.quote_provider import IQuoteProvider
from ...shared.config import ProviderSettings, get_settings
from ...shared.exceptions import DataNotFoundError, NetworkError
from ...shared.logging import get_logger


class YFinanceProvider(IQuoteProvider):
    """Fetches daily history through ``yf.Ticker(...).history``."""

    name = 'yfinance'

    def __init__(self, settings: Optional[ProviderSettings] = None, session=None):
        self.settings = settings or get_settings().provider
        self.session = session or curl_requests.Session(impersonate="chrome")
        self.logger = get_logger(__name__)

    def get_daily_series(self, symbol: str) -> StockSeries:
        """Fetch ``history_period`` of daily bars for ``symbol``."""
        self.logger.info(f"Fetching data for {symbol}...")
        try:
            hist = yf.Ticker(symbol, session=self.session).history(
                period=self.settings.history_period,
                interval='1d',
                auto_adjust=False
            )
        except Exception as e:
            raise NetworkError(f"Error fetching {symbol} from Yahoo Finance: {e}", {'symbol': symbol}) from e

        if hist is None or hist.empty:
            raise DataNotFoundError(f"No daily time series data available for {symbol}")

        prices = []
        for timestamp, row in hist.sort_index().iterrows():
            if pd.isna(row['Close']):
                continue
            close = float(row['Close'])
            try:
                prices.append(StockPrice(
                    date=timestamp.date(),
                    open=float(row['Open']) if not pd.isna(row['Open']) else close,
                    high=float(row['High']) if not pd.isna(row['High']) else close,
                    low=float(row['Low']) if not pd.isna(row['Low']) else close,
                    close=close,
                    volume=float(row['Volume']) if not pd.isna(row['Volume']) else 0.0
                ))
            except ValueError as e:
                self.logger.warning(f"Skipping malformed bar for {symbol} on {timestamp.date()}: {e}")

        if not prices:
            raise DataNotFoundError(f"No valid price data found for {symbol}")

        index_tz = getattr(hist.index, 'tz', None)
        metadata = StockMetadata(
            symbol=symbol,
            last_refreshed=prices[-1].date.isoformat(),
            timezone=str(index_tz) if index_tz is not None else None
        )
        return StockSeries(metadata=metadata, prices=prices)

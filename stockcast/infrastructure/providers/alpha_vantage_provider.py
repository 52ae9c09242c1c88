"""Alpha Vantage daily time series provider."""
import json
import math
from datetime import datetime
from typing import Any, Dict, List, Optional

import requests

from ...domain.entities.stock import StockMetadata, StockPrice, StockSeries
from ...domain.providers.quote_provider import IQuoteProvider
from ...shared.config import ProviderSettings, get_settings
from ...shared.exceptions import (
    DataNotFoundError,
    NetworkError,
    ProviderError,
    RateLimitError,
)
from ...shared.logging import get_logger

TIME_SERIES_KEY = 'Time Series (Daily)'
META_DATA_KEY = 'Meta Data'

logger = get_logger(__name__)


def validate_api_response(data: Dict[str, Any], symbol: str) -> None:
    """Raise the matching provider error for an Alpha Vantage payload.

    The checks run in the order the API reports problems: explicit error,
    rate-limit note, informational message, then missing sections.
    """
    logger.debug(f"API response for {symbol}: {json.dumps(data)[:500]}")

    if data.get('Error Message'):
        raise ProviderError(f"API Error: {data['Error Message']}", {'symbol': symbol})

    if data.get('Note'):
        raise RateLimitError(
            'API rate limit reached. Please try again in a minute.',
            {'symbol': symbol}
        )

    if data.get('Information'):
        raise ProviderError(f"API Information: {data['Information']}", {'symbol': symbol})

    if not data.get(META_DATA_KEY):
        raise DataNotFoundError(
            f"Invalid symbol or API error for {symbol}. Please check the symbol and try again."
        )

    if not data.get(TIME_SERIES_KEY):
        raise DataNotFoundError(f"No daily time series data available for {symbol}")


def _parse_float(value: Any) -> Optional[float]:
    try:
        parsed = float(value)
    except (TypeError, ValueError):
        return None
    return parsed if math.isfinite(parsed) else None


def parse_time_series(time_series: Dict[str, Dict[str, str]]) -> List[StockPrice]:
    """Convert the daily time series mapping into prices sorted oldest first.

    Rows whose close cannot be parsed are dropped; other missing fields
    fall back to the close (prices) or 0 (volume).
    """
    prices = []
    for day, values in time_series.items():
        close = _parse_float(values.get('4. close'))
        if close is None:
            logger.debug(f"Skipping {day}: unparsable close {values.get('4. close')!r}")
            continue

        open_price = _parse_float(values.get('1. open'))
        high = _parse_float(values.get('2. high'))
        low = _parse_float(values.get('3. low'))
        volume = _parse_float(values.get('5. volume'))

        try:
            prices.append(StockPrice(
                date=datetime.strptime(day, '%Y-%m-%d').date(),
                open=open_price if open_price is not None else close,
                high=high if high is not None else close,
                low=low if low is not None else close,
                close=close,
                volume=volume if volume is not None else 0.0
            ))
        except ValueError as e:
            logger.warning(f"Skipping malformed row for {day}: {e}")

    prices.sort(key=lambda price: price.date)
    return prices


class AlphaVantageProvider(IQuoteProvider):
    """Fetches ``TIME_SERIES_DAILY`` data from the Alpha Vantage query API."""

    name = 'alpha_vantage'

    def __init__(
        self,
        settings: Optional[ProviderSettings] = None,
        session: Optional[requests.Session] = None
    ):
        self.settings = settings or get_settings().provider
        self.session = session or requests.Session()
        self.session.headers.setdefault('User-Agent', self.settings.user_agent)
        self.logger = get_logger(__name__)

    def _request(self, symbol: str) -> Dict[str, Any]:
        params = {
            'function': 'TIME_SERIES_DAILY',
            'symbol': symbol,
            'apikey': self.settings.api_key,
            'outputsize': self.settings.output_size
        }
        try:
            response = self.session.get(
                self.settings.base_url,
                params=params,
                timeout=self.settings.timeout
            )
            response.raise_for_status()
        except requests.exceptions.HTTPError as e:
            raise NetworkError(f"HTTP error fetching {symbol}: {e}", {'symbol': symbol}) from e
        except requests.exceptions.RequestException as e:
            raise NetworkError(f"Network error fetching {symbol}: {e}", {'symbol': symbol}) from e

        try:
            return response.json()
        except requests.exceptions.JSONDecodeError as e:
            raise ProviderError(f"Malformed response for {symbol}: {e}", {'symbol': symbol}) from e

    def get_daily_series(self, symbol: str) -> StockSeries:
        """Fetch and validate the compact daily series for ``symbol``."""
        self.logger.info(f"Fetching data for {symbol}...")
        data = self._request(symbol)
        validate_api_response(data, symbol)

        meta = data[META_DATA_KEY]
        metadata = StockMetadata(
            symbol=meta.get('2. Symbol', symbol),
            name='',
            currency='USD',
            last_refreshed=meta.get('3. Last Refreshed'),
            timezone=meta.get('5. Time Zone')
        )

        prices = parse_time_series(data[TIME_SERIES_KEY])
        if not prices:
            raise DataNotFoundError(f"No valid price data found for {symbol}")

        self.logger.debug(f"Parsed {len(prices)} daily prices for {symbol}")
        return StockSeries(metadata=metadata, prices=prices)

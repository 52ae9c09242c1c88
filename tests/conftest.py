import pytest
from datetime import date, timedelta

from stockcast.domain.entities.stock import StockMetadata, StockPrice, StockSeries
from stockcast.shared.config import (
    ChartSettings,
    ForecastSettings,
    LoggingSettings,
    ProviderSettings,
    Settings,
    WatchlistSettings,
    WebSettings,
)
from stockcast.shared.exceptions import DataNotFoundError


def build_series(symbol, closes, start=date(2024, 1, 1)):
    prices = [
        StockPrice(
            date=start + timedelta(days=i),
            open=close,
            high=close + 1,
            low=max(close - 1, 0),
            close=close,
            volume=1000
        )
        for i, close in enumerate(closes)
    ]
    metadata = StockMetadata(
        symbol=symbol,
        last_refreshed=prices[-1].date.isoformat() if prices else None,
        timezone='US/Eastern'
    )
    return StockSeries(metadata=metadata, prices=prices)


def wavy_closes(n=60, base=100.0):
    return [round(base + (i % 7) - 3 + i * 0.1, 2) for i in range(n)]


class FakeProvider:
    """Quote provider serving canned series or raising canned errors."""

    name = 'fake'

    def __init__(self, responses=None):
        self.responses = responses or {}
        self.calls = []

    def get_daily_series(self, symbol):
        self.calls.append(symbol)
        response = self.responses.get(symbol)
        if response is None:
            raise DataNotFoundError(
                f"Invalid symbol or API error for {symbol}. Please check the symbol and try again."
            )
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def settings():
    return Settings(
        provider=ProviderSettings(request_delay=0, reference_symbols=['SPY', 'QQQ']),
        forecast=ForecastSettings(random_seed=1),
        watchlist=WatchlistSettings(),
        chart=ChartSettings(),
        web=WebSettings(),
        logging=LoggingSettings()
    )


@pytest.fixture
def series_factory():
    return build_series


@pytest.fixture
def fake_provider():
    return FakeProvider({
        'AAPL': build_series('AAPL', wavy_closes(60, 180.0)),
        'MSFT': build_series('MSFT', wavy_closes(60, 400.0)),
        'SPY': build_series('SPY', wavy_closes(60, 470.0)),
        'QQQ': build_series('QQQ', wavy_closes(60, 390.0)),
    })


@pytest.fixture
def provider_factory():
    return FakeProvider


@pytest.fixture
def closes_factory():
    return wavy_closes

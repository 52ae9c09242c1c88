import pytest
from datetime import date
from unittest.mock import patch

import numpy as np
import pandas as pd

from stockcast.infrastructure.providers.yfinance_provider import YFinanceProvider
from stockcast.shared.config import ProviderSettings
from stockcast.shared.exceptions import DataNotFoundError, NetworkError


@pytest.fixture
def provider():
    return YFinanceProvider(ProviderSettings(history_period='3mo'), session=object())


def history_frame():
    idx = pd.date_range("2024-01-02", periods=3, tz="America/New_York")
    return pd.DataFrame({
        "Open": [10.0, 11.0, 12.0],
        "High": [12.0, 13.0, 14.0],
        "Low": [9.0, 10.0, 11.0],
        "Close": [11.0, np.nan, 13.0],
        "Volume": [1000, 1100, 1200]
    }, index=idx)


@patch("stockcast.infrastructure.providers.yfinance_provider.yf.Ticker")
def test_get_daily_series_drops_missing_closes(mock_ticker, provider):
    mock_ticker.return_value.history.return_value = history_frame()

    series = provider.get_daily_series("AAPL")

    assert series.symbol == "AAPL"
    assert series.closes == [11.0, 13.0]
    assert [p.date for p in series.prices] == [date(2024, 1, 2), date(2024, 1, 4)]
    assert series.metadata.last_refreshed == "2024-01-04"
    assert series.metadata.timezone == "America/New_York"
    _, kwargs = mock_ticker.return_value.history.call_args
    assert kwargs["period"] == "3mo"


@patch("stockcast.infrastructure.providers.yfinance_provider.yf.Ticker")
def test_empty_history_raises_not_found(mock_ticker, provider):
    mock_ticker.return_value.history.return_value = pd.DataFrame()
    with pytest.raises(DataNotFoundError):
        provider.get_daily_series("FAKE")


@patch("stockcast.infrastructure.providers.yfinance_provider.yf.Ticker", side_effect=Exception("API error"))
def test_fetch_failure_raises_network_error(mock_ticker, provider):
    with pytest.raises(NetworkError):
        provider.get_daily_series("AAPL")


@patch("stockcast.infrastructure.providers.yfinance_provider.yf.Ticker")
def test_inverted_high_low_bar_is_skipped(mock_ticker, provider):
    frame = history_frame()
    frame.loc[frame.index[0], "High"] = 9.0
    frame.loc[frame.index[0], "Low"] = 10.0
    mock_ticker.return_value.history.return_value = frame

    series = provider.get_daily_series("AAPL")

    assert series.closes == [13.0]
    assert series.metadata.last_refreshed == "2024-01-04"


@patch("stockcast.infrastructure.providers.yfinance_provider.yf.Ticker")
def test_only_malformed_bars_raises_not_found(mock_ticker, provider):
    frame = history_frame()
    frame["High"] = 1.0
    mock_ticker.return_value.history.return_value = frame
    with pytest.raises(DataNotFoundError, match="No valid price data found for AAPL"):
        provider.get_daily_series("AAPL")

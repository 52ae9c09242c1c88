import pytest
from datetime import date
from unittest.mock import MagicMock

from stockcast.application.services.stock_data_service import (
    StockDataService,
    build_forecast_points,
    normalize_symbol,
)
from stockcast.domain.services.forecast_service import ForecastService
from stockcast.shared.exceptions import (
    DataNotFoundError,
    DataValidationError,
    RateLimitError,
)


@pytest.fixture
def sleeps():
    return []


@pytest.fixture
def service(fake_provider, settings, sleeps):
    return StockDataService(fake_provider, settings=settings, sleep=sleeps.append)


def test_normalize_symbol():
    assert normalize_symbol(" brk.b ") == "BRK.B"
    assert normalize_symbol("aapl") == "AAPL"


@pytest.mark.parametrize("symbol", ["", "AA$", "AA PL", "^GSPC", None])
def test_normalize_symbol_rejects_invalid(symbol):
    with pytest.raises(DataValidationError):
        normalize_symbol(symbol)


def test_get_stock_forecast(service, fake_provider, sleeps):
    result = service.get_stock_forecast("aapl")

    assert result.symbol == "AAPL"
    assert len(result.prices) == 60
    assert [p.offset_day for p in result.predictions] == [1, 2, 3, 4, 5]
    # first reference succeeded, so QQQ is never requested
    assert fake_provider.calls == ["AAPL", "SPY"]
    assert sleeps == [0]


def test_forecast_dates_are_consecutive_calendar_days(service):
    result = service.get_stock_forecast("AAPL", horizon_days=3)
    last = result.prices[-1].date
    assert last == date(2024, 2, 29)
    assert [p.date for p in result.predictions] == [date(2024, 3, 1), date(2024, 3, 2), date(2024, 3, 3)]


def test_invalid_symbol_makes_no_request(service, fake_provider):
    with pytest.raises(DataValidationError):
        service.get_stock_forecast("AA$")
    assert fake_provider.calls == []


def test_unknown_target_propagates(service):
    with pytest.raises(DataNotFoundError):
        service.get_stock_forecast("NOPE")


def test_failed_reference_falls_through_to_next(provider_factory, series_factory, closes_factory, settings):
    provider = provider_factory({
        "AAPL": series_factory("AAPL", closes_factory(60)),
        "SPY": RateLimitError("API rate limit reached. Please try again in a minute."),
        "QQQ": series_factory("QQQ", closes_factory(60, 390.0)),
    })
    sleeps = []
    service = StockDataService(provider, settings=settings, sleep=sleeps.append)

    result = service.get_stock_forecast("AAPL")

    assert provider.calls == ["AAPL", "SPY", "QQQ"]
    assert len(sleeps) == 2
    assert len(result.predictions) == 5


def test_target_used_as_reference_when_all_references_fail(provider_factory, series_factory, closes_factory, settings):
    closes = closes_factory(60)
    provider = provider_factory({"AAPL": series_factory("AAPL", closes)})
    forecast_service = MagicMock(spec=ForecastService)
    forecast_service.project.return_value = [101.0, 102.0]
    forecast_service.settings = settings.forecast

    service = StockDataService(provider, forecast_service=forecast_service, settings=settings, sleep=lambda s: None)
    result = service.get_stock_forecast("AAPL", horizon_days=2)

    forecast_service.project.assert_called_once_with(closes, closes, 2)
    assert [p.price for p in result.predictions] == [101.0, 102.0]


def test_short_history_yields_no_predictions(provider_factory, series_factory, closes_factory, settings):
    provider = provider_factory({
        "NEW": series_factory("NEW", closes_factory(20)),
        "SPY": series_factory("SPY", closes_factory(60, 470.0)),
    })
    service = StockDataService(provider, settings=settings, sleep=lambda s: None)

    result = service.get_stock_forecast("NEW")
    assert len(result.prices) == 20
    assert result.predictions == []


def test_build_forecast_points_for_empty_series(series_factory):
    series = series_factory("AAPL", [])
    assert build_forecast_points(series, [1.0]) == []

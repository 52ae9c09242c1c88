import json

import pytest

from stockcast.presentation.web.web_app import ForecastWebApp, error_status
from stockcast.shared.exceptions import (
    NetworkError,
    ProviderError,
    RateLimitError,
    StockcastError,
)


@pytest.fixture
def web_app(settings, fake_provider):
    return ForecastWebApp(settings=settings, provider=fake_provider)


@pytest.fixture
def client(web_app):
    web_app.app.config["TESTING"] = True
    return web_app.app.test_client()


def test_add_stock(client):
    response = client.post("/api/stocks", json={"symbol": "aapl"})
    assert response.status_code == 201
    body = response.get_json()
    assert body["symbol"] == "AAPL"
    assert len(body["data"]) == 60
    assert len(body["predictions"]) == 5
    assert body["predictions"][0]["offset_day"] == 1
    assert body["predictions"][0]["date"] == "2024-03-01"


def test_list_stocks(client):
    client.post("/api/stocks", json={"symbol": "AAPL"})
    client.post("/api/stocks", json={"symbol": "MSFT"})

    body = client.get("/api/stocks").get_json()
    assert body["count"] == 2
    assert body["max_symbols"] == 10
    assert [stock["symbol"] for stock in body["stocks"]] == ["AAPL", "MSFT"]


def test_add_duplicate_stock(client):
    client.post("/api/stocks", json={"symbol": "AAPL"})
    response = client.post("/api/stocks", json={"symbol": "AAPL"})
    assert response.status_code == 400
    assert response.get_json()["error"] == "This stock is already added to the chart."


def test_add_invalid_symbol(client):
    response = client.post("/api/stocks", json={"symbol": "A$PL"})
    assert response.status_code == 400
    assert "Invalid symbol format" in response.get_json()["error"]


def test_add_unknown_symbol(client):
    response = client.post("/api/stocks", json={"symbol": "NOPE"})
    assert response.status_code == 404


def test_rate_limited_provider(settings, provider_factory):
    provider = provider_factory({"AAPL": RateLimitError("API rate limit reached. Please try again in a minute.")})
    client = ForecastWebApp(settings=settings, provider=provider).app.test_client()

    response = client.post("/api/stocks", json={"symbol": "AAPL"})
    assert response.status_code == 429
    assert "rate limit" in response.get_json()["error"]


def test_get_and_remove_stock(client):
    client.post("/api/stocks", json={"symbol": "AAPL"})

    assert client.get("/api/stocks/aapl").status_code == 200
    response = client.delete("/api/stocks/AAPL")
    assert response.status_code == 200
    assert response.get_json() == {"removed": "AAPL", "count": 0}

    assert client.delete("/api/stocks/AAPL").status_code == 404
    assert client.get("/api/stocks/AAPL").status_code == 404


def test_chart_endpoint(client):
    client.post("/api/stocks", json={"symbol": "AAPL"})
    response = client.get("/api/chart?height=300")
    figure = json.loads(response.data)
    assert [trace["name"] for trace in figure["data"]] == ["AAPL", "AAPL Prediction"]
    assert figure["layout"]["height"] == 400


def test_dashboard(client):
    client.post("/api/stocks", json={"symbol": "AAPL"})
    page = client.get("/").get_data(as_text=True)
    assert "Stock Price Tracker" in page
    assert "1/10 stocks added" in page
    assert "AAPL - 2024-02-29" in page


def test_dashboard_shows_error(client):
    page = client.get("/?error=Something+broke").get_data(as_text=True)
    assert "Something broke" in page


def test_form_add_and_remove(client):
    response = client.post("/stocks/add", data={"symbol": "msft"})
    assert response.status_code == 302
    assert client.get("/api/stocks").get_json()["count"] == 1

    response = client.post("/stocks/add", data={"symbol": "msft"})
    assert response.status_code == 302
    assert "error=" in response.headers["Location"]

    response = client.post("/stocks/MSFT/remove")
    assert response.status_code == 302
    assert client.get("/api/stocks").get_json()["count"] == 0


@pytest.mark.parametrize("error, status", [
    (RateLimitError("x"), 429),
    (NetworkError("x"), 502),
    (ProviderError("x"), 502),
    (StockcastError("x"), 500),
])
def test_error_status(error, status):
    assert error_status(error) == status

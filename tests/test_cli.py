import pytest
from unittest.mock import patch

from stockcast.presentation import cli
from stockcast.shared.config import get_config
from stockcast.shared.exceptions import ConfigurationError


@pytest.fixture
def fresh_config(monkeypatch):
    monkeypatch.setenv("PROVIDER_REQUEST_DELAY", "0")
    monkeypatch.delenv("QUOTE_PROVIDER", raising=False)
    get_config().reload()
    yield get_config()
    monkeypatch.undo()
    get_config().reload()


def test_parser_forecast_arguments():
    args = cli.build_parser().parse_args(["forecast", "AAPL", "--days", "3", "--seed", "9"])
    assert args.command == "forecast"
    assert args.symbol == "AAPL"
    assert args.days == 3
    assert args.seed == 9


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        cli.build_parser().parse_args([])


def test_forecast_command_prints_predictions(fresh_config, fake_provider, capsys):
    with patch("stockcast.presentation.cli.create_quote_provider", return_value=fake_provider):
        exit_code = cli.main(["forecast", "aapl", "--days", "3", "--seed", "4"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert "AAPL: last close" in out
    assert "+1d  2024-03-01" in out
    assert "+3d  2024-03-03" in out
    assert fresh_config.settings.forecast.random_seed == 4


def test_forecast_command_reports_errors(fresh_config, fake_provider, capsys):
    with patch("stockcast.presentation.cli.create_quote_provider", return_value=fake_provider):
        exit_code = cli.main(["forecast", "NOPE"])

    assert exit_code == 1
    assert "Invalid symbol or API error for NOPE" in capsys.readouterr().err


def test_forecast_command_writes_chart(fresh_config, fake_provider, capsys, tmp_path):
    chart_path = tmp_path / "out" / "aapl.html"
    with patch("stockcast.presentation.cli.create_quote_provider", return_value=fake_provider):
        exit_code = cli.main(["forecast", "AAPL", "--days", "2", "--chart", str(chart_path)])

    assert exit_code == 0
    assert chart_path.exists()
    assert "AAPL Prediction" in chart_path.read_text()
    assert f"Chart written to {chart_path}" in capsys.readouterr().out


def test_unknown_provider_override_is_rejected(fresh_config):
    with pytest.raises(ConfigurationError):
        fresh_config.update_settings(**{"provider.nmae": "yfinance"})

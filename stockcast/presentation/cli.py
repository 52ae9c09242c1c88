"""Command-line entry point."""
import argparse
import sys
import threading
import time
import webbrowser
from typing import List, Optional

from ..application.services.stock_data_service import StockDataService
from ..domain.services.chart_generation_service import ChartGenerationService
from ..domain.services.forecast_service import ForecastService
from ..infrastructure.providers import create_quote_provider
from ..shared.config import get_config, get_settings, setup_logging
from ..shared.exceptions import StockcastError
from ..shared.logging import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='stockcast',
        description='Daily stock prices with a short-horizon heuristic forecast.'
    )
    parser.add_argument('--provider', choices=['alpha_vantage', 'yfinance'],
                        help='Quote provider (default: QUOTE_PROVIDER or alpha_vantage)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    serve = subparsers.add_parser('serve', help='Run the web dashboard')
    serve.add_argument('--host', help='Bind address')
    serve.add_argument('--port', type=int, help='Port to listen on')
    serve.add_argument('--debug', action='store_true', help='Enable Flask debug mode')
    serve.add_argument('--open-browser', action='store_true', help='Open the dashboard in a browser')

    forecast = subparsers.add_parser('forecast', help='Print a forecast for one symbol')
    forecast.add_argument('symbol', help='Ticker symbol, e.g. AAPL')
    forecast.add_argument('--days', type=int, help='Forecast horizon in days')
    forecast.add_argument('--seed', type=int, help='Seed for the random component')
    forecast.add_argument('--chart', metavar='PATH', help='Also write the chart as standalone HTML')

    return parser


def _open_browser(url: str, delay: float = 1.5) -> None:
    time.sleep(delay)
    webbrowser.open(url)


def run_serve(args) -> int:
    from .web.web_app import ForecastWebApp

    web_app = ForecastWebApp()
    if args.open_browser:
        web = get_settings().web
        url = f"http://{args.host or web.host}:{args.port or web.port}"
        browser_thread = threading.Thread(target=_open_browser, args=(url,))
        browser_thread.daemon = True
        browser_thread.start()

    web_app.run(host=args.host, port=args.port, debug=args.debug or None)
    return 0


def run_forecast(args) -> int:
    if args.seed is not None:
        get_config().update_settings(**{'forecast.random_seed': args.seed})
    settings = get_settings()

    service = StockDataService(
        create_quote_provider(settings.provider),
        forecast_service=ForecastService(settings.forecast),
        settings=settings
    )
    try:
        result = service.get_stock_forecast(args.symbol, args.days)
    except StockcastError as e:
        logger.error(f"Forecast failed: {e}")
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    last = result.prices[-1]
    print(f"{result.symbol}: last close {last.close:.2f} on {last.date.isoformat()}")
    if not result.predictions:
        print("Not enough history to forecast.")
    for point in result.predictions:
        print(f"  +{point.offset_day}d  {point.date.isoformat()}  {point.price:.2f}")

    if args.chart:
        path = ChartGenerationService(settings.chart).write_html([result], args.chart)
        print(f"Chart written to {path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if args.provider:
        get_config().update_settings(**{'provider.name': args.provider})
    setup_logging()

    if args.command == 'serve':
        return run_serve(args)
    return run_forecast(args)

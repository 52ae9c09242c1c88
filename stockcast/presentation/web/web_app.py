"""
Forecast dashboard web application.

This web application provides:
1. A form to add ticker symbols to the chart
2. Chip-based removal of loaded symbols
3. A resizable chart of price history with dashed forecast overlays
4. A JSON API over the same operations
"""

import json
from typing import Optional, Tuple

from flask import Flask, jsonify, redirect, render_template_string, request, url_for

from ...application.services.stock_data_service import StockDataService
from ...application.services.watchlist_service import WatchlistService
from ...domain.providers.quote_provider import IQuoteProvider
from ...domain.services.chart_generation_service import ChartGenerationService
from ...infrastructure.providers import create_quote_provider
from ...shared.config import Settings, get_settings
from ...shared.exceptions import (
    DataNotFoundError,
    DataValidationError,
    DuplicateSymbolError,
    ProviderError,
    RateLimitError,
    StockcastError,
    SymbolNotFoundError,
    WatchlistFullError,
)
from ...shared.logging import get_logger

# Most specific first; the first matching class decides the status code
ERROR_STATUS = (
    (DataValidationError, 400),
    (DuplicateSymbolError, 400),
    (WatchlistFullError, 400),
    (DataNotFoundError, 404),
    (SymbolNotFoundError, 404),
    (RateLimitError, 429),
    (ProviderError, 502),
)


def error_status(error: StockcastError) -> int:
    """Map an application error to an HTTP status code."""
    for error_cls, status in ERROR_STATUS:
        if isinstance(error, error_cls):
            return status
    return 500


DASHBOARD_TEMPLATE = '''
<!DOCTYPE html>
<html>
<head>
    <title>Stock Price Tracker</title>
    <script src="https://cdn.plot.ly/plotly-2.35.2.min.js"></script>
    <style>
        body { font-family: Arial, sans-serif; margin: 20px; background-color: #f5f5f5; }
        .container { max-width: 1200px; margin: 0 auto; background: white; padding: 20px; border-radius: 10px; box-shadow: 0 2px 10px rgba(0,0,0,0.1); }
        .header { text-align: center; color: #333; border-bottom: 2px solid #007bff; padding-bottom: 20px; margin-bottom: 30px; }
        .symbol-form { display: flex; gap: 12px; justify-content: center; align-items: center; flex-wrap: wrap; }
        .symbol-form input { padding: 8px; border: 1px solid #ddd; border-radius: 3px; }
        .button { background: #007bff; color: white; padding: 8px 15px; border: none; border-radius: 3px; cursor: pointer; }
        .button:hover { background: #0056b3; }
        .button:disabled { background: #9bbbe0; cursor: default; }
        .counter { color: #666; font-size: 0.9em; }
        .error { color: #721c24; background: #f8d7da; border: 1px solid #f5c6cb; padding: 10px; border-radius: 3px; margin-top: 15px; text-align: center; }
        .chips { display: flex; gap: 8px; justify-content: center; flex-wrap: wrap; margin-top: 20px; }
        .chip { display: inline-flex; align-items: center; gap: 6px; background: #e0e0e0; border-radius: 16px; padding: 4px 6px 4px 12px; }
        .chip form { margin: 0; }
        .chip button { border: none; background: #9e9e9e; color: white; border-radius: 50%; width: 20px; height: 20px; cursor: pointer; line-height: 18px; }
        .chart-panel { margin-top: 25px; width: 100%; }
        #chart { width: 100%; }
        .resize-handle { width: 100%; height: 10px; background: #f0f0f0; cursor: row-resize; border-radius: 0 0 4px 4px; display: flex; justify-content: center; align-items: center; }
        .resize-handle div { width: 50px; height: 4px; background: #ccc; border-radius: 2px; }
    </style>
</head>
<body>
    <div class="container">
        <div class="header">
            <h1>Stock Price Tracker</h1>
        </div>

        <form class="symbol-form" method="post" action="{{ url_for('add_stock_form') }}">
            <input type="text" name="symbol" placeholder="Enter stock symbol (e.g., AAPL)" required>
            <button class="button" type="submit" {{ 'disabled' if count >= max_symbols else '' }}>Add Stock</button>
            <span class="counter">{{ count }}/{{ max_symbols }} stocks added</span>
        </form>

        {% if error %}
        <div class="error">{{ error }}</div>
        {% endif %}

        {% if stocks %}
        <div class="chips">
            {% for stock in stocks %}
            <span class="chip">
                {{ stock.label }}
                <form method="post" action="{{ url_for('remove_stock_form', symbol=stock.symbol) }}">
                    <button type="submit" title="Remove {{ stock.symbol }}">&times;</button>
                </form>
            </span>
            {% endfor %}
        </div>

        <div class="chart-panel">
            <div id="chart" style="height: {{ chart_height }}px;"></div>
            <div class="resize-handle" id="resize-handle"><div></div></div>
        </div>

        <script>
            const figure = {{ chart_json | safe }};
            const chart = document.getElementById('chart');
            Plotly.newPlot(chart, figure.data, figure.layout, {responsive: true});

            const minHeight = {{ min_height }};
            const maxHeight = {{ max_height }};
            let dragging = false, startY = 0, startHeight = 0;

            document.getElementById('resize-handle').addEventListener('mousedown', (e) => {
                dragging = true;
                startY = e.clientY;
                startHeight = chart.offsetHeight;
                document.body.style.cursor = 'row-resize';
            });
            document.addEventListener('mousemove', (e) => {
                if (!dragging) return;
                const height = Math.max(minHeight, Math.min(maxHeight, startHeight + e.clientY - startY));
                chart.style.height = height + 'px';
                Plotly.relayout(chart, {height: height});
            });
            document.addEventListener('mouseup', () => {
                dragging = false;
                document.body.style.cursor = 'default';
            });
        </script>
        {% endif %}
    </div>
</body>
</html>
'''


class ForecastWebApp:
    """Flask dashboard over the watchlist and chart services."""

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[IQuoteProvider] = None,
        watchlist: Optional[WatchlistService] = None
    ):
        self.settings = settings or get_settings()
        self.logger = get_logger(__name__)

        if watchlist is None:
            provider = provider or create_quote_provider(self.settings.provider)
            stock_data_service = StockDataService(provider, settings=self.settings)
            watchlist = WatchlistService(stock_data_service, self.settings.watchlist)
        self.watchlist = watchlist
        self.chart_service = ChartGenerationService(self.settings.chart)

        self.app = Flask(__name__)
        self._setup_routes()

    def _load_symbol(self, symbol: str) -> Tuple[dict, int]:
        try:
            forecast = self.watchlist.load(symbol)
        except StockcastError as e:
            status = error_status(e)
            self.logger.warning(f"Could not add {symbol!r}: {e}")
            return {'error': e.message}, status
        return forecast.to_dict(), 201

    def _setup_routes(self):
        """Setup Flask routes."""

        @self.app.route('/')
        def index():
            """Main dashboard page."""
            return self._render_dashboard(request.args.get('error'))

        @self.app.route('/api/stocks', methods=['GET'])
        def api_list_stocks():
            """API endpoint listing loaded symbols with their forecasts."""
            return jsonify({
                'count': len(self.watchlist),
                'max_symbols': self.watchlist.max_symbols,
                'stocks': [forecast.to_dict() for forecast in self.watchlist.forecasts()]
            })

        @self.app.route('/api/stocks', methods=['POST'])
        def api_add_stock():
            """API endpoint to fetch a symbol and add it to the chart."""
            data = request.get_json(silent=True)
            if not isinstance(data, dict):
                data = request.form
            body, status = self._load_symbol(data.get('symbol', ''))
            return jsonify(body), status

        @self.app.route('/api/stocks/<symbol>', methods=['GET'])
        def api_get_stock(symbol):
            """API endpoint for a single loaded symbol."""
            forecast = self.watchlist.get(symbol)
            if forecast is None:
                return jsonify({'error': f'{symbol.upper()} is not on the chart.'}), 404
            return jsonify(forecast.to_dict())

        @self.app.route('/api/stocks/<symbol>', methods=['DELETE'])
        def api_remove_stock(symbol):
            """API endpoint to remove a symbol from the chart."""
            try:
                removed = self.watchlist.remove(symbol)
            except SymbolNotFoundError as e:
                return jsonify({'error': e.message}), 404
            return jsonify({'removed': removed.symbol, 'count': len(self.watchlist)})

        @self.app.route('/api/chart')
        def api_chart():
            """API endpoint returning the plotly figure as JSON."""
            height = request.args.get('height', type=int)
            figure = self.chart_service.to_json(self.watchlist.forecasts(), height)
            return self.app.response_class(figure, mimetype='application/json')

        @self.app.route('/stocks/add', methods=['POST'])
        def add_stock_form():
            """Form handler for the add-symbol form."""
            body, status = self._load_symbol(request.form.get('symbol', ''))
            if status != 201:
                return redirect(url_for('index', error=body['error']))
            return redirect(url_for('index'))

        @self.app.route('/stocks/<symbol>/remove', methods=['POST'])
        def remove_stock_form(symbol):
            """Form handler for chip removal."""
            try:
                self.watchlist.remove(symbol)
            except SymbolNotFoundError as e:
                return redirect(url_for('index', error=e.message))
            return redirect(url_for('index'))

    def _render_dashboard(self, error: Optional[str] = None):
        """Render the dashboard page."""
        stocks = self.watchlist.forecasts()
        chart_settings = self.settings.chart
        chart_json = self.chart_service.to_json(stocks) if stocks else json.dumps({})

        return render_template_string(
            DASHBOARD_TEMPLATE,
            stocks=stocks,
            count=len(stocks),
            max_symbols=self.watchlist.max_symbols,
            error=error,
            chart_json=chart_json,
            chart_height=chart_settings.default_height,
            min_height=chart_settings.min_height,
            max_height=chart_settings.max_height
        )

    def run(self, host: Optional[str] = None, port: Optional[int] = None, debug: Optional[bool] = None):
        """Run the Flask development server."""
        web = self.settings.web
        host = host or web.host
        port = port or web.port
        self.logger.info(f"Starting web interface on http://{host}:{port}")
        self.app.run(host=host, port=port, debug=web.debug if debug is None else debug)


def create_app(settings: Optional[Settings] = None, provider: Optional[IQuoteProvider] = None) -> Flask:
    """Application factory for WSGI servers."""
    return ForecastWebApp(settings=settings, provider=provider).app

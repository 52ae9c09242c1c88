"""Application settings and configuration values."""
import os
from dataclasses import dataclass, field
from typing import List, Optional
import pytz


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [item.strip().upper() for item in raw.split(',') if item.strip()]


def _env_optional_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == '':
        return None
    return int(raw)


@dataclass
class ProviderSettings:
    """Quote provider configuration settings."""
    name: str = 'alpha_vantage'
    api_key: str = 'demo'
    base_url: str = 'https://www.alphavantage.co/query'
    output_size: str = 'compact'
    timeout: int = 30
    request_delay: float = 1.5
    reference_symbols: List[str] = field(default_factory=lambda: ['SPY', 'QQQ'])
    history_period: str = '6mo'
    user_agent: str = "stockcast/1.0"


@dataclass
class ForecastSettings:
    """Forecast projector configuration settings."""
    horizon_days: int = 5
    min_history: int = 50
    volatility_window: int = 20
    correlation_window: int = 20
    rsi_period: int = 14
    momentum_period: int = 10
    ma_short_period: int = 20
    ma_long_period: int = 50

    # Signal weights
    mean_reversion_weight: float = 0.3
    rsi_weight: float = 0.2
    market_weight: float = 0.3
    momentum_weight: float = 0.2

    # Decay and bounds
    momentum_decay: float = 0.5
    dampening_decay: float = 0.1
    max_daily_change: float = 0.1
    volatility_clamp_multiplier: float = 2.0

    random_seed: Optional[int] = None


@dataclass
class WatchlistSettings:
    """Watchlist (loaded symbols) settings."""
    max_symbols: int = 10


@dataclass
class ChartSettings:
    """Chart rendering settings."""
    title: str = 'Stock Price History & Predictions'
    default_height: int = 600
    min_height: int = 400
    max_height: int = 1200
    colors: List[str] = field(default_factory=lambda: [
        'rgb(75, 192, 192)',
        'rgb(255, 99, 132)',
        'rgb(255, 205, 86)',
        'rgb(54, 162, 235)',
        'rgb(153, 102, 255)',
        'rgb(255, 159, 64)',
        'rgb(46, 204, 113)',
        'rgb(231, 76, 60)',
        'rgb(52, 152, 219)',
        'rgb(155, 89, 182)',
    ])


@dataclass
class WebSettings:
    """Web server settings."""
    host: str = '127.0.0.1'
    port: int = 5000
    debug: bool = False


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = 'INFO'
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    file_path: Optional[str] = None
    max_file_size: int = 10 * 1024 * 1024  # 10MB
    backup_count: int = 5

    @property
    def log_level(self) -> int:
        """Get the numeric log level."""
        import logging
        return getattr(logging, self.level.upper(), logging.INFO)


@dataclass
class Settings:
    """Main application settings container."""
    provider: ProviderSettings
    forecast: ForecastSettings
    watchlist: WatchlistSettings
    chart: ChartSettings
    web: WebSettings
    logging: LoggingSettings

    # General settings
    timezone: str = "US/Eastern"
    environment: str = "development"
    debug: bool = False

    @classmethod
    def from_env(cls) -> 'Settings':
        """Create settings from environment variables."""
        return cls(
            provider=ProviderSettings(
                name=os.getenv('QUOTE_PROVIDER', 'alpha_vantage').lower(),
                api_key=os.getenv('ALPHA_VANTAGE_API_KEY', 'demo'),
                base_url=os.getenv('ALPHA_VANTAGE_BASE_URL', 'https://www.alphavantage.co/query'),
                output_size=os.getenv('ALPHA_VANTAGE_OUTPUT_SIZE', 'compact'),
                timeout=int(os.getenv('PROVIDER_TIMEOUT', '30')),
                request_delay=float(os.getenv('PROVIDER_REQUEST_DELAY', '1.5')),
                reference_symbols=_env_list('REFERENCE_SYMBOLS', 'SPY,QQQ'),
                history_period=os.getenv('YFINANCE_HISTORY_PERIOD', '6mo')
            ),
            forecast=ForecastSettings(
                horizon_days=int(os.getenv('FORECAST_HORIZON_DAYS', '5')),
                min_history=int(os.getenv('FORECAST_MIN_HISTORY', '50')),
                random_seed=_env_optional_int('FORECAST_RANDOM_SEED')
            ),
            watchlist=WatchlistSettings(
                max_symbols=int(os.getenv('WATCHLIST_MAX_SYMBOLS', '10'))
            ),
            chart=ChartSettings(
                default_height=int(os.getenv('CHART_HEIGHT', '600'))
            ),
            web=WebSettings(
                host=os.getenv('WEB_HOST', '127.0.0.1'),
                port=int(os.getenv('WEB_PORT', '5000')),
                debug=os.getenv('WEB_DEBUG', 'false').lower() == 'true'
            ),
            logging=LoggingSettings(
                level=os.getenv('LOG_LEVEL', 'INFO'),
                file_path=os.getenv('LOG_FILE_PATH'),
                max_file_size=int(os.getenv('LOG_MAX_SIZE', str(10 * 1024 * 1024)))
            ),
            timezone=os.getenv('TIMEZONE', 'US/Eastern'),
            environment=os.getenv('ENVIRONMENT', 'development'),
            debug=os.getenv('DEBUG', 'false').lower() == 'true'
        )

    def validate(self) -> None:
        """Validate configuration settings."""
        errors = []

        # Validate provider settings
        if self.provider.name not in ('alpha_vantage', 'yfinance'):
            errors.append(f"Unknown quote provider: {self.provider.name}")

        if self.provider.request_delay < 0:
            errors.append("Provider request_delay cannot be negative")

        if self.provider.timeout <= 0:
            errors.append("Provider timeout must be positive")

        # Validate forecast settings
        if self.forecast.horizon_days <= 0:
            errors.append("Forecast horizon_days must be positive")

        if self.forecast.min_history < self.forecast.ma_long_period:
            errors.append(
                f"Forecast min_history must be at least {self.forecast.ma_long_period}"
            )

        if self.forecast.rsi_period <= 0:
            errors.append("RSI period must be positive")

        # Validate watchlist settings
        if self.watchlist.max_symbols <= 0:
            errors.append("Watchlist max_symbols must be positive")

        # Validate chart settings
        if not (self.chart.min_height <= self.chart.default_height <= self.chart.max_height):
            errors.append("Chart default_height must lie between min_height and max_height")

        # Validate timezone
        try:
            pytz.timezone(self.timezone)
        except pytz.UnknownTimeZoneError:
            errors.append(f"Unknown timezone: {self.timezone}")

        if errors:
            from ..exceptions import ConfigurationError
            raise ConfigurationError(
                f"Configuration validation failed: {'; '.join(errors)}",
                {'error_count': len(errors)}
            )

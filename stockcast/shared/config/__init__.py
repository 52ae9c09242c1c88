"""Configuration management module."""
from .config import Config, get_config, get_settings
from .settings import (
    Settings,
    ProviderSettings,
    ForecastSettings,
    WatchlistSettings,
    ChartSettings,
    WebSettings,
    LoggingSettings,
)


def setup_logging(settings: Settings = None):
    """Setup logging from the logging section of the given settings."""
    from ..logging.logger import setup_logging as _setup_logging
    log_settings = (settings or get_settings()).logging
    return _setup_logging(
        level=log_settings.log_level,
        format_string=log_settings.format,
        log_file=log_settings.file_path,
        max_file_size=log_settings.max_file_size,
        backup_count=log_settings.backup_count
    )


__all__ = [
    'Config', 'get_config', 'get_settings', 'setup_logging',
    'Settings', 'ProviderSettings', 'ForecastSettings', 'WatchlistSettings',
    'ChartSettings', 'WebSettings', 'LoggingSettings'
]

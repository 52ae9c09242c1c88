"""Quote provider implementations."""
from typing import Optional

from ...shared.config import ProviderSettings, get_settings
from ...shared.exceptions import ConfigurationError
from .alpha_vantage_provider import AlphaVantageProvider
from .yfinance_provider import YFinanceProvider

PROVIDERS = {
    AlphaVantageProvider.name: AlphaVantageProvider,
    YFinanceProvider.name: YFinanceProvider,
}


def create_quote_provider(settings: Optional[ProviderSettings] = None):
    """Instantiate the provider named by ``settings.name``."""
    settings = settings or get_settings().provider
    provider_cls = PROVIDERS.get(settings.name)
    if provider_cls is None:
        raise ConfigurationError(f"Unknown quote provider: {settings.name}")
    return provider_cls(settings)


__all__ = ['AlphaVantageProvider', 'YFinanceProvider', 'create_quote_provider']

"""Web presentation layer."""
from .web_app import ForecastWebApp, create_app

__all__ = ['ForecastWebApp', 'create_app']

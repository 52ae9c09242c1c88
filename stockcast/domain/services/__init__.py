"""Domain services for the stockcast application."""
from . import technical_indicators
from .forecast_service import ForecastService, project, default_random_source
from .chart_generation_service import ChartGenerationService

__all__ = [
    'technical_indicators',
    'ForecastService',
    'project',
    'default_random_source',
    'ChartGenerationService'
]

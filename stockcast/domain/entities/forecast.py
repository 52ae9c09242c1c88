"""Forecast-related domain entities."""
from dataclasses import dataclass, field
from datetime import date
from typing import List

from .stock import StockMetadata, StockPrice


@dataclass(frozen=True)
class IndicatorSnapshot:
    """Indicator values frozen at the start of a forecast run.

    Only the running price changes between forecast steps; every field
    here is computed once from the history and reused for all steps.
    """
    volatility: float
    rsi: float
    momentum: float
    ma20: float
    ma50: float
    correlation: float
    last_reference_return: float

    def to_dict(self) -> dict:
        return {
            'volatility': self.volatility,
            'rsi': self.rsi,
            'momentum': self.momentum,
            'ma20': self.ma20,
            'ma50': self.ma50,
            'correlation': self.correlation,
            'last_reference_return': self.last_reference_return
        }


@dataclass(frozen=True)
class ForecastPoint:
    """A single predicted close, ``offset_day`` days after the last known close."""
    offset_day: int
    date: date
    price: float

    def __post_init__(self):
        if self.offset_day < 1:
            raise ValueError("Forecast offset_day must be at least 1")

    def to_dict(self) -> dict:
        return {
            'offset_day': self.offset_day,
            'date': self.date.isoformat(),
            'price': self.price
        }


@dataclass
class StockForecast:
    """Historical series of a symbol together with its projected closes."""
    metadata: StockMetadata
    prices: List[StockPrice]
    predictions: List[ForecastPoint] = field(default_factory=list)

    @property
    def symbol(self) -> str:
        return self.metadata.symbol

    @property
    def label(self) -> str:
        """Chip label shown for a loaded symbol."""
        return f"{self.symbol} - {self.metadata.last_refreshed or 'n/a'}"

    def to_dict(self) -> dict:
        return {
            'symbol': self.symbol,
            'metadata': self.metadata.to_dict(),
            'data': [price.to_dict() for price in self.prices],
            'predictions': [point.to_dict() for point in self.predictions]
        }

"""Stock-related domain entities."""
from dataclasses import dataclass, asdict
from datetime import date
from typing import Optional


@dataclass
class StockPrice:
    """Represents one trading day of price data."""
    date: date
    open: float
    high: float
    low: float
    close: float
    volume: float

    def __post_init__(self):
        """Validate price data after initialization."""
        if self.high < self.low:
            raise ValueError("High price cannot be less than low price")
        if self.open < 0 or self.close < 0:
            raise ValueError("Prices cannot be negative")
        if self.volume < 0:
            raise ValueError("Volume cannot be negative")

    def to_dict(self) -> dict:
        data = asdict(self)
        data['date'] = self.date.isoformat()
        return data


@dataclass
class StockMetadata:
    """Describes the series returned by a quote provider."""
    symbol: str
    name: str = ''
    currency: str = 'USD'
    last_refreshed: Optional[str] = None
    timezone: Optional[str] = None

    def __post_init__(self):
        if not self.symbol or not self.symbol.strip():
            raise ValueError("Stock symbol cannot be empty")
        self.symbol = self.symbol.upper().strip()

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class StockSeries:
    """Chronologically ascending daily prices for one symbol."""
    metadata: StockMetadata
    prices: list

    @property
    def symbol(self) -> str:
        return self.metadata.symbol

    @property
    def closes(self) -> list:
        """Closing prices, oldest first."""
        return [price.close for price in self.prices]

    @property
    def last_date(self) -> Optional[date]:
        return self.prices[-1].date if self.prices else None

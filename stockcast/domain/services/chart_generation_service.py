"""Chart generation service for price history and forecast overlays."""
import os
from typing import List, Optional

import plotly.graph_objects as go

from ..entities.forecast import StockForecast
from ...shared.config import ChartSettings, get_settings
from ...shared.logging import get_logger


class ChartGenerationService:
    """Builds the combined history/prediction chart for loaded symbols."""

    def __init__(self, settings: Optional[ChartSettings] = None):
        self.settings = settings or get_settings().chart
        self.logger = get_logger(__name__)

    def get_color(self, index: int) -> str:
        """Get the palette colour for the n-th loaded symbol."""
        colors = self.settings.colors
        return colors[index % len(colors)]

    def clamp_height(self, height: Optional[int]) -> int:
        """Keep a requested panel height within the configured bounds."""
        if height is None:
            return self.settings.default_height
        return max(self.settings.min_height, min(self.settings.max_height, int(height)))

    def build_forecast_chart(
        self,
        forecasts: List[StockForecast],
        height: Optional[int] = None
    ) -> go.Figure:
        """Create one solid history trace and one dashed prediction trace per symbol."""
        fig = go.Figure()

        for index, forecast in enumerate(forecasts):
            color = self.get_color(index)
            symbol = forecast.symbol

            fig.add_trace(
                go.Scatter(
                    x=[price.date for price in forecast.prices],
                    y=[price.close for price in forecast.prices],
                    mode='lines+markers',
                    name=symbol,
                    legendgroup=symbol,
                    line=dict(color=color, width=2),
                    marker=dict(size=3),
                    hovertemplate=f'<b>{symbol}</b><br>Date: %{{x}}<br>Close: $%{{y:.2f}}<extra></extra>'
                )
            )

            if forecast.predictions:
                fig.add_trace(
                    go.Scatter(
                        x=[point.date for point in forecast.predictions],
                        y=[point.price for point in forecast.predictions],
                        mode='lines+markers',
                        name=f'{symbol} Prediction',
                        legendgroup=symbol,
                        # Only the first symbol's prediction gets a legend entry
                        showlegend=index == 0,
                        line=dict(color=color, width=2, dash='dash'),
                        marker=dict(size=6),
                        hovertemplate=f'<b>{symbol} Prediction</b><br>Date: %{{x}}<br>Price: $%{{y:.2f}}<extra></extra>'
                    )
                )

        fig.update_layout(
            title=self.settings.title,
            xaxis_title='Date',
            yaxis_title='Price (USD)',
            height=self.clamp_height(height),
            showlegend=True,
            hovermode='x unified',
            legend=dict(orientation='h', yanchor='bottom', y=1.02, xanchor='left', x=0)
        )
        fig.update_xaxes(type='date')
        fig.update_yaxes(rangemode='normal')

        self.logger.debug(f"Built chart with {len(fig.data)} traces for {len(forecasts)} symbols")
        return fig

    def to_json(self, forecasts: List[StockForecast], height: Optional[int] = None) -> str:
        """Serialise the chart for client-side rendering with plotly.js."""
        return self.build_forecast_chart(forecasts, height).to_json()

    def write_html(
        self,
        forecasts: List[StockForecast],
        filename: str,
        height: Optional[int] = None
    ) -> str:
        """Write a standalone HTML chart and return its path."""
        directory = os.path.dirname(filename)
        if directory:
            os.makedirs(directory, exist_ok=True)

        fig = self.build_forecast_chart(forecasts, height)
        fig.write_html(filename)
        self.logger.info(f"Saved chart for {len(forecasts)} symbols to {filename}")
        return filename

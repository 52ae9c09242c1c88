"""Short-horizon price projection from frozen technical indicators."""
import math
from typing import Callable, List, Optional, Sequence

import numpy as np

from ..entities.forecast import IndicatorSnapshot
from . import technical_indicators as ti
from ...shared.config import ForecastSettings, get_settings
from ...shared.logging import get_logger

RandomSource = Callable[[], float]


def default_random_source(seed: Optional[int] = None) -> RandomSource:
    """Uniform [0, 1) draws from a numpy Generator, reproducible when seeded."""
    return np.random.default_rng(seed).random


class ForecastService:
    """Projects future closing prices for a target series.

    The projection blends four signals (mean reversion, RSI, market
    influence and decaying momentum) with a random term whose spread
    grows with the square root of the step index. The blended return is
    dampened with distance and clamped per step to
    ``min(max_daily_change, volatility * volatility_clamp_multiplier)``.
    """

    def __init__(
        self,
        settings: Optional[ForecastSettings] = None,
        random_source: Optional[RandomSource] = None
    ):
        self.settings = settings or get_settings().forecast
        self.random_source = random_source or default_random_source(self.settings.random_seed)
        self.logger = get_logger(__name__)

    def compute_snapshot(
        self,
        target_prices: Sequence[float],
        reference_prices: Sequence[float]
    ) -> IndicatorSnapshot:
        """Compute the indicator values used for every step of a projection."""
        cfg = self.settings
        window = list(target_prices)[-cfg.min_history:]
        reference = list(reference_prices)

        ma20 = ti.moving_average(window, cfg.ma_short_period)[-1]
        ma50 = ti.moving_average(window, cfg.ma_long_period)[-1]

        reference_returns = ti.returns(reference[-cfg.correlation_window:])
        target_returns = ti.returns(window[-cfg.correlation_window:])

        if len(reference) >= 2 and reference[-2] != 0:
            last_reference_return = (reference[-1] - reference[-2]) / reference[-2]
        else:
            last_reference_return = 0.0

        return IndicatorSnapshot(
            volatility=ti.volatility(window, cfg.volatility_window),
            rsi=ti.rsi(window, cfg.rsi_period),
            momentum=ti.momentum(window, cfg.momentum_period),
            ma20=ma20,
            ma50=ma50,
            correlation=ti.correlation(reference_returns, target_returns),
            last_reference_return=last_reference_return
        )

    def max_change(self, snapshot: IndicatorSnapshot) -> float:
        """Largest fractional move allowed between two consecutive closes."""
        return min(
            self.settings.max_daily_change,
            snapshot.volatility * self.settings.volatility_clamp_multiplier
        )

    def project(
        self,
        target_prices: Sequence[float],
        reference_prices: Sequence[float],
        horizon_days: int
    ) -> List[float]:
        """Predict ``horizon_days`` closes, rounded to cents.

        Returns an empty list when the target has fewer than
        ``min_history`` prices or the horizon is not positive.
        """
        cfg = self.settings
        target = list(target_prices)
        if len(target) < cfg.min_history or horizon_days <= 0:
            self.logger.debug(
                f"Skipping projection: {len(target)} prices, horizon {horizon_days}"
            )
            return []

        window = target[-cfg.min_history:]
        snapshot = self.compute_snapshot(window, reference_prices)
        self.logger.debug(f"Indicator snapshot: {snapshot.to_dict()}")

        max_change = self.max_change(snapshot)
        rsi_signal = (50 - snapshot.rsi) / 50
        market_influence = snapshot.last_reference_return * snapshot.correlation

        current_price = float(window[-1])
        predictions = []

        for i in range(1, horizon_days + 1):
            # MA20/MA50 stay frozen; only the running price moves.
            mean_reversion = ti.mean_reversion_signal(current_price, snapshot.ma20, snapshot.ma50)
            momentum_effect = snapshot.momentum * math.exp(-cfg.momentum_decay * i)

            expected_return = (
                mean_reversion * cfg.mean_reversion_weight +
                rsi_signal * cfg.rsi_weight +
                market_influence * cfg.market_weight +
                momentum_effect * cfg.momentum_weight
            )

            random_component = snapshot.volatility * (self.random_source() - 0.5) * math.sqrt(i)
            dampening = math.exp(-cfg.dampening_decay * i)
            change = (expected_return + random_component) * dampening

            bounded_change = max(-max_change, min(max_change, change))
            current_price = current_price * (1 + bounded_change)
            predictions.append(round(current_price, 2))

        return predictions


def project(
    target_prices: Sequence[float],
    reference_prices: Sequence[float],
    horizon_days: int,
    random_source: Optional[RandomSource] = None,
    settings: Optional[ForecastSettings] = None
) -> List[float]:
    """Convenience wrapper around ``ForecastService.project``."""
    service = ForecastService(settings or ForecastSettings(), random_source)
    return service.project(target_prices, reference_prices, horizon_days)

"""
Price-Point Planner

Derives reference entry, stop-loss and profit-target prices from a candle
series using pivot support/resistance, ATR and Fibonacci levels, and scores
how much confidence the data supports. Prices are rounded to cents for
presentation.
"""

from typing import Optional

from loguru import logger

from marketlens.analysis.fibonacci import fibonacci_retracement
from marketlens.analysis.key_levels import find_support_resistance_levels
from marketlens.indicators.validation_utils import validate_series
from marketlens.indicators.volatility import atr
from marketlens.shared.config.defaults import WINDOWS
from marketlens.shared.config.timeframes import (
    MEDIUM_TIMEFRAMES,
    SHORT_TIMEFRAMES,
    get_time_interval_config,
)
from marketlens.shared.models.data import Series, series_to_frame
from marketlens.shared.models.planner import (
    EntryPoints,
    PriceAnalysis,
    ProfitTargets,
    StopLoss,
    StopMethod,
)

SUPPORT_ENTRY_BUFFER = 1.02
AGGRESSIVE_DISCOUNT = 0.98
ATR_STOP_MULTIPLIER = 2.0
DEFAULT_STOP_PCT = 5.0


def _round_price(value: float) -> float:
    return round(value, 2)


def _recent_range(series: Series) -> tuple:
    recent = series_to_frame(series).tail(WINDOWS.swing_lookback)
    return float(recent['high'].max()), float(recent['low'].min())


def calculate_entry_points(series: Series, current_price: float) -> EntryPoints:
    """
    Calculate conservative, moderate and aggressive entry prices.

    - Conservative: nearest support below price + 2% buffer (current price
      when no support exists)
    - Moderate: lower of the Fibonacci 61.8% level of the recent 20-candle
      range and current price - 1 ATR
    - Aggressive: lower of current price - 2% and the moderate entry
    """
    levels = find_support_resistance_levels(series, lookback=WINDOWS.pivot_lookback)
    atr_value = atr(series, period=WINDOWS.atr_period)

    recent_high, recent_low = _recent_range(series)
    fib_levels = fibonacci_retracement(recent_high, recent_low)

    conservative = current_price
    if levels.support:
        nearest_support = next((s for s in levels.support if s < current_price), levels.support[0])
        conservative = nearest_support * SUPPORT_ENTRY_BUFFER

    moderate = min(fib_levels['61.8%'], current_price - atr_value)
    aggressive = min(current_price * AGGRESSIVE_DISCOUNT, moderate)

    support_label = f"{levels.support[0]:.2f}" if levels.support else "N/A"
    return EntryPoints(
        conservative=_round_price(conservative),
        moderate=_round_price(moderate),
        aggressive=_round_price(aggressive),
        methods={
            'conservative': f"Support level ({support_label}) + 2% buffer",
            'moderate': "Fibonacci 61.8% retracement or current price - 1 ATR",
            'aggressive': "Current price with 2% discount",
        },
    )


def calculate_stop_loss(
    series: Series,
    entry_price: float,
    method: StopMethod = 'atr',
    custom_percentage: Optional[float] = None,
) -> StopLoss:
    """
    Place a stop loss below the entry.

    Methods:
        percentage: custom_percentage (default 5%) below entry
        atr: 2 x ATR below entry
        support: 2% below the nearest support under entry, falling back to
            5% below entry when no support exists

    Raises:
        ValueError: If method is unknown
    """
    if method == 'percentage':
        percent = custom_percentage or DEFAULT_STOP_PCT
        price = entry_price * (1 - percent / 100)
        percentage = percent
        explanation = f"{percent}% below entry price"

    elif method == 'atr':
        atr_value = atr(series, period=WINDOWS.atr_period)
        price = entry_price - atr_value * ATR_STOP_MULTIPLIER
        percentage = (entry_price - price) / entry_price * 100
        explanation = f"2x ATR ({atr_value:.2f}) below entry price"

    elif method == 'support':
        levels = find_support_resistance_levels(series, lookback=WINDOWS.pivot_lookback)
        nearest_support = next(
            (s for s in levels.support if s < entry_price),
            levels.support[0] if levels.support else None,
        )
        if nearest_support:
            price = nearest_support * 0.98
            explanation = f"2% below nearest support level ({nearest_support:.2f})"
        else:
            price = entry_price * 0.95
            explanation = "5% below entry price (no support found)"
        percentage = (entry_price - price) / entry_price * 100

    else:
        raise ValueError(f"Unknown stop loss method: {method}")

    return StopLoss(
        price=_round_price(price),
        percentage=_round_price(percentage),
        method=method,
        explanation=explanation,
    )


def calculate_profit_targets(series: Series, entry_price: float, stop_loss_price: float) -> ProfitTargets:
    """
    Calculate three profit targets from the entry's risk.

    - Target 1: 1:2 risk-reward
    - Target 2: 1:3 risk-reward
    - Target 3: 1:4 risk-reward, raised to the next resistance above target 2
      or to the 127.2% extension of the recent range when the 161.8%
      extension clears target 2
    """
    risk = entry_price - stop_loss_price
    levels = find_support_resistance_levels(series, lookback=WINDOWS.pivot_lookback)

    target1 = entry_price + risk * 2
    target2 = entry_price + risk * 3

    recent_high, recent_low = _recent_range(series)
    recent_range = recent_high - recent_low
    extension_127 = recent_high + recent_range * 0.272
    extension_161 = recent_high + recent_range * 0.618

    target3 = entry_price + risk * 4

    next_resistance = next((r for r in levels.resistance if r > entry_price), None)
    if next_resistance and next_resistance > target2:
        target3 = max(target3, next_resistance)

    if extension_161 > target2:
        target3 = max(target3, extension_127)

    risk_reward = (target1 - entry_price) / risk if risk > 0 else 0.0

    return ProfitTargets(
        target1=_round_price(target1),
        target2=_round_price(target2),
        target3=_round_price(target3),
        risk_reward_ratio=round(risk_reward, 1),
        methods={
            'target1': f"1:2 risk-reward ratio (Risk: ${risk:.2f})",
            'target2': "1:3 risk-reward ratio",
            'target3': "Resistance level or Fibonacci extension",
        },
    )


def _risk_assessment(time_horizon: str) -> str:
    if time_horizon in SHORT_TIMEFRAMES:
        return "High - Short timeframe with increased volatility and noise"
    if time_horizon in MEDIUM_TIMEFRAMES:
        return "Medium - Balanced timeframe suitable for swing trading"
    return "Low to Medium - Longer timeframe with reduced noise"


def analyze_price_points(series: Series, current_price: float, time_horizon: str) -> PriceAnalysis:
    """
    Build the complete price-point analysis for a series.

    The moderate entry anchors an ATR stop and the profit targets.
    Confidence starts at 0.5, gains up to 0.2 for history length (full at 50
    candles) and up to 0.2 for detected pivot levels, loses 0.1 on 5m/15m
    horizons, and is clamped to [0, 1].

    Raises:
        ValidationError: If the series is empty or malformed
        ValueError: If time_horizon is not a supported interval
    """
    get_time_interval_config(time_horizon)
    validate_series(series)

    entry_points = calculate_entry_points(series, current_price)
    entry_price = entry_points.moderate
    stop_loss = calculate_stop_loss(series, entry_price, 'atr')
    profit_targets = calculate_profit_targets(series, entry_price, stop_loss.price)

    candle_count = len(series_to_frame(series))
    levels = find_support_resistance_levels(series, lookback=WINDOWS.pivot_lookback)

    confidence = 0.5
    confidence += min(candle_count / 50, 0.2)
    confidence += min((len(levels.support) + len(levels.resistance)) / 20, 0.2)
    if time_horizon in SHORT_TIMEFRAMES:
        confidence -= 0.1
    confidence = max(0.0, min(1.0, confidence))

    logger.debug(
        f"Price points ({time_horizon}): entry {entry_price:.2f}, "
        f"stop {stop_loss.price:.2f}, confidence {confidence:.2f}"
    )

    return PriceAnalysis(
        entry_points=entry_points,
        stop_loss=stop_loss,
        profit_targets=profit_targets,
        time_horizon=time_horizon,
        risk_assessment=_risk_assessment(time_horizon),
        confidence=round(confidence, 2),
    )

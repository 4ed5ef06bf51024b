"""
Momentum Indicators Module

Implements technical momentum indicators:
- EMA (Exponential Moving Average, running-mean seeded)
- RSI (Wilder's Relative Strength Index)
- MACD (Moving Average Convergence Divergence)
- Stochastic RSI

Every function is a pure transformation of its arguments. Short inputs are
not errors: each indicator degrades to a documented neutral value instead.
"""

from typing import Optional, Sequence, Union
import logging

import numpy as np
import pandas as pd

from marketlens.shared.models.data import Series, closes_of
from marketlens.shared.models.indicators import MACDResult, StochasticRSI, NEUTRAL_STOCH_RSI
from marketlens.shared.config.defaults import THRESHOLDS

logger = logging.getLogger(__name__)

NEUTRAL_RSI = 50.0

Prices = Union[Sequence[float], np.ndarray, pd.Series]


def _require_positive(name: str, value: int) -> None:
    if value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value}")


def ema(closes: Prices, period: int) -> np.ndarray:
    """
    Compute an Exponential Moving Average with running-mean seeding.

    The first `period` values are the simple average of all closes seen so
    far, so ema[period - 1] is the SMA of the first `period` closes. From
    index `period` onward:

        ema[i] = close[i] * alpha + ema[i - 1] * (1 - alpha),  alpha = 2 / (period + 1)

    Args:
        closes: Closing prices, oldest first
        period: EMA period

    Returns:
        np.ndarray: EMA values, same length as closes (empty for empty input)

    Raises:
        ValueError: If period is not positive
    """
    _require_positive("period", period)

    values = np.asarray(closes, dtype=float)
    result = np.empty(len(values), dtype=float)
    if len(values) == 0:
        return result

    seed_len = min(period, len(values))
    result[:seed_len] = np.cumsum(values[:seed_len]) / np.arange(1, seed_len + 1)

    alpha = 2.0 / (period + 1)
    for i in range(period, len(values)):
        result[i] = values[i] * alpha + result[i - 1] * (1 - alpha)

    return result


def _rsi_from_averages(avg_gain: float, avg_loss: float) -> float:
    if avg_loss == 0:
        return 100.0 if avg_gain > 0 else NEUTRAL_RSI
    rs = avg_gain / avg_loss
    return 100.0 - (100.0 / (1.0 + rs))


def rsi_series(closes: Prices, period: int = 14) -> np.ndarray:
    """
    Compute Wilder's RSI at every index of a closing-price sequence.

    Element i equals rsi(closes[:i + 1], period); indices with fewer than
    period + 1 closes hold the neutral 50.

    Returns:
        np.ndarray: RSI values (0-100), same length as closes
    """
    _require_positive("period", period)

    values = np.asarray(closes, dtype=float)
    result = np.full(len(values), NEUTRAL_RSI)
    if len(values) < period + 1:
        return result

    deltas = np.diff(values)
    gains = np.where(deltas > 0, deltas, 0.0)
    losses = np.where(deltas < 0, -deltas, 0.0)

    # Seed with simple averages, then Wilder smoothing over the full history
    avg_gain = float(np.mean(gains[:period]))
    avg_loss = float(np.mean(losses[:period]))
    result[period] = _rsi_from_averages(avg_gain, avg_loss)

    for i in range(period, len(deltas)):
        avg_gain = (avg_gain * (period - 1) + gains[i]) / period
        avg_loss = (avg_loss * (period - 1) + losses[i]) / period
        result[i + 1] = _rsi_from_averages(avg_gain, avg_loss)

    return result


def rsi(closes: Prices, period: int = 14) -> float:
    """
    Compute the latest Relative Strength Index (RSI).

    RSI measures the magnitude of recent price changes to evaluate
    overbought or oversold conditions.

    Args:
        closes: Closing prices, oldest first
        period: RSI period (default 14)

    Returns:
        float: Latest RSI (0-100). 50 when fewer than period + 1 closes
        exist or when prices never moved; 100 when there were no losses.
    """
    _require_positive("period", period)

    values = np.asarray(closes, dtype=float)
    if len(values) < period + 1:
        return NEUTRAL_RSI
    return float(rsi_series(values, period)[-1])


def macd(
    closes: Prices,
    fast: int = 12,
    slow: int = 26,
    signal_period: int = 9
) -> Optional[MACDResult]:
    """
    Compute MACD (Moving Average Convergence Divergence).

    macd_line = EMA(fast) - EMA(slow); the signal line is the EMA of the
    MACD line. Series shorter than `slow` still produce a value through the
    EMA running-mean seed.

    Args:
        closes: Closing prices, oldest first
        fast: Fast EMA period (default 12)
        slow: Slow EMA period (default 26)
        signal_period: Signal EMA period (default 9)

    Returns:
        MACDResult with the latest line, signal and histogram, or None for
        an empty input
    """
    values = np.asarray(closes, dtype=float)
    macd_line = ema(values, fast) - ema(values, slow)
    signal_line = ema(macd_line, signal_period)

    if len(values) == 0:
        return None

    latest = float(macd_line[-1])
    signal = float(signal_line[-1])
    return MACDResult(macd=latest, signal=signal, histogram=latest - signal)


def stochastic_rsi(
    series: Series,
    rsi_period: int = 14,
    stoch_period: int = 14,
    k_smooth: int = 3,
    d_smooth: int = 3
) -> StochasticRSI:
    """
    Compute Stochastic RSI (smoothed K and D lines).

    Stochastic RSI applies the Stochastic oscillator formula to the RSI
    sequence, creating a more sensitive momentum indicator:

        rawK = 100 * (rsi - min(window)) / (max(window) - min(window))

    with rawK = 50 when the window is flat. %K is the SMA of rawK over
    k_smooth values and %D the SMA of %K over d_smooth values. Windows
    shrink to the values available at the start of the sequence.

    Args:
        series: Candle series (closes are used)
        rsi_period: Period for RSI calculation (default 14)
        stoch_period: Period for Stochastic calculation (default 14)
        k_smooth: Smoothing period for %K (default 3)
        d_smooth: Smoothing period for %D (default 3)

    Returns:
        StochasticRSI: latest %K/%D (0-100), signal and zone flags. Neutral
        (50/50) when fewer than rsi_period + 1 candles exist.
    """
    for name, value in (("rsi_period", rsi_period), ("stoch_period", stoch_period),
                        ("k_smooth", k_smooth), ("d_smooth", d_smooth)):
        _require_positive(name, value)

    closes = closes_of(series)
    if len(closes) < rsi_period + 1:
        logger.debug("Stoch RSI: %d candles < %d, returning neutral", len(closes), rsi_period + 1)
        return NEUTRAL_STOCH_RSI

    # Only indices where RSI is actually defined feed the oscillator
    rsi_values = pd.Series(rsi_series(closes, rsi_period)[rsi_period:])

    rsi_min = rsi_values.rolling(window=stoch_period, min_periods=1).min()
    rsi_max = rsi_values.rolling(window=stoch_period, min_periods=1).max()
    span = rsi_max - rsi_min
    raw_k = ((rsi_values - rsi_min) / span * 100).where(span > 0, 50.0)

    stoch_k = raw_k.rolling(window=k_smooth, min_periods=1).mean()
    stoch_d = stoch_k.rolling(window=d_smooth, min_periods=1).mean()

    k = float(stoch_k.iloc[-1])
    d = float(stoch_d.iloc[-1])

    if k > d:
        signal = 'bullish'
    elif k < d:
        signal = 'bearish'
    else:
        signal = 'neutral'

    return StochasticRSI(
        k=k,
        d=d,
        signal=signal,
        overbought=k > THRESHOLDS.stoch_overbought and d > THRESHOLDS.stoch_overbought,
        oversold=k < THRESHOLDS.stoch_oversold and d < THRESHOLDS.stoch_oversold,
    )

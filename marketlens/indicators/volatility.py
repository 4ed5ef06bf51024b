"""
Volatility Indicators Module

Implements volatility measurement indicators:
- Bollinger Bands (with bandwidth and %B)
- ATR (Average True Range)

Both operate on the trailing window of a candle series and shrink the window
to the available candles when the series is shorter than the period.
"""

import logging

import numpy as np
import pandas as pd

from marketlens.shared.models.data import Series, series_to_frame
from marketlens.shared.models.indicators import BollingerBands, EMPTY_BOLLINGER

logger = logging.getLogger(__name__)


def bollinger_bands(series: Series, period: int = 20, k: float = 2.0) -> BollingerBands:
    """
    Compute Bollinger Bands over the trailing window.

    Bollinger Bands consist of:
    - Middle band: Simple mean of the last `period` closes
    - Upper band: middle + (population standard deviation x k)
    - Lower band: middle - (population standard deviation x k)

    Derived metrics:
    - bandwidth = (upper - lower) / middle
    - percent_b = (last close - lower) / (upper - lower), clamped to [0, 1];
      0.5 when the window is flat and the band has zero width

    Args:
        series: Candle series, oldest first
        period: Window length (default 20); all candles are used if fewer exist
        k: Standard deviation multiplier (default 2.0)

    Returns:
        BollingerBands snapshot (all zeros for an empty series)

    Raises:
        ValueError: If period is not positive
    """
    if period <= 0:
        raise ValueError(f"period must be a positive integer, got {period}")

    df = series_to_frame(series)
    if df.empty:
        return EMPTY_BOLLINGER

    window = df['close'].astype(float).tail(period)
    last_close = float(window.iloc[-1])

    # A flat window is exact; summation rounding must not open a phantom band
    if window.max() == window.min():
        middle, std = last_close, 0.0
    else:
        middle = float(window.mean())
        std = float(window.std(ddof=0))
    upper = middle + k * std
    lower = middle - k * std

    band_width = upper - lower
    if band_width == 0:
        percent_b = 0.5
    else:
        percent_b = float(np.clip((last_close - lower) / band_width, 0.0, 1.0))

    return BollingerBands(
        upper=upper,
        middle=middle,
        lower=lower,
        bandwidth=band_width / middle,
        percent_b=percent_b,
    )


def atr(series: Series, period: int = 14) -> float:
    """
    Compute the latest Average True Range (ATR).

    True Range is the greatest of:
    - Current High - Current Low
    - |Current High - Previous Close|
    - |Current Low - Previous Close|

    ATR here is the simple mean of the last `period` true ranges (fewer when
    the series is short).

    Args:
        series: Candle series, oldest first
        period: ATR period (default 14)

    Returns:
        float: ATR; 0 for an empty series, high - low for a single candle
    """
    if period <= 0:
        raise ValueError(f"period must be a positive integer, got {period}")

    df = series_to_frame(series)
    if df.empty:
        return 0.0
    if len(df) == 1:
        return float(df['high'].iloc[0] - df['low'].iloc[0])

    prev_close = df['close'].shift()
    high_low = df['high'] - df['low']
    high_close = (df['high'] - prev_close).abs()
    low_close = (df['low'] - prev_close).abs()
    true_range = pd.concat([high_low, high_close, low_close], axis=1).max(axis=1).iloc[1:]

    return float(true_range.tail(period).mean())

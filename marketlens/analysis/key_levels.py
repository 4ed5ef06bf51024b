"""
Key Price Levels Detection

Extracts pivot-based support and resistance levels: a candle's low is
support when it is strictly lower than every other low within `lookback`
candles on either side, and its high is resistance when strictly higher than
every other high in the same window.
"""

from typing import List

from loguru import logger

from marketlens.shared.models.data import Series, series_to_frame
from marketlens.shared.models.planner import SupportResistance

MAX_LEVELS = 5


def find_support_resistance_levels(series: Series, lookback: int = 5) -> SupportResistance:
    """
    Detect pivot support/resistance levels.

    Args:
        series: Candle series, oldest first
        lookback: Candles on each side a pivot must dominate (default 5)

    Returns:
        SupportResistance with up to 5 unique levels each; support sorted
        descending, resistance ascending. Empty for fewer than 3 candles.
    """
    df = series_to_frame(series)
    if len(df) < 3:
        logger.debug("Not enough candles for pivot level detection")
        return SupportResistance()

    lows = df['low'].astype(float).tolist()
    highs = df['high'].astype(float).tolist()

    support: List[float] = []
    resistance: List[float] = []

    for i in range(lookback, len(df) - lookback):
        window = range(i - lookback, i + lookback + 1)

        if all(lows[j] > lows[i] for j in window if j != i):
            support.append(lows[i])
        if all(highs[j] < highs[i] for j in window if j != i):
            resistance.append(highs[i])

    unique_support = sorted(set(support), reverse=True)
    unique_resistance = sorted(set(resistance))

    return SupportResistance(
        support=tuple(unique_support[:MAX_LEVELS]),
        resistance=tuple(unique_resistance[:MAX_LEVELS]),
    )

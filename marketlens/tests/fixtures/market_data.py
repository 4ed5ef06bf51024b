"""
Reusable market data fixtures for testing.

Provides deterministic OHLCV series for various market conditions.
"""

from typing import List

import numpy as np
import pandas as pd

from marketlens.shared.models.data import OHLCV, OHLCV_COLUMNS


def _candles_from_closes(
    closes: np.ndarray,
    rng: np.random.Generator,
    base_volume: float = 1_000_000,
    wick: float = 0.003,
    interval_seconds: int = 3600,
) -> List[OHLCV]:
    candles = []
    open_price = float(closes[0])

    for i, close_price in enumerate(closes):
        close_price = float(close_price)
        high = max(open_price, close_price) * (1 + abs(rng.normal(0, wick)))
        low = min(open_price, close_price) * (1 - abs(rng.normal(0, wick)))
        volume = base_volume * (1 + abs(rng.normal(0.3, 0.2)))

        candles.append(OHLCV(
            timestamp=1_700_000_000 + i * interval_seconds,
            open=round(open_price, 2),
            high=round(high, 2),
            low=round(low, 2),
            close=round(close_price, 2),
            volume=round(volume, 2),
        ))
        open_price = close_price

    return candles


def generate_bullish_trend_ohlcv(periods: int = 100, base_price: float = 100.0, seed: int = 7) -> List[OHLCV]:
    """
    Generate OHLCV data for a bullish trending market.

    Closes rise 0.5% per period with small noise, so most periods close up.
    """
    rng = np.random.default_rng(seed)
    returns = 0.005 + rng.normal(0, 0.002, periods)
    closes = base_price * np.cumprod(1 + returns)
    return _candles_from_closes(closes, rng)


def generate_bearish_trend_ohlcv(periods: int = 100, base_price: float = 100.0, seed: int = 11) -> List[OHLCV]:
    """Generate OHLCV data for a bearish trending market."""
    rng = np.random.default_rng(seed)
    returns = -0.005 + rng.normal(0, 0.002, periods)
    closes = base_price * np.cumprod(1 + returns)
    return _candles_from_closes(closes, rng)


def generate_ranging_ohlcv(periods: int = 100, base_price: float = 100.0, seed: int = 3) -> List[OHLCV]:
    """Generate OHLCV data oscillating around base_price (sine wave plus noise)."""
    rng = np.random.default_rng(seed)
    t = np.arange(periods)
    closes = base_price * (1 + 0.03 * np.sin(t / 4) + rng.normal(0, 0.003, periods))
    return _candles_from_closes(closes, rng)


def generate_flat_ohlcv(periods: int = 30, price: float = 50.0, volume: float = 1000.0) -> List[OHLCV]:
    """Generate a perfectly flat series (every price identical)."""
    return [
        OHLCV(timestamp=1_700_000_000 + i * 60, open=price, high=price, low=price, close=price, volume=volume)
        for i in range(periods)
    ]


def candles_from_closes(closes: List[float], volume: float = 100.0) -> List[OHLCV]:
    """Flat candles (open == high == low == close) from a list of closes."""
    return [
        OHLCV(timestamp=1_700_000_000 + i * 60, open=c, high=c, low=c, close=c, volume=volume)
        for i, c in enumerate(closes)
    ]


def to_frame(candles: List[OHLCV]) -> pd.DataFrame:
    """DataFrame form of a candle list."""
    return pd.DataFrame([c.to_dict() for c in candles], columns=OHLCV_COLUMNS)

"""
Data models for OHLCV candles and candle series.

This module defines the core candle record passed into the indicator engine,
plus conversions between record sequences, pandas DataFrames and the raw
positional rows returned by exchange/aggregator APIs.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union
import math

import numpy as np
import pandas as pd

from marketlens.shared.utils.error_policy import ValidationError

OHLCV_COLUMNS = ['timestamp', 'open', 'high', 'low', 'close', 'volume']


@dataclass(frozen=True)
class OHLCV:
    """
    Single OHLCV (Open, High, Low, Close, Volume) candlestick data point.

    Attributes:
        timestamp: Candle open time (integer, unit-consistent within a series)
        open: Opening price
        high: Highest price during period
        low: Lowest price during period
        close: Closing price
        volume: Traded volume
    """
    timestamp: int
    open: float
    high: float
    low: float
    close: float
    volume: float

    def __post_init__(self):
        """Validate OHLC ordering (finiteness is checked by the series validator)."""
        prices = (self.open, self.high, self.low, self.close)
        if not all(isinstance(p, (int, float)) and math.isfinite(p) for p in prices):
            return
        if self.high < self.low:
            raise ValidationError(f"High ({self.high}) cannot be less than Low ({self.low})")
        if self.high < self.close or self.high < self.open:
            raise ValidationError(
                f"High ({self.high}) must be >= Open ({self.open}) and Close ({self.close})"
            )
        if self.low > self.close or self.low > self.open:
            raise ValidationError(
                f"Low ({self.low}) must be <= Open ({self.open}) and Close ({self.close})"
            )

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


# A series is either a sequence of candle records (OHLCV or plain mappings)
# or a DataFrame with OHLCV_COLUMNS, oldest first.
CandleLike = Union[OHLCV, Mapping[str, Any]]
Series = Union[Sequence[CandleLike], pd.DataFrame]


def _field(candle: CandleLike, name: str) -> Any:
    if isinstance(candle, Mapping):
        return candle[name]
    return getattr(candle, name)


def series_to_frame(series: Series) -> pd.DataFrame:
    """
    Convert a candle series into a DataFrame with OHLCV_COLUMNS.

    DataFrames are returned as-is (column presence is the validator's job).

    Raises:
        ValidationError: If a record is missing one of the OHLCV fields
    """
    if isinstance(series, pd.DataFrame):
        return series

    rows = []
    for idx, candle in enumerate(series):
        try:
            rows.append({name: _field(candle, name) for name in OHLCV_COLUMNS})
        except (KeyError, AttributeError) as e:
            raise ValidationError(f"Candle {idx} is missing field {e}")

    return pd.DataFrame(rows, columns=OHLCV_COLUMNS)


def candles_from_frame(df: pd.DataFrame) -> List[OHLCV]:
    """Build OHLCV records from a DataFrame (one record per row, in row order)."""
    missing = [col for col in OHLCV_COLUMNS if col not in df.columns]
    if missing:
        raise ValidationError(f"Missing required columns: {missing}")

    candles = []
    for idx, row in enumerate(df[OHLCV_COLUMNS].itertuples(index=False)):
        try:
            candles.append(OHLCV(
                timestamp=int(row.timestamp),
                open=float(row.open),
                high=float(row.high),
                low=float(row.low),
                close=float(row.close),
                volume=float(row.volume),
            ))
        except ValidationError:
            raise
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Candle row {idx}: {e}")
    return candles


def closes_of(series: Series) -> np.ndarray:
    """Closing prices of a series as a float array."""
    if isinstance(series, pd.DataFrame):
        return series['close'].to_numpy(dtype=float)
    return np.array([_field(c, 'close') for c in series], dtype=float)


def convert_candles_to_ohlcv(rows: Sequence[Sequence[float]]) -> List[OHLCV]:
    """
    Convert raw positional candle rows to OHLCV records.

    Supported row formats:
    - [timestamp, open, high, low, close, volume] (full candles)
    - [timestamp, price] or [timestamp, price, volume] (price-only feeds;
      converted to flat candles with open == high == low == close)

    Args:
        rows: Raw rows as returned by the data-fetch collaborator

    Returns:
        OHLCV records sorted by timestamp (oldest first)

    Raises:
        ValidationError: If a row has fewer than two fields or a non-numeric field
    """
    if not rows:
        return []

    candles = []
    for idx, row in enumerate(rows):
        try:
            candle = _row_to_ohlcv(row)
        except ValidationError:
            raise
        except (TypeError, ValueError) as e:
            raise ValidationError(f"Candle row {idx}: {e}")
        if candle is None:
            raise ValidationError(f"Candle row {idx} has {len(row)} fields, need at least 2")
        candles.append(candle)

    candles.sort(key=lambda c: c.timestamp)
    return candles


def _row_to_ohlcv(row: Sequence[Any]) -> Optional[OHLCV]:
    if len(row) >= 6:
        return OHLCV(
            timestamp=int(row[0]),
            open=float(row[1]),
            high=float(row[2]),
            low=float(row[3]),
            close=float(row[4]),
            volume=float(row[5]),
        )
    if len(row) >= 2:
        price = float(row[1])
        volume = float(row[2]) if len(row) >= 3 and row[2] else 0.0
        return OHLCV(
            timestamp=int(row[0]),
            open=price,
            high=price,
            low=price,
            close=price,
            volume=volume,
        )
    return None


def data_quality_score(series: Series) -> float:
    """
    Score how usable a candle series is for analysis (0-100).

    Components:
    - Length: up to 30 points, full marks at 50 candles
    - OHLC consistency (high >= open/close >= low): 30 points
    - Volume data present: 20 points
    - Chronological timestamps: 20 points
    """
    df = series_to_frame(series)
    if df.empty:
        return 0.0

    score = min(len(df) / 50 * 30, 30.0)

    body_high = df[['open', 'close']].max(axis=1)
    body_low = df[['open', 'close']].min(axis=1)
    if ((df['high'] >= body_high) & (df['low'] <= body_low)).all():
        score += 30

    if (df['volume'] > 0).any():
        score += 20

    if df['timestamp'].is_monotonic_increasing:
        score += 20

    return float(min(score, 100.0))

"""
Technical Indicators Package

Provides:
- Momentum indicators (EMA, RSI, MACD, Stochastic RSI)
- Volatility indicators (Bollinger Bands, ATR)
- Volume indicators (Volume Profile)
- Series validation utilities

All indicator functions follow consistent patterns:
- Accept a candle series (OHLCV records or a DataFrame) or a list of closes
- Return numpy arrays, floats or immutable result records
- Raise ValidationError only for malformed data, never for short data
"""

from marketlens.indicators.momentum import (
    ema,
    rsi,
    rsi_series,
    macd,
    stochastic_rsi,
    NEUTRAL_RSI,
)

from marketlens.indicators.volatility import (
    bollinger_bands,
    atr,
)

from marketlens.indicators.volume import (
    volume_profile,
)

from marketlens.indicators.validation_utils import (
    validate_ohlcv,
    validate_series,
    ValidationError,
)

__all__ = [
    # Momentum
    'ema',
    'rsi',
    'rsi_series',
    'macd',
    'stochastic_rsi',
    'NEUTRAL_RSI',
    # Volatility
    'bollinger_bands',
    'atr',
    # Volume
    'volume_profile',
    # Validation
    'validate_ohlcv',
    'validate_series',
    'ValidationError',
]

"""
Default configuration for the MarketLens indicator engine.

Window sizes, signal thresholds and cache settings live here as plain
dataclasses with module-level default instances.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class WindowSizes:
    """Indicator calculation window sizes."""
    # EMA periods reported by analyze_indicators
    ema_fast: int = 12
    ema_slow: int = 26

    # RSI/Momentum
    rsi_period: int = 14
    macd_fast: int = 12
    macd_slow: int = 26
    macd_signal: int = 9
    stoch_rsi_period: int = 14
    stoch_period: int = 14
    stoch_k_smooth: int = 3
    stoch_d_smooth: int = 3

    # Volatility
    atr_period: int = 14
    bb_period: int = 20
    bb_std: float = 2.0

    # Volume
    volume_profile_levels: int = 10

    # Lookback windows
    pivot_lookback: int = 5
    swing_lookback: int = 20


@dataclass(frozen=True)
class SignalThresholds:
    """Thresholds mapping indicator values to qualitative signals."""
    # RSI levels
    rsi_oversold: float = 30.0
    rsi_overbought: float = 70.0

    # Stochastic RSI zones
    stoch_oversold: float = 20.0
    stoch_overbought: float = 80.0

    # Bollinger bandwidth regimes
    bb_squeeze_bandwidth: float = 0.10
    bb_expansion_bandwidth: float = 0.20

    # Share of total volume enclosed by the value area
    value_area_pct: float = 0.68


@dataclass(frozen=True)
class CacheSettings:
    """Narration response cache settings."""
    ttl_seconds: float = 20 * 60
    max_size: int = 100
    evict_fraction: float = 0.2


# Default instances
WINDOWS = WindowSizes()
THRESHOLDS = SignalThresholds()
CACHE_SETTINGS = CacheSettings()

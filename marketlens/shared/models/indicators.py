"""
Technical indicators data models.

Plain immutable value records produced fresh by every indicator call. Each
record exposes to_dict() returning JSON-serialisable values with the keys the
narration and presentation layers consume.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Tuple

RSISignal = Literal['overbought', 'oversold', 'neutral']
DirectionalSignal = Literal['bullish', 'bearish', 'neutral']
BollingerSignal = Literal['squeeze', 'expansion', 'normal']
Significance = Literal['target', 'strong_resistance', 'extreme_extension']
Projection = Literal['uptrend_continuation', 'downtrend_continuation', 'reversal']


@dataclass(frozen=True)
class MACDResult:
    """Latest MACD line, signal line and histogram values."""
    macd: float
    signal: float
    histogram: float

    def to_dict(self) -> Dict[str, float]:
        return {'MACD': self.macd, 'signal': self.signal, 'histogram': self.histogram}


@dataclass(frozen=True)
class BollingerBands:
    """
    Bollinger Band snapshot for the trailing window.

    Attributes:
        upper: middle + k * stdev
        middle: Simple mean of the window
        lower: middle - k * stdev
        bandwidth: (upper - lower) / middle
        percent_b: Position of the last close inside the band, in [0, 1]
    """
    upper: float
    middle: float
    lower: float
    bandwidth: float
    percent_b: float

    def to_dict(self) -> Dict[str, float]:
        return {
            'upper': self.upper,
            'middle': self.middle,
            'lower': self.lower,
            'bandwidth': self.bandwidth,
            'percentB': self.percent_b,
        }


@dataclass(frozen=True)
class StochasticRSI:
    """Latest smoothed Stochastic RSI lines and derived flags."""
    k: float
    d: float
    signal: DirectionalSignal
    overbought: bool
    oversold: bool

    def to_dict(self) -> Dict[str, Any]:
        return {
            'k': self.k,
            'd': self.d,
            'signal': self.signal,
            'overbought': self.overbought,
            'oversold': self.oversold,
        }


@dataclass(frozen=True)
class VolumeLevel:
    """Volume aggregated into one price bucket (price is the bucket midpoint)."""
    price: float
    volume: float
    percentage: float

    def to_dict(self) -> Dict[str, float]:
        return {'price': self.price, 'volume': self.volume, 'percentage': self.percentage}


@dataclass(frozen=True)
class VolumeProfile:
    """
    Price/volume histogram with Point of Control and Value Area.

    Attributes:
        levels: Buckets sorted ascending by price
        poc: Price of the highest-volume bucket
        value_area_high: Upper bound of the value area
        value_area_low: Lower bound of the value area
        total_volume: Sum of all bucket volumes
    """
    levels: Tuple[VolumeLevel, ...]
    poc: float
    value_area_high: float
    value_area_low: float
    total_volume: float

    def is_in_value_area(self, price: float) -> bool:
        """Check if price is within value area."""
        return self.value_area_low <= price <= self.value_area_high

    def to_dict(self) -> Dict[str, Any]:
        return {
            'levels': [level.to_dict() for level in self.levels],
            'poc': self.poc,
            'valueAreaHigh': self.value_area_high,
            'valueAreaLow': self.value_area_low,
            'totalVolume': self.total_volume,
        }


@dataclass(frozen=True)
class FibonacciTarget:
    """A projected Fibonacci extension price."""
    level: str  # e.g. '161.8%'
    price: float
    significance: Significance

    def to_dict(self) -> Dict[str, Any]:
        return {'level': self.level, 'price': self.price, 'significance': self.significance}


@dataclass(frozen=True)
class FibonacciExtensions:
    """Extension levels keyed by percentage label, plus ordered targets."""
    levels: Dict[str, float]
    targets: Tuple[FibonacciTarget, ...]
    projection: Projection

    def to_dict(self) -> Dict[str, Any]:
        return {
            'levels': dict(self.levels),
            'targets': [t.to_dict() for t in self.targets],
            'projection': self.projection,
        }


@dataclass(frozen=True)
class SignalSet:
    """Qualitative tag per indicator plus the overall call."""
    rsi: RSISignal = 'neutral'
    macd: DirectionalSignal = 'neutral'
    bollinger: BollingerSignal = 'normal'
    stoch_rsi: DirectionalSignal = 'neutral'
    overall: DirectionalSignal = 'neutral'

    def to_dict(self) -> Dict[str, str]:
        return {
            'rsi': self.rsi,
            'macd': self.macd,
            'bollinger': self.bollinger,
            'stochRSI': self.stoch_rsi,
            'overall': self.overall,
        }


EMPTY_BOLLINGER = BollingerBands(upper=0.0, middle=0.0, lower=0.0, bandwidth=0.0, percent_b=0.0)
NEUTRAL_STOCH_RSI = StochasticRSI(k=50.0, d=50.0, signal='neutral', overbought=False, oversold=False)
EMPTY_VOLUME_PROFILE = VolumeProfile(
    levels=(), poc=0.0, value_area_high=0.0, value_area_low=0.0, total_volume=0.0
)


@dataclass(frozen=True)
class IndicatorAnalysis:
    """
    Complete indicator report for one series (the signal bundle).

    The defaults describe the report for an empty series.
    """
    rsi: float = 50.0
    ema12: Optional[float] = None
    ema26: Optional[float] = None
    macd: Optional[MACDResult] = None
    bollinger_bands: BollingerBands = EMPTY_BOLLINGER
    stochastic_rsi: StochasticRSI = NEUTRAL_STOCH_RSI
    volume_profile: VolumeProfile = EMPTY_VOLUME_PROFILE
    signals: SignalSet = field(default_factory=SignalSet)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'rsi': self.rsi,
            'ema12': self.ema12,
            'ema26': self.ema26,
            'macd': self.macd.to_dict() if self.macd else None,
            'bollingerBands': self.bollinger_bands.to_dict(),
            'stochasticRSI': self.stochastic_rsi.to_dict(),
            'volumeProfile': self.volume_profile.to_dict(),
            'signals': self.signals.to_dict(),
        }


__all__: List[str] = [
    'MACDResult',
    'BollingerBands',
    'StochasticRSI',
    'VolumeLevel',
    'VolumeProfile',
    'FibonacciTarget',
    'FibonacciExtensions',
    'SignalSet',
    'IndicatorAnalysis',
    'EMPTY_BOLLINGER',
    'NEUTRAL_STOCH_RSI',
    'EMPTY_VOLUME_PROFILE',
]

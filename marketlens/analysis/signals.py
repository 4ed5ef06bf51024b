"""
Signal Aggregation

Maps each indicator's numeric output to a qualitative tag and combines the
directional tags into one overall call by simple vote.
"""

from typing import Iterable, Optional

from marketlens.shared.config.defaults import THRESHOLDS, SignalThresholds
from marketlens.shared.models.indicators import (
    BollingerBands,
    MACDResult,
    SignalSet,
    StochasticRSI,
)


def classify_rsi(rsi_value: float, thresholds: SignalThresholds = THRESHOLDS) -> str:
    """'overbought' above 70, 'oversold' below 30, else 'neutral'."""
    if rsi_value > thresholds.rsi_overbought:
        return 'overbought'
    if rsi_value < thresholds.rsi_oversold:
        return 'oversold'
    return 'neutral'


def classify_macd(macd_result: Optional[MACDResult]) -> str:
    """
    'bullish' for a positive histogram, otherwise 'bearish'.

    There is no dead zone around zero; only a missing MACD is 'neutral'.
    """
    if macd_result is None:
        return 'neutral'
    return 'bullish' if macd_result.histogram > 0 else 'bearish'


def classify_bollinger(bands: BollingerBands, thresholds: SignalThresholds = THRESHOLDS) -> str:
    if bands.bandwidth < thresholds.bb_squeeze_bandwidth:
        return 'squeeze'
    if bands.bandwidth > thresholds.bb_expansion_bandwidth:
        return 'expansion'
    return 'normal'


def rsi_direction(rsi_signal: str) -> str:
    """Contrarian reading of the RSI zone: overbought votes bearish, oversold bullish."""
    if rsi_signal == 'overbought':
        return 'bearish'
    if rsi_signal == 'oversold':
        return 'bullish'
    return 'neutral'


def majority_vote(votes: Iterable[str]) -> str:
    """More bullish than bearish votes -> 'bullish', the reverse -> 'bearish', tie -> 'neutral'."""
    votes = list(votes)
    bullish = votes.count('bullish')
    bearish = votes.count('bearish')
    if bullish > bearish:
        return 'bullish'
    if bearish > bullish:
        return 'bearish'
    return 'neutral'


def aggregate_signals(
    rsi_value: float,
    macd_result: Optional[MACDResult],
    bands: BollingerBands,
    stoch: StochasticRSI,
    thresholds: SignalThresholds = THRESHOLDS,
) -> SignalSet:
    """
    Build the per-indicator tags and the overall call.

    The overall vote is taken over the RSI direction, MACD and Stochastic
    RSI; Bollinger describes volatility and does not vote.
    """
    rsi_signal = classify_rsi(rsi_value, thresholds)
    macd_signal = classify_macd(macd_result)
    stoch_signal = stoch.signal

    return SignalSet(
        rsi=rsi_signal,
        macd=macd_signal,
        bollinger=classify_bollinger(bands, thresholds),
        stoch_rsi=stoch_signal,
        overall=majority_vote([rsi_direction(rsi_signal), macd_signal, stoch_signal]),
    )

"""
Indicator Service - one-call indicator analysis for a candle series

Computes the full indicator report for a single series:
- Momentum: RSI, EMA12/EMA26, MACD, Stochastic RSI
- Volatility: Bollinger Bands
- Volume: Volume Profile
- Signals: per-indicator tags and the overall vote

The service holds only its configuration; every call is a pure function of
the series passed in.
"""

import logging
from typing import Optional

from marketlens.analysis.signals import aggregate_signals
from marketlens.shared.config.defaults import THRESHOLDS, WINDOWS, SignalThresholds, WindowSizes
from marketlens.shared.models.data import Series, closes_of
from marketlens.shared.models.indicators import IndicatorAnalysis
from marketlens.shared.utils.logging_utils import log_signal_summary, time_operation

# Momentum indicators
from marketlens.indicators.momentum import ema, macd, rsi, stochastic_rsi

# Volatility indicators
from marketlens.indicators.volatility import bollinger_bands

# Volume indicators
from marketlens.indicators.volume import volume_profile

from marketlens.indicators.validation_utils import validate_series

logger = logging.getLogger(__name__)


class IndicatorService:
    """
    Service computing the indicator report for one candle series.

    Usage:
        service = IndicatorService()
        analysis = service.analyze(candles)
    """

    def __init__(
        self,
        windows: Optional[WindowSizes] = None,
        thresholds: Optional[SignalThresholds] = None,
    ):
        self._windows = windows or WINDOWS
        self._thresholds = thresholds or THRESHOLDS

    @property
    def windows(self) -> WindowSizes:
        return self._windows

    @property
    def thresholds(self) -> SignalThresholds:
        return self._thresholds

    def analyze(self, series: Series, symbol: Optional[str] = None) -> IndicatorAnalysis:
        """
        Compute all indicators and aggregate their signals.

        Args:
            series: Candle series, oldest first
            symbol: Optional label used only in log lines

        Returns:
            IndicatorAnalysis. An empty series yields the neutral defaults
            without validation.

        Raises:
            ValidationError: If the series is malformed
        """
        if len(series) == 0:
            logger.debug("Empty series, returning default indicator analysis")
            return IndicatorAnalysis()

        w = self._windows
        with time_operation("analyze_indicators", symbol):
            validate_series(series)
            closes = closes_of(series)

            rsi_value = rsi(closes, w.rsi_period)
            ema12 = float(ema(closes, w.ema_fast)[-1])
            ema26 = float(ema(closes, w.ema_slow)[-1])
            macd_result = macd(closes, w.macd_fast, w.macd_slow, w.macd_signal)
            bands = bollinger_bands(series, w.bb_period, w.bb_std)
            stoch = stochastic_rsi(
                series,
                rsi_period=w.stoch_rsi_period,
                stoch_period=w.stoch_period,
                k_smooth=w.stoch_k_smooth,
                d_smooth=w.stoch_d_smooth,
            )
            profile = volume_profile(
                series,
                levels=w.volume_profile_levels,
                value_area_pct=self._thresholds.value_area_pct,
            )
            signals = aggregate_signals(rsi_value, macd_result, bands, stoch, self._thresholds)

        log_signal_summary(
            len(closes),
            signals.to_dict(),
            values={'rsi': rsi_value, 'poc': profile.poc, 'bandwidth': bands.bandwidth},
        )

        return IndicatorAnalysis(
            rsi=rsi_value,
            ema12=ema12,
            ema26=ema26,
            macd=macd_result,
            bollinger_bands=bands,
            stochastic_rsi=stoch,
            volume_profile=profile,
            signals=signals,
        )


def analyze_indicators(series: Series) -> IndicatorAnalysis:
    """Analyze a series with the default window sizes and thresholds."""
    return IndicatorService().analyze(series)

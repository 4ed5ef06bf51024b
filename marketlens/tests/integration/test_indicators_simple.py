"""
Integration tests for the full indicator analysis.

Tests analyze_indicators end to end on trending, flat and degenerate series.
"""

import json

import pytest

from marketlens.indicators import ValidationError, rsi
from marketlens.services import IndicatorService, analyze_indicators
from marketlens.shared.config.defaults import WindowSizes
from marketlens.shared.models.data import closes_of
from marketlens.shared.models.indicators import IndicatorAnalysis
from marketlens.tests.fixtures.market_data import (
    candles_from_closes,
    generate_bearish_trend_ohlcv,
    generate_bullish_trend_ohlcv,
    generate_flat_ohlcv,
    generate_ranging_ohlcv,
    to_frame,
)


class TestAnalyzeIndicators:
    """End-to-end indicator analysis."""

    def test_empty_series_defaults(self):
        analysis = analyze_indicators([])
        assert analysis == IndicatorAnalysis()
        assert analysis.rsi == 50.0
        assert analysis.ema12 is None
        assert analysis.ema26 is None
        assert analysis.macd is None
        assert analysis.stochastic_rsi.k == 50.0
        assert analysis.volume_profile.levels == ()
        assert analysis.signals.overall == 'neutral'

    def test_bullish_trend(self):
        analysis = analyze_indicators(generate_bullish_trend_ohlcv(100))
        assert analysis.rsi > 50
        assert analysis.ema12 > analysis.ema26
        assert analysis.macd.macd > 0

    def test_bearish_trend(self):
        analysis = analyze_indicators(generate_bearish_trend_ohlcv(100))
        assert analysis.rsi < 50
        assert analysis.ema12 < analysis.ema26
        assert analysis.macd.macd < 0

    def test_flat_series(self):
        analysis = analyze_indicators(generate_flat_ohlcv(40, price=20.0))
        assert analysis.rsi == 50.0
        assert analysis.ema12 == pytest.approx(20.0)
        assert analysis.macd.histogram == pytest.approx(0.0, abs=1e-9)
        assert analysis.bollinger_bands.bandwidth == 0.0
        assert analysis.signals.rsi == 'neutral'
        assert analysis.signals.bollinger == 'squeeze'
        assert analysis.signals.stoch_rsi == 'neutral'

    def test_single_candle(self):
        analysis = analyze_indicators(candles_from_closes([12.5]))
        assert analysis.rsi == 50.0
        assert analysis.ema12 == 12.5
        assert analysis.ema26 == 12.5
        assert analysis.macd.histogram == 0.0
        assert analysis.volume_profile.poc == 12.5

    def test_idempotent(self):
        candles = generate_ranging_ohlcv(120)
        assert analyze_indicators(candles) == analyze_indicators(candles)

    def test_records_and_dataframe_agree(self):
        candles = generate_ranging_ohlcv(80)
        assert analyze_indicators(candles) == analyze_indicators(to_frame(candles))

    def test_malformed_series_raises(self):
        rows = [{'timestamp': 1, 'open': 10, 'high': 11, 'low': 9, 'close': 10, 'volume': -1}]
        with pytest.raises(ValidationError):
            analyze_indicators(rows)

    def test_to_dict_is_json_serialisable(self):
        data = analyze_indicators(generate_ranging_ohlcv(60)).to_dict()
        decoded = json.loads(json.dumps(data))
        assert decoded['signals']['overall'] in ('bullish', 'bearish', 'neutral')
        assert len(decoded['volumeProfile']['levels']) == 10

    def test_signals_consistent_with_values(self):
        analysis = analyze_indicators(generate_ranging_ohlcv(100))
        expected_macd = 'bullish' if analysis.macd.histogram > 0 else 'bearish'
        assert analysis.signals.macd == expected_macd
        assert analysis.signals.stoch_rsi == analysis.stochastic_rsi.signal


class TestIndicatorService:
    """Service configured with custom window sizes."""

    def test_custom_rsi_period(self):
        candles = generate_ranging_ohlcv(60)
        service = IndicatorService(windows=WindowSizes(rsi_period=7))
        assert service.analyze(candles).rsi == pytest.approx(rsi(closes_of(candles), 7))

    def test_custom_volume_levels(self):
        service = IndicatorService(windows=WindowSizes(volume_profile_levels=4))
        analysis = service.analyze(generate_ranging_ohlcv(60), symbol="TEST")
        assert len(analysis.volume_profile.levels) == 4

    def test_module_holds_no_service_instance(self):
        from marketlens.services import indicator_service

        assert not any(
            isinstance(value, IndicatorService) for value in vars(indicator_service).values()
        )

    def test_defaults(self):
        service = IndicatorService()
        assert service.windows.rsi_period == 14
        assert service.thresholds.rsi_overbought == 70.0

"""
Unit tests for EMA, RSI and MACD.
"""

import numpy as np
import pytest

from marketlens.indicators import NEUTRAL_RSI, ema, macd, rsi, rsi_series


class TestEMA:
    """EMA with running-mean seeding."""

    def test_seed_is_running_mean_then_recursive(self):
        result = ema([1.0, 2.0, 3.0, 4.0, 5.0], 3)
        # seed: 1, 1.5, 2 (SMA of first 3); alpha = 0.5 afterwards
        np.testing.assert_allclose(result, [1.0, 1.5, 2.0, 3.0, 4.0])

    def test_length_matches_input(self):
        closes = np.linspace(10, 20, 37)
        assert len(ema(closes, 12)) == 37

    def test_shorter_than_period_is_running_mean(self):
        np.testing.assert_allclose(ema([2.0, 4.0], 5), [2.0, 3.0])

    def test_empty_input(self):
        assert len(ema([], 12)) == 0

    def test_constant_series(self):
        np.testing.assert_allclose(ema([7.0] * 30, 12), [7.0] * 30)

    def test_sma_at_period_boundary(self):
        closes = [3.0, 6.0, 9.0, 12.0]
        assert ema(closes, 4)[3] == pytest.approx(7.5)

    @pytest.mark.parametrize("period", [0, -3])
    def test_non_positive_period_raises(self, period):
        with pytest.raises(ValueError, match="period"):
            ema([1.0, 2.0], period)


class TestRSI:
    """Wilder-smoothed RSI."""

    def test_short_series_is_neutral(self):
        assert rsi([1.0, 2.0, 3.0], 14) == NEUTRAL_RSI
        assert rsi([], 14) == NEUTRAL_RSI

    def test_exactly_period_closes_is_neutral(self):
        assert rsi(list(range(1, 15)), 14) == NEUTRAL_RSI

    def test_strictly_rising_is_100(self):
        assert rsi(list(range(1, 30)), 14) == 100.0

    def test_strictly_falling_is_0(self):
        assert rsi(list(range(30, 1, -1)), 14) == pytest.approx(0.0)

    def test_flat_series_is_neutral(self):
        assert rsi([5.0] * 40, 14) == NEUTRAL_RSI

    def test_mostly_rising_above_50(self):
        closes = [100 + i - (3 if i % 5 == 0 else 0) for i in range(40)]
        assert rsi(closes, 14) > 50

    def test_wilder_smoothing_value(self):
        # deltas +1, -1, +1: seed avg 0.5/0.5, then gain 0.75 vs loss 0.25 -> RS 3
        assert rsi([1.0, 2.0, 1.0, 2.0], 2) == pytest.approx(75.0)

    def test_always_within_bounds(self):
        rng = np.random.default_rng(1)
        closes = 100 * np.cumprod(1 + rng.normal(0, 0.02, 200))
        values = rsi_series(closes, 14)
        assert np.all((values >= 0) & (values <= 100))

    def test_series_matches_prefix_rsi(self):
        rng = np.random.default_rng(2)
        closes = 50 + np.cumsum(rng.normal(0, 1, 40))
        series = rsi_series(closes, 14)
        for i in (0, 13, 14, 20, 39):
            assert series[i] == pytest.approx(rsi(closes[:i + 1], 14))

    def test_non_positive_period_raises_even_for_short_input(self):
        with pytest.raises(ValueError, match="period"):
            rsi([1.0], 0)


class TestMACD:
    """MACD line, signal and histogram."""

    def test_empty_input_returns_none(self):
        assert macd([]) is None

    def test_single_close_is_zero(self):
        result = macd([10.0])
        assert result.macd == 0.0
        assert result.histogram == 0.0

    def test_histogram_is_macd_minus_signal(self):
        rng = np.random.default_rng(5)
        closes = 100 + np.cumsum(rng.normal(0, 1, 80))
        result = macd(closes)
        assert result.histogram == pytest.approx(result.macd - result.signal)

    def test_macd_line_is_ema_difference(self):
        closes = np.linspace(10, 30, 60)
        result = macd(closes)
        expected = ema(closes, 12)[-1] - ema(closes, 26)[-1]
        assert result.macd == pytest.approx(expected)

    def test_rising_series_positive_macd(self):
        result = macd(np.linspace(10, 30, 60))
        assert result.macd > 0

    def test_falling_series_negative_macd(self):
        result = macd(np.linspace(30, 10, 60))
        assert result.macd < 0

    def test_to_dict_keys(self):
        assert set(macd([1.0, 2.0, 3.0]).to_dict()) == {'MACD', 'signal', 'histogram'}

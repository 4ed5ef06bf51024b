"""
Unit tests for the volume profile.

Tests:
- Bucket totals and percentages
- POC and value area placement
- Flat and empty series
"""

import pytest

from marketlens.indicators import volume_profile
from marketlens.shared.models.data import OHLCV
from marketlens.shared.models.indicators import EMPTY_VOLUME_PROFILE
from marketlens.tests.fixtures.market_data import (
    generate_bullish_trend_ohlcv,
    generate_flat_ohlcv,
    generate_ranging_ohlcv,
)


def make_ladder(volumes):
    """Flat candles closing at 1, 2, ..., n with the given volumes."""
    return [
        OHLCV(timestamp=i, open=float(i + 1), high=float(i + 1), low=float(i + 1),
              close=float(i + 1), volume=float(v))
        for i, v in enumerate(volumes)
    ]


class TestVolumeProfileTotals:
    """Every unit of volume lands in exactly one bucket."""

    @pytest.mark.parametrize("generator", [generate_bullish_trend_ohlcv, generate_ranging_ohlcv])
    def test_levels_sum_to_total(self, generator):
        candles = generator(100)
        profile = volume_profile(candles)
        assert sum(level.volume for level in profile.levels) == profile.total_volume
        assert profile.total_volume == pytest.approx(sum(c.volume for c in candles))

    def test_percentages_sum_to_100(self):
        profile = volume_profile(generate_ranging_ohlcv(80))
        assert sum(level.percentage for level in profile.levels) == pytest.approx(100.0)

    def test_default_level_count_and_order(self):
        profile = volume_profile(generate_ranging_ohlcv(80))
        prices = [level.price for level in profile.levels]
        assert len(prices) == 10
        assert prices == sorted(prices)

    def test_custom_level_count(self):
        profile = volume_profile(generate_ranging_ohlcv(80), levels=24)
        assert len(profile.levels) == 24

    def test_top_edge_belongs_to_last_bucket(self):
        profile = volume_profile(make_ladder([1] * 9 + [50]))
        assert profile.levels[-1].volume == 50.0

    @pytest.mark.parametrize("levels", [0, -2])
    def test_non_positive_levels_raise(self, levels):
        with pytest.raises(ValueError, match="levels"):
            volume_profile(generate_ranging_ohlcv(20), levels=levels)


class TestValueArea:
    """POC and value area grown outward from it."""

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_poc_inside_value_area(self, seed):
        profile = volume_profile(generate_ranging_ohlcv(100, seed=seed))
        assert profile.value_area_low <= profile.poc <= profile.value_area_high
        assert profile.is_in_value_area(profile.poc)

    def test_value_area_holds_target_share(self):
        profile = volume_profile(generate_ranging_ohlcv(100))
        enclosed = sum(
            level.volume for level in profile.levels
            if profile.value_area_low <= level.price <= profile.value_area_high
        )
        assert enclosed >= 0.68 * profile.total_volume

    def test_equal_windows_prefer_lower_price(self):
        # Closes 1..10 fill one bucket each; bucket 4 (close 5) dominates.
        # Any 4-bucket window around it holds 130 >= 129.2
        profile = volume_profile(make_ladder([10, 10, 10, 10, 100, 10, 10, 10, 10, 10]))
        assert profile.total_volume == 190.0
        assert profile.poc == pytest.approx(5.05)
        assert profile.value_area_low == pytest.approx(2.35)
        assert profile.value_area_high == pytest.approx(5.05)

    def test_equal_width_prefers_more_volume(self):
        # Width 3 is minimal; buckets 2-4 and 3-5 both hold 150, lower wins
        profile = volume_profile(make_ladder([10, 10, 10, 40, 100, 10, 10, 10, 10, 10]))
        assert profile.value_area_low == pytest.approx(3.25)
        assert profile.value_area_high == pytest.approx(5.05)

    def test_reaches_past_empty_bucket_for_heavy_neighbour(self):
        # Buckets [9, 0, 10, 1, 1]: buckets 0-2 hold 19 >= 14.28, no need to go up
        profile = volume_profile(make_ladder([9, 0, 10, 1, 1]), levels=5)
        assert profile.poc == pytest.approx(3.0)
        assert profile.value_area_low == pytest.approx(1.4)
        assert profile.value_area_high == pytest.approx(3.0)

    def test_value_area_is_minimal(self):
        profile = volume_profile(make_ladder([1, 1, 1, 30, 50, 1, 1, 1, 1, 1]))
        # 50 + 30 = 80 of 88 already exceeds 68%
        assert profile.value_area_low == pytest.approx(4.15)
        assert profile.value_area_high == pytest.approx(5.05)

    def test_zero_volume_value_area_is_poc(self):
        profile = volume_profile(make_ladder([0] * 10))
        assert profile.value_area_low == profile.poc == profile.value_area_high

    def test_poc_tie_breaks_to_lowest_price(self):
        profile = volume_profile(make_ladder([5, 60, 5, 5, 5, 5, 5, 60, 5, 5]))
        assert profile.poc == pytest.approx(profile.levels[1].price)


class TestVolumeProfileEdgeCases:
    """Flat and empty series."""

    def test_empty_series(self):
        assert volume_profile([]) == EMPTY_VOLUME_PROFILE

    def test_flat_series_single_level(self):
        profile = volume_profile(generate_flat_ohlcv(30, price=50.0, volume=1000.0))
        assert len(profile.levels) == 1
        assert profile.levels[0].percentage == 100.0
        assert profile.poc == 50.0
        assert profile.value_area_low == profile.value_area_high == 50.0
        assert profile.total_volume == 30000.0

    def test_flat_series_zero_volume(self):
        profile = volume_profile(generate_flat_ohlcv(5, volume=0.0))
        assert profile.levels[0].percentage == 0.0
        assert profile.total_volume == 0.0

    def test_zero_volume_spread_series(self):
        profile = volume_profile(make_ladder([0] * 10))
        assert profile.total_volume == 0.0
        assert all(level.percentage == 0.0 for level in profile.levels)

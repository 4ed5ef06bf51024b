"""
Volume Indicators Module

Implements Volume Profile (Volume-at-Price): a histogram of traded volume
across equal-width price buckets, with the Point of Control (POC) and the
Value Area around it.
"""

import logging
from typing import List, Tuple

import numpy as np

from marketlens.shared.models.data import Series, series_to_frame
from marketlens.shared.models.indicators import VolumeLevel, VolumeProfile, EMPTY_VOLUME_PROFILE
from marketlens.shared.config.defaults import THRESHOLDS

logger = logging.getLogger(__name__)


def _value_area_bounds(volume_by_bin: List[float], poc_idx: int, target_volume: float) -> Tuple[int, int]:
    """
    Smallest bucket window [low, high] around the POC enclosing target_volume.

    Among windows of equal width the one with more volume wins, then the
    lower one. Falls back to every bucket if no window reaches the target.
    """
    levels = len(volume_by_bin)
    prefix = np.concatenate(([0.0], np.cumsum(volume_by_bin)))

    for width in range(1, levels + 1):
        best = None
        best_volume = -1.0
        for low in range(max(0, poc_idx - width + 1), min(poc_idx, levels - width) + 1):
            high = low + width - 1
            enclosed = float(prefix[high + 1] - prefix[low])
            if enclosed >= target_volume and enclosed > best_volume:
                best, best_volume = (low, high), enclosed
        if best is not None:
            return best

    return 0, levels - 1


def volume_profile(
    series: Series,
    levels: int = 10,
    value_area_pct: float = THRESHOLDS.value_area_pct
) -> VolumeProfile:
    """
    Compute Volume Profile (Volume at Price).

    Process:
    1. Divide [min(low), max(high)] into `levels` equal-width buckets
    2. Add each candle's whole volume to the bucket containing its close
       (the top edge belongs to the last bucket)
    3. POC = highest-volume bucket, ties broken by lowest price
    4. Value area = the fewest contiguous buckets containing the POC that
       hold at least `value_area_pct` of total volume (ties: more enclosed
       volume, then lower price)

    Args:
        series: Candle series, oldest first
        levels: Number of price buckets (default 10)
        value_area_pct: Share of total volume the value area must enclose

    Returns:
        VolumeProfile with levels sorted ascending by bucket midpoint. A flat
        series yields a single bucket; an empty series yields no levels.

    Raises:
        ValueError: If levels is not positive
    """
    if levels <= 0:
        raise ValueError(f"levels must be a positive integer, got {levels}")

    df = series_to_frame(series)
    if df.empty:
        return EMPTY_VOLUME_PROFILE

    min_price = float(df['low'].min())
    max_price = float(df['high'].max())
    volumes = df['volume'].to_numpy(dtype=float)

    if min_price == max_price:
        total_volume = float(volumes.sum())
        level = VolumeLevel(
            price=min_price,
            volume=total_volume,
            percentage=100.0 if total_volume > 0 else 0.0,
        )
        return VolumeProfile(
            levels=(level,),
            poc=min_price,
            value_area_high=min_price,
            value_area_low=min_price,
            total_volume=total_volume,
        )

    bin_edges = np.linspace(min_price, max_price, levels + 1)
    bin_centers = (bin_edges[:-1] + bin_edges[1:]) / 2
    bucket_width = (max_price - min_price) / levels

    closes = df['close'].to_numpy(dtype=float)
    bucket_idx = np.clip(np.floor((closes - min_price) / bucket_width).astype(int), 0, levels - 1)
    volume_by_bin = [float(v) for v in np.bincount(bucket_idx, weights=volumes, minlength=levels)]

    # Summed in bucket order so the levels add up to the total exactly
    total_volume = sum(volume_by_bin)

    poc_idx = int(np.argmax(volume_by_bin))

    low_idx, high_idx = _value_area_bounds(volume_by_bin, poc_idx, total_volume * value_area_pct)

    profile_levels = tuple(
        VolumeLevel(
            price=float(bin_centers[i]),
            volume=volume_by_bin[i],
            percentage=(volume_by_bin[i] / total_volume * 100) if total_volume > 0 else 0.0,
        )
        for i in range(levels)
    )

    profile = VolumeProfile(
        levels=profile_levels,
        poc=float(bin_centers[poc_idx]),
        value_area_high=float(bin_centers[high_idx]),
        value_area_low=float(bin_centers[low_idx]),
        total_volume=total_volume,
    )

    logger.debug(
        "Volume Profile: POC @ %.2f, VA: %.2f-%.2f, total volume %.2f",
        profile.poc, profile.value_area_low, profile.value_area_high, total_volume,
    )

    return profile

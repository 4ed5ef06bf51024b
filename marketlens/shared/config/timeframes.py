"""
Supported analysis time intervals.

Maps each candle interval to its display label, duration and trading horizon
category.
"""
from dataclasses import dataclass
from typing import Dict, List, Literal

TimeInterval = Literal['5m', '15m', '30m', '1h', '4h', '1d', '1w']
Category = Literal['Short-term', 'Medium-term', 'Long-term']


@dataclass(frozen=True)
class TimeIntervalConfig:
    """Display and duration metadata for one interval."""
    label: str
    seconds: int
    category: Category
    use_case: str


TIME_INTERVALS: Dict[str, TimeIntervalConfig] = {
    '5m': TimeIntervalConfig('5 Minutes', 300, 'Short-term', 'Scalping, ultra-short-term'),
    '15m': TimeIntervalConfig('15 Minutes', 900, 'Short-term', 'Scalping, short-term trades'),
    '30m': TimeIntervalConfig('30 Minutes', 1800, 'Medium-term', 'Swing trading, intraday'),
    '1h': TimeIntervalConfig('1 Hour', 3600, 'Medium-term', 'Swing trading, intraday'),
    '4h': TimeIntervalConfig('4 Hours', 14400, 'Medium-term', 'Swing trading, daily analysis'),
    '1d': TimeIntervalConfig('1 Day', 86400, 'Long-term', 'Position trading, investing'),
    '1w': TimeIntervalConfig('1 Week', 604800, 'Long-term', 'Position trading, long-term investing'),
}

SHORT_TIMEFRAMES = ('5m', '15m')
MEDIUM_TIMEFRAMES = ('30m', '1h', '4h')


def get_time_interval_config(interval: str) -> TimeIntervalConfig:
    """
    Look up the configuration for an interval.

    Raises:
        ValueError: If the interval is not supported
    """
    config = TIME_INTERVALS.get(interval)
    if config is None:
        raise ValueError(f"Unsupported time interval: {interval}")
    return config


def format_time_interval(interval: str) -> str:
    return get_time_interval_config(interval).label


def get_granularity(interval: str) -> int:
    """Interval duration in seconds."""
    return get_time_interval_config(interval).seconds


def get_intervals_by_category() -> Dict[str, List[str]]:
    categories: Dict[str, List[str]] = {'Short-term': [], 'Medium-term': [], 'Long-term': []}
    for interval, config in TIME_INTERVALS.items():
        categories[config.category].append(interval)
    return categories

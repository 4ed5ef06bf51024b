"""
Logging utilities for indicator analysis.

Provides consistent logging helpers for timing and summarising indicator
runs across components.
"""

import time
from typing import Any, Dict, Optional

from loguru import logger


def log_timing(
    operation_name: str,
    duration_ms: float,
    symbol: Optional[str] = None,
    level: str = "DEBUG"
) -> None:
    """
    Log timing information for performance monitoring.

    Args:
        operation_name: Name of the operation being timed
        duration_ms: Duration in milliseconds
        symbol: Optional symbol context
        level: Log level
    """
    log_func = getattr(logger, level.lower(), logger.debug)

    symbol_str = f" [{symbol}]" if symbol else ""

    if duration_ms < 100:
        emoji = "⚡"  # Fast
    elif duration_ms < 1000:
        emoji = "⏱️"  # Normal
    else:
        emoji = "🐌"  # Slow

    log_func(f"{emoji} {operation_name}{symbol_str}: {duration_ms:.0f}ms")


def log_signal_summary(
    candle_count: int,
    signals: Dict[str, str],
    values: Optional[Dict[str, Any]] = None,
    level: str = "INFO"
) -> None:
    """
    Log the outcome of one indicator analysis.

    Args:
        candle_count: Number of candles analysed
        signals: Per-indicator tags including 'overall'
        values: Optional headline numeric values (floats are shortened)
        level: Log level
    """
    log_func = getattr(logger, level.lower(), logger.info)

    overall = signals.get('overall', 'neutral')
    tags = ", ".join(f"{name}={tag}" for name, tag in signals.items() if name != 'overall')
    log_func(f"📊 Indicator analysis over {candle_count} candles: {overall.upper()} ({tags})")

    if values:
        for key, value in values.items():
            if isinstance(value, float):
                log_func(f"   └─ {key}: {value:.4f}")
            else:
                log_func(f"   └─ {key}: {value}")


class TimingContext:
    """Context manager for timing operations."""

    def __init__(self, operation_name: str, symbol: Optional[str] = None):
        self.operation_name = operation_name
        self.symbol = symbol
        self.start_time = None
        self.duration_ms = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.duration_ms = (time.perf_counter() - self.start_time) * 1000
        log_timing(self.operation_name, self.duration_ms, self.symbol)
        return False  # Don't suppress exceptions


def time_operation(operation_name: str, symbol: Optional[str] = None) -> TimingContext:
    """
    Context manager for timing operations.

    Usage:
        with time_operation("analyze_indicators", "BTC-USD"):
            # ... operation ...
    """
    return TimingContext(operation_name, symbol)

"""Fibonacci Extension and Retracement Calculator

Extensions project price targets beyond a completed swing: given the first
leg (swing1_start -> swing1_end) and the retracement endpoint (swing2_end),
each ratio of the first leg's range is added in the first leg's direction,
anchored at the retracement endpoint.

Retracements measure pullback zones inside a swing range.

Treat these as "monitored zones" rather than predictive levels; they work
because many participants watch them.
"""

from typing import Dict, List

from loguru import logger

from marketlens.shared.models.indicators import FibonacciExtensions, FibonacciTarget

# Extension ratios keyed by display label
FIB_EXTENSION_RATIOS = {
    "61.8%": 0.618,
    "100%": 1.0,
    "161.8%": 1.618,
    "261.8%": 2.618,
}

FIB_RETRACEMENT_RATIOS = {
    "0%": 0.0,
    "23.6%": 0.236,
    "38.2%": 0.382,
    "50%": 0.5,
    "61.8%": 0.618,
    "100%": 1.0,
}


def classify_significance(ratio: float) -> str:
    """
    Tag an extension ratio by how far it projects.

    - ratio <= 1.0: 'target'
    - 1.0 < ratio < 2.0: 'strong_resistance'
    - ratio >= 2.0: 'extreme_extension'
    """
    if ratio <= 1.0:
        return 'target'
    if ratio < 2.0:
        return 'strong_resistance'
    return 'extreme_extension'


def fibonacci_extensions(
    swing1_start: float,
    swing1_end: float,
    swing2_end: float,
) -> FibonacciExtensions:
    """
    Calculate Fibonacci extension targets from two swings.

    For an UPTREND first leg (swing1_end > swing1_start):
      price = swing2_end + ratio * range, targets sorted ascending
    Otherwise (DOWNTREND):
      price = swing2_end - ratio * range, targets sorted descending

    Args:
        swing1_start: Start price of the first leg
        swing1_end: End price of the first leg
        swing2_end: Retracement endpoint the projection is anchored at

    Returns:
        FibonacciExtensions with all four levels, significance-tagged
        targets and the continuation projection
    """
    is_uptrend = swing1_end > swing1_start
    swing_range = abs(swing1_end - swing1_start)
    direction = 1.0 if is_uptrend else -1.0

    levels: Dict[str, float] = {}
    targets: List[FibonacciTarget] = []

    for label, ratio in FIB_EXTENSION_RATIOS.items():
        price = swing2_end + direction * ratio * swing_range
        levels[label] = price
        targets.append(
            FibonacciTarget(level=label, price=price, significance=classify_significance(ratio))
        )

    targets.sort(key=lambda t: t.price, reverse=not is_uptrend)
    projection = 'uptrend_continuation' if is_uptrend else 'downtrend_continuation'

    logger.debug(
        f"Fib extensions ({projection}): range {swing_range:.4f} from {swing2_end:.4f}"
    )

    return FibonacciExtensions(levels=levels, targets=tuple(targets), projection=projection)


def fibonacci_retracement(price_a: float, price_b: float) -> Dict[str, float]:
    """
    Calculate Fibonacci retracement levels between two prices.

    Argument order does not matter: levels are measured up from the lower
    price, so '0%' is the low and '100%' the high.

    Returns:
        Dict mapping level label to price
    """
    high = max(price_a, price_b)
    low = min(price_a, price_b)
    range_size = high - low

    levels = {label: low + range_size * ratio for label, ratio in FIB_RETRACEMENT_RATIOS.items()}
    levels["100%"] = high
    return levels

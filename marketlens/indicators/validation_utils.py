"""
OHLCV Series Validation Utilities

Provides centralized input validation for the indicator engine so malformed
candles fail loudly at the boundary instead of propagating NaN through the
calculations. Short series are NOT validation failures; indicators degrade to
neutral defaults on their own.
"""

from typing import Dict, List
import logging

import numpy as np
import pandas as pd

from marketlens.shared.models.data import OHLCV_COLUMNS, Series, series_to_frame
from marketlens.shared.utils.error_policy import ValidationError, raise_for_errors

logger = logging.getLogger(__name__)

PRICE_COLUMNS = ['open', 'high', 'low', 'close']

# Share of zero-volume candles above which a warning is attached to the report
ZERO_VOLUME_WARN_PCT = 10.0


def validate_ohlcv(series: Series, raise_on_error: bool = True) -> Dict[str, object]:
    """
    Validate an OHLCV series before indicator calculation.

    Checks:
    - At least one candle and all OHLCV columns present
    - Open/high/low/close finite and strictly positive
    - Volume finite and non-negative
    - Candle ordering: high >= max(open, close, low), low <= min(open, close, high)
    - Timestamps finite integers, strictly increasing

    Args:
        series: Candle records or DataFrame with OHLCV columns, oldest first
        raise_on_error: If True, raise ValidationError; else return the report

    Returns:
        dict with validation results:
            - valid: bool indicating if all checks passed
            - errors: list of error messages
            - warnings: list of warning messages

    Raises:
        ValidationError: If validation fails and raise_on_error=True
    """
    result: Dict[str, object] = {"valid": True, "errors": [], "warnings": []}
    errors: List[str] = result["errors"]  # type: ignore[assignment]
    warnings: List[str] = result["warnings"]  # type: ignore[assignment]

    df = series_to_frame(series)

    missing_cols = [col for col in OHLCV_COLUMNS if col not in df.columns]
    if missing_cols:
        errors.append(f"Missing required columns: {missing_cols}")
    elif len(df) < 1:
        errors.append("Series must contain at least 1 candle")

    # Early exit if there is nothing to check row by row
    if errors:
        result["valid"] = False
        if raise_on_error:
            raise_for_errors(errors)
        return result

    numeric = df[OHLCV_COLUMNS].apply(pd.to_numeric, errors='coerce').astype(float)

    for col in PRICE_COLUMNS:
        values = numeric[col]
        non_finite = (~np.isfinite(values)).sum()
        if non_finite > 0:
            errors.append(f"Column '{col}' has {non_finite} NaN or infinite values")
        non_positive = (np.isfinite(values) & (values <= 0)).sum()
        if non_positive > 0:
            errors.append(f"Column '{col}' has {non_positive} non-positive values")

    volume = numeric['volume']
    non_finite_volume = (~np.isfinite(volume)).sum()
    if non_finite_volume > 0:
        errors.append(f"Column 'volume' has {non_finite_volume} NaN or infinite values")
    negative_volume = (volume < 0).sum()
    if negative_volume > 0:
        errors.append(f"Found {negative_volume} negative volume values")

    zero_volume = (volume == 0).sum()
    if zero_volume > 0:
        zero_pct = (zero_volume / len(df)) * 100
        if zero_pct > ZERO_VOLUME_WARN_PCT:
            warnings.append(f"Found {zero_volume} zero volume bars ({zero_pct:.1f}%)")

    # NaN comparisons are False, so non-finite rows only count above
    high_violations = (
        numeric['high'] < numeric[['open', 'close', 'low']].max(axis=1)
    ).sum()
    if high_violations > 0:
        errors.append(f"Found {high_violations} candles with high below open/close/low")
    low_violations = (
        numeric['low'] > numeric[['open', 'close', 'high']].min(axis=1)
    ).sum()
    if low_violations > 0:
        errors.append(f"Found {low_violations} candles with low above open/close/high")

    timestamps = numeric['timestamp']
    if (~np.isfinite(timestamps)).any():
        errors.append("Timestamps must be finite numbers")
    else:
        fractional = (timestamps % 1 != 0).sum()
        if fractional > 0:
            errors.append(f"Timestamps must be integers ({fractional} fractional values)")
        non_increasing = (timestamps.diff().iloc[1:] <= 0).sum()
        if non_increasing > 0:
            errors.append(f"Timestamps not strictly increasing at {non_increasing} positions")

    if errors:
        result["valid"] = False
        logger.debug("OHLCV validation failed: %s", "; ".join(errors))

    if warnings:
        logger.info("OHLCV validation warnings: %s", "; ".join(warnings))

    if raise_on_error:
        raise_for_errors(errors)

    return result


def validate_series(series: Series) -> Series:
    """
    Validate a candle series and return it unchanged.

    Raises:
        ValidationError: If any candle is malformed or the series is empty
    """
    validate_ohlcv(series, raise_on_error=True)
    return series


__all__ = ['validate_ohlcv', 'validate_series', 'ValidationError']

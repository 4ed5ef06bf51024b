"""
Error policy - malformed input fails loudly, short input never does.

Two outcomes only:
- Malformed OHLCV data (non-finite or non-positive prices, negative volume,
  broken candle ordering, non-increasing timestamps) raises ValidationError
  and is surfaced to the caller unchanged.
- Short-but-valid data is a normal runtime condition. Every indicator returns
  its documented neutral default instead of raising, so presentation and
  narration layers can always render something for brand-new assets.
"""

from typing import List, Optional


class ValidationError(ValueError):
    """Raised when OHLCV data or a candle record fails validation checks."""

    def __init__(self, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.errors: List[str] = list(errors) if errors else [message]


def raise_for_errors(errors: List[str]) -> None:
    """
    Raise a single ValidationError summarising all collected errors.

    Raises:
        ValidationError: If errors is non-empty
    """
    if errors:
        raise ValidationError("; ".join(errors), errors=errors)

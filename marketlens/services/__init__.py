"""Services package - indicator analysis services for MarketLens."""

from marketlens.services.indicator_service import (
    IndicatorService,
    analyze_indicators,
)

__all__ = [
    "IndicatorService",
    "analyze_indicators",
]

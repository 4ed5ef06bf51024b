"""
Price-point planning models.

Reference entry, stop and target levels derived from a candle series. These
are descriptive levels for presentation and narration, not orders.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Tuple

StopMethod = Literal['percentage', 'atr', 'support']


@dataclass(frozen=True)
class SupportResistance:
    """
    Pivot-based support and resistance levels.

    Attributes:
        support: Pivot lows, nearest-from-above first (descending)
        resistance: Pivot highs, ascending
    """
    support: Tuple[float, ...] = ()
    resistance: Tuple[float, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {'support': list(self.support), 'resistance': list(self.resistance)}


@dataclass(frozen=True)
class EntryPoints:
    """Conservative / moderate / aggressive entry prices with their methods."""
    conservative: float
    moderate: float
    aggressive: float
    methods: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'conservative': self.conservative,
            'moderate': self.moderate,
            'aggressive': self.aggressive,
            'methods': dict(self.methods),
        }


@dataclass(frozen=True)
class StopLoss:
    """
    Stop loss level.

    Attributes:
        price: Stop price
        percentage: Distance below entry as a percentage of entry
        method: How the stop was placed
        explanation: Human-readable placement rationale
    """
    price: float
    percentage: float
    method: StopMethod
    explanation: str

    def __post_init__(self):
        if not self.explanation:
            raise ValueError("Stop loss explanation cannot be empty")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'price': self.price,
            'percentage': self.percentage,
            'method': self.method,
            'explanation': self.explanation,
        }


@dataclass(frozen=True)
class ProfitTargets:
    """Three profit targets and the first target's risk:reward ratio."""
    target1: float
    target2: float
    target3: float
    risk_reward_ratio: float
    methods: Dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target1': self.target1,
            'target2': self.target2,
            'target3': self.target3,
            'riskRewardRatio': self.risk_reward_ratio,
            'methods': dict(self.methods),
        }


@dataclass(frozen=True)
class PriceAnalysis:
    """Complete price-point analysis for one series and horizon."""
    entry_points: EntryPoints
    stop_loss: StopLoss
    profit_targets: ProfitTargets
    time_horizon: str
    risk_assessment: str
    confidence: float

    def __post_init__(self):
        if not 0 <= self.confidence <= 1:
            raise ValueError(f"Confidence must be 0-1, got {self.confidence}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'entryPoints': self.entry_points.to_dict(),
            'stopLoss': self.stop_loss.to_dict(),
            'profitTargets': self.profit_targets.to_dict(),
            'timeHorizon': self.time_horizon,
            'riskAssessment': self.risk_assessment,
            'confidence': self.confidence,
        }

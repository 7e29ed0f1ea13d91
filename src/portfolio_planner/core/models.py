"""Value types for the allocation engine. Never persisted directly."""
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

# Currency units of floating-point drift absorbed when comparing totals.
TOLERANCE = 0.01


class ThresholdKind(str, Enum):
    """How the safe-savings floor is expressed."""

    PERCENTAGE = "percentage"
    FIXED = "fixed"


@dataclass(frozen=True)
class SavingsThreshold:
    """Safe-savings threshold: a percentage of the investment or a fixed amount."""

    kind: ThresholdKind
    value: float


@dataclass(frozen=True)
class Allocation:
    """Money assigned to each category of a portfolio.

    Stocks are keyed by asset id; gold and savings are explicit fields so no
    key of ``stock_allocations`` has special meaning.
    """

    stock_allocations: Mapping[str, float] = field(default_factory=dict)
    gold_allocation: float = 0.0
    savings_allocation: float = 0.0

    @property
    def stocks_total(self) -> float:
        return sum(self.stock_allocations.values())


@dataclass(frozen=True)
class Distribution:
    """Category totals as percentages of the allocated total."""

    savings: float
    gold: float
    stocks: float


@dataclass(frozen=True)
class PredictedReturns:
    """Annual return rates in percent (12.5 means 12.5%)."""

    stocks: dict[str, float]
    gold: float
    savings: float


@dataclass(frozen=True)
class AbsoluteReturns:
    """Projected one-year gain per category, in currency units."""

    stocks: dict[str, float]
    gold: float
    savings: float
    total: float


@dataclass(frozen=True)
class ReallocationResult:
    """Outcome of a stock-selection change."""

    stock_allocations: dict[str, float]
    savings_allocation: float
    added_stock_ids: list[str]
    removed_stock_ids: list[str]
    reallocated_amount: float

    @property
    def added_count(self) -> int:
        return len(self.added_stock_ids)

    @property
    def removed_count(self) -> int:
        return len(self.removed_stock_ids)


@dataclass(frozen=True)
class AdjustmentResult:
    """A validated allocation and the figures derived from it."""

    allocation: Allocation
    total_value: float
    unallocated_amount: float
    predicted_returns: PredictedReturns

    @property
    def has_unallocated(self) -> bool:
        return self.unallocated_amount > TOLERANCE

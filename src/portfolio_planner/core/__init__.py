"""Portfolio allocation engine.

Pure, synchronous functions over in-memory values. Nothing here touches the
database or the network; services load state, call into this package, and
persist the result.
"""
from portfolio_planner.core.adjustment import (GOLD_KEY, SAVINGS_KEY,
                                               split_gold_key,
                                               validate_adjustment,
                                               validate_investment_change)
from portfolio_planner.core.arithmetic import (allocation_distribution,
                                               allocation_total,
                                               disposable_amount, distribution,
                                               safe_savings, total_allocated,
                                               unallocated_amount)
from portfolio_planner.core.exceptions import (AllocationError,
                                               BelowSafeSavingsFloor,
                                               InvalidAllocation,
                                               InvestmentReductionError,
                                               OverAllocated)
from portfolio_planner.core.models import (TOLERANCE, AbsoluteReturns,
                                           AdjustmentResult, Allocation,
                                           Distribution, PredictedReturns,
                                           ReallocationResult,
                                           SavingsThreshold, ThresholdKind)
from portfolio_planner.core.reallocation import (initial_allocations,
                                                 reallocate_for_selection,
                                                 unique_ids)
from portfolio_planner.core.returns import (DEFAULT_STOCK_RETURN, GOLD_RETURN,
                                            absolute_returns,
                                            predicted_returns,
                                            projected_value,
                                            stock_return_rate,
                                            total_projected_return)

__all__ = [
    "GOLD_KEY",
    "SAVINGS_KEY",
    "TOLERANCE",
    "DEFAULT_STOCK_RETURN",
    "GOLD_RETURN",
    "AbsoluteReturns",
    "AdjustmentResult",
    "Allocation",
    "AllocationError",
    "BelowSafeSavingsFloor",
    "Distribution",
    "InvalidAllocation",
    "InvestmentReductionError",
    "OverAllocated",
    "PredictedReturns",
    "ReallocationResult",
    "SavingsThreshold",
    "ThresholdKind",
    "absolute_returns",
    "allocation_distribution",
    "allocation_total",
    "disposable_amount",
    "distribution",
    "initial_allocations",
    "predicted_returns",
    "projected_value",
    "reallocate_for_selection",
    "safe_savings",
    "split_gold_key",
    "stock_return_rate",
    "total_allocated",
    "total_projected_return",
    "unallocated_amount",
    "unique_ids",
    "validate_adjustment",
    "validate_investment_change",
]

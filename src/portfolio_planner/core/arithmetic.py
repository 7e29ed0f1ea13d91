"""Pure bookkeeping over allocations: floors, totals and percentage splits."""
from collections.abc import Mapping

from portfolio_planner.core.models import (Allocation, Distribution,
                                           SavingsThreshold, ThresholdKind)


def safe_savings(investment: float, threshold: SavingsThreshold) -> float:
    """Minimum amount that must stay in savings.

    A percentage threshold scales with the investment; a fixed threshold is
    returned as-is regardless of the investment.
    """
    if threshold.kind == ThresholdKind.PERCENTAGE:
        return investment * threshold.value / 100
    return threshold.value


def total_allocated(
    stock_allocations: Mapping[str, float],
    gold_allocation: float,
    savings_allocation: float,
) -> float:
    """Sum of every stock allocation plus gold and savings."""
    return sum(stock_allocations.values()) + gold_allocation + savings_allocation


def distribution(
    stock_allocations: Mapping[str, float],
    gold_allocation: float,
    savings_allocation: float,
) -> Distribution:
    """Share of the allocated total held by each category, in percent."""
    total = total_allocated(stock_allocations, gold_allocation, savings_allocation)
    if total == 0:
        return Distribution(savings=0.0, gold=0.0, stocks=0.0)
    stocks_total = sum(stock_allocations.values())
    return Distribution(
        savings=savings_allocation / total * 100,
        gold=gold_allocation / total * 100,
        stocks=stocks_total / total * 100,
    )


def disposable_amount(investment: float, floor: float) -> float:
    """Money available for stocks and gold once the safe-savings floor is set aside."""
    return investment - floor


def allocation_total(allocation: Allocation) -> float:
    return total_allocated(
        allocation.stock_allocations,
        allocation.gold_allocation,
        allocation.savings_allocation,
    )


def allocation_distribution(allocation: Allocation) -> Distribution:
    return distribution(
        allocation.stock_allocations,
        allocation.gold_allocation,
        allocation.savings_allocation,
    )


def unallocated_amount(investment: float, allocation: Allocation) -> float:
    """Investment not assigned to any category. May be negative after drift."""
    return investment - allocation_total(allocation)

"""Validation of full reallocation requests and investment edits."""
import math
from collections.abc import Mapping

from portfolio_planner.core.arithmetic import (allocation_total,
                                               safe_savings,
                                               unallocated_amount)
from portfolio_planner.core.exceptions import (BelowSafeSavingsFloor,
                                               InvalidAllocation,
                                               InvestmentReductionError,
                                               OverAllocated)
from portfolio_planner.core.models import (TOLERANCE, AdjustmentResult,
                                           Allocation, SavingsThreshold)
from portfolio_planner.core.returns import predicted_returns

GOLD_KEY = "gold"
SAVINGS_KEY = "savings"


def split_gold_key(
    proposed: Mapping[str, float], savings: float
) -> Allocation:
    """Build an Allocation from a flat mapping that may carry a ``"gold"`` entry.

    Request payloads put gold next to the stocks; inside the engine gold is
    its own field.
    """
    stocks = {key: value for key, value in proposed.items() if key != GOLD_KEY}
    return Allocation(
        stock_allocations=stocks,
        gold_allocation=proposed.get(GOLD_KEY, 0.0),
        savings_allocation=savings,
    )


def validate_adjustment(
    proposal: Allocation,
    investment: float,
    threshold: SavingsThreshold,
    savings_rate: float,
    rates: Mapping[str, float] | None = None,
) -> AdjustmentResult:
    """Check a proposed allocation against the profile and derive its figures.

    Checks run in a fixed order: negative or non-finite amounts, the
    safe-savings floor, then the investment ceiling. A total below the investment is accepted;
    the rest is reported as ``unallocated_amount`` and left unassigned.

    Raises:
        InvalidAllocation: An amount is negative, NaN or infinite.
        BelowSafeSavingsFloor: Savings are under the computed floor.
        OverAllocated: The total exceeds the investment by more than TOLERANCE.
    """
    amounts = [
        *proposal.stock_allocations.items(),
        (GOLD_KEY, proposal.gold_allocation),
        (SAVINGS_KEY, proposal.savings_allocation),
    ]
    for key, value in amounts:
        if not math.isfinite(value) or value < 0:
            raise InvalidAllocation(key, value)

    floor = safe_savings(investment, threshold)
    if proposal.savings_allocation < floor:
        raise BelowSafeSavingsFloor(floor, proposal.savings_allocation)

    total = allocation_total(proposal)
    if total > investment + TOLERANCE:
        raise OverAllocated(total, investment)

    allocation = Allocation(
        stock_allocations=dict(proposal.stock_allocations),
        gold_allocation=proposal.gold_allocation,
        savings_allocation=proposal.savings_allocation,
    )
    return AdjustmentResult(
        allocation=allocation,
        total_value=total,
        unallocated_amount=investment - total,
        predicted_returns=predicted_returns(allocation, savings_rate, rates),
    )


def validate_investment_change(
    current_investment: float,
    new_investment: float,
    current_allocation: Allocation,
) -> float:
    """Allow an investment decrease only up to the current unallocated amount.

    Must be evaluated against the allocation as stored before the profile is
    changed.

    Returns:
        The current unallocated amount.

    Raises:
        InvestmentReductionError: The decrease exceeds the unallocated amount.
    """
    unallocated = unallocated_amount(current_investment, current_allocation)
    reduction = current_investment - new_investment
    if reduction > 0 and reduction > unallocated:
        raise InvestmentReductionError(reduction, unallocated)
    return unallocated

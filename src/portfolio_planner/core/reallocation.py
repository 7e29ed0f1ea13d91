"""Stock-selection changes: where money tied to removed stocks goes."""
from collections.abc import Iterable, Mapping, Sequence

from portfolio_planner.core.models import ReallocationResult


def unique_ids(stock_ids: Iterable[str]) -> list[str]:
    """Drop duplicate ids, keeping first-seen order."""
    return list(dict.fromkeys(stock_ids))


def initial_allocations(stock_ids: Iterable[str]) -> dict[str, float]:
    """Zero allocation for every stock picked during onboarding."""
    return {stock_id: 0.0 for stock_id in unique_ids(stock_ids)}


def reallocate_for_selection(
    old_selection: Sequence[str],
    old_allocations: Mapping[str, float],
    savings_allocation: float,
    new_selection: Sequence[str],
) -> ReallocationResult:
    """Apply a new stock selection to an existing allocation.

    Stocks kept in the selection keep their amount, new stocks start at zero,
    and the amounts of removed stocks move to savings. Gold is not touched.
    Inputs are never mutated.

    Args:
        old_selection: Stock ids currently selected.
        old_allocations: Current stock id -> amount mapping.
        savings_allocation: Current savings amount.
        new_selection: Requested stock ids.

    Returns:
        Allocation keyed by exactly the new selection, the new savings amount,
        and the added/removed ids.
    """
    new_ids = unique_ids(new_selection)
    old_ids = unique_ids(old_selection)
    new_set = set(new_ids)
    old_set = set(old_ids)

    removed = [stock_id for stock_id in old_ids if stock_id not in new_set]
    added = [stock_id for stock_id in new_ids if stock_id not in old_set]

    allocations = {
        stock_id: old_allocations.get(stock_id, 0.0) if stock_id in old_set else 0.0
        for stock_id in new_ids
    }
    # Stray allocation keys outside the old selection never carry over, even
    # when re-selected; their money goes to savings.
    dropped = [stock_id for stock_id in old_allocations if stock_id not in old_set]
    reallocated = sum(old_allocations.get(stock_id, 0.0) for stock_id in removed + dropped)

    return ReallocationResult(
        stock_allocations=allocations,
        savings_allocation=savings_allocation + reallocated,
        added_stock_ids=added,
        removed_stock_ids=removed,
        reallocated_amount=reallocated,
    )

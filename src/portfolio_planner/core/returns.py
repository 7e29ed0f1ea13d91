"""Projected annual returns for an allocation.

Rates are placeholders, not derived from market history: every stock that is
not listed in the rate table earns ``DEFAULT_STOCK_RETURN``. Callers can pass
their own table to ``stock_return_rate`` / ``predicted_returns``.
"""
from collections.abc import Mapping

from portfolio_planner.core.models import (AbsoluteReturns, Allocation,
                                           PredictedReturns)

DEFAULT_STOCK_RETURN = 12.5
GOLD_RETURN = 8.0

# Per-asset overrides, keyed by asset id.
HISTORICAL_STOCK_RETURNS: dict[str, float] = {}


def stock_return_rate(
    stock_id: str,
    rates: Mapping[str, float] | None = None,
    default: float = DEFAULT_STOCK_RETURN,
) -> float:
    """Annual return rate for a stock, falling back to ``default``."""
    table = HISTORICAL_STOCK_RETURNS if rates is None else rates
    return table.get(stock_id, default)


def gold_return_rate() -> float:
    return GOLD_RETURN


def predicted_returns(
    allocation: Allocation,
    savings_rate: float,
    rates: Mapping[str, float] | None = None,
) -> PredictedReturns:
    """Rates for every stock in the allocation, gold, and savings.

    Args:
        allocation: Current or proposed allocation; only its stock ids are used.
        savings_rate: The profile's annual savings interest rate, passed through.
        rates: Optional per-stock rate table overriding the built-in one.
    """
    return PredictedReturns(
        stocks={
            stock_id: stock_return_rate(stock_id, rates)
            for stock_id in allocation.stock_allocations
        },
        gold=gold_return_rate(),
        savings=savings_rate,
    )


def _gain(amount: float, rate: float) -> float:
    return amount * rate / 100


def absolute_returns(
    allocation: Allocation, predicted: PredictedReturns
) -> AbsoluteReturns:
    """One-year gain per category; stocks missing from ``predicted`` earn nothing."""
    stocks = {
        stock_id: _gain(amount, predicted.stocks.get(stock_id, 0.0))
        for stock_id, amount in allocation.stock_allocations.items()
    }
    gold = _gain(allocation.gold_allocation, predicted.gold)
    savings = _gain(allocation.savings_allocation, predicted.savings)
    return AbsoluteReturns(
        stocks=stocks,
        gold=gold,
        savings=savings,
        total=sum(stocks.values()) + gold + savings,
    )


def total_projected_return(
    allocation: Allocation, predicted: PredictedReturns
) -> float:
    return absolute_returns(allocation, predicted).total


def projected_value(amount: float, rate: float, years: int = 1) -> float:
    """Value of ``amount`` after compounding ``rate`` percent for ``years`` years."""
    return amount * (1 + rate / 100) ** years

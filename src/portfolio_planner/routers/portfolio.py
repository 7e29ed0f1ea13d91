"""Portfolio overview, adjustment form data and bulk adjustments."""
from fastapi import APIRouter

from portfolio_planner.deps import PortfolioServiceDep
from portfolio_planner.schemas import (AdjustmentData, AdjustmentOut,
                                       AdjustPortfolioIn, PortfolioOverview)

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("/{user_id}", response_model=PortfolioOverview)
async def get_portfolio(user_id: int, service: PortfolioServiceDep) -> PortfolioOverview:
    """Allocations, distribution, unallocated amount, market prices and projected returns.

    Prices fall back to catalog reference prices when live quotes are unavailable;
    ``is_live_price`` tells which one was used.
    """
    return await service.overview(user_id)


@router.get("/{user_id}/predictions", response_model=AdjustmentData)
def get_adjustment_data(user_id: int, service: PortfolioServiceDep) -> AdjustmentData:
    """Everything the adjustment form needs: floor, disposable amount, rates and returns."""
    return service.adjustment_data(user_id)


@router.put("/{user_id}/adjust", response_model=AdjustmentOut)
def adjust_portfolio(
    user_id: int, data: AdjustPortfolioIn, service: PortfolioServiceDep
) -> AdjustmentOut:
    """Replace the whole allocation.

    ``proposed_allocations`` maps stock ids (and optionally ``"gold"``) to amounts.
    Rejected with 400 on negative amounts, savings below the floor, or a total
    above the investment.
    """
    return service.adjust(user_id, data)

"""Stock selection changes for an active portfolio."""
from fastapi import APIRouter

from portfolio_planner.deps import PortfolioServiceDep
from portfolio_planner.schemas import StockSelectionIn, StockSelectionUpdateOut

router = APIRouter(prefix="/stocks", tags=["stocks"])


@router.put("/{user_id}", response_model=StockSelectionUpdateOut)
def update_stock_selection(
    user_id: int, data: StockSelectionIn, service: PortfolioServiceDep
) -> StockSelectionUpdateOut:
    """Replace the selected stocks.

    Kept stocks keep their amounts, new ones start at zero, and whatever was
    allocated to removed stocks moves to savings.
    """
    return service.update_selection(user_id, data)

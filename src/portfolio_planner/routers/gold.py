"""Gold price routes."""
from fastapi import APIRouter, Query

from portfolio_planner.deps import CatalogServiceDep
from portfolio_planner.schemas import GoldPriceOut

router = APIRouter(prefix="/gold-prices", tags=["gold"])


@router.get("/latest", response_model=GoldPriceOut)
async def get_latest_gold_price(
    service: CatalogServiceDep,
    state: str = Query(min_length=1, description="Indian state, e.g. Maharashtra"),
) -> GoldPriceOut:
    """Price of 10g of gold; falls back to the reference price when the live feed fails."""
    return await service.latest_gold_price(state)

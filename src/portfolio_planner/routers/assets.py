"""Asset catalog routes."""
from fastapi import APIRouter, Query

from portfolio_planner.deps import CatalogServiceDep
from portfolio_planner.schemas import AssetOut

router = APIRouter(prefix="/assets", tags=["assets"])


@router.get("/stocks", response_model=list[AssetOut])
async def list_stocks(
    service: CatalogServiceDep,
    search: str = Query(default="", max_length=100, description="Match on name or symbol"),
    limit: int = Query(default=50, ge=1, le=200, description="Max results"),
    live: bool = Query(default=False, description="Quote current prices"),
) -> list[AssetOut]:
    """Search the stock catalog, ordered by symbol."""
    return await service.list_stocks(search.strip(), limit, with_prices=live)

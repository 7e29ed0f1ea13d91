"""Market data schemas: live or fallback prices and catalog entries."""
from datetime import datetime

from pydantic import BaseModel, Field

from portfolio_planner.utils import utcnow


class PriceQuote(BaseModel):
    """Price returned by a provider or resolved with fallback."""

    symbol: str
    price: float
    currency: str = "INR"
    is_live: bool = True
    timestamp: datetime = Field(default_factory=utcnow)
    metadata: dict | None = None


class AssetOut(BaseModel):
    """Catalog entry with the price currently known for it."""

    id: str
    symbol: str
    name: str
    category: str
    current_price: float
    is_live_price: bool = False


class StockMetadata(BaseModel):
    name: str
    symbol: str


class GoldPriceOut(BaseModel):
    state: str
    price: float
    date: str
    is_live: bool

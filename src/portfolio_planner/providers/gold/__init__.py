"""Gold price providers."""
from portfolio_planner.providers.gold.goldapi_provider import GoldApiProvider

__all__ = ["GoldApiProvider"]

"""Core provider abstractions."""
from portfolio_planner.providers.core.cache import PriceCache
from portfolio_planner.providers.core.price_provider_abc import \
    PriceProviderABC
from portfolio_planner.providers.core.utils import normalize_nse_symbol

__all__ = [
    "PriceCache",
    "PriceProviderABC",
    "normalize_nse_symbol",
]

"""Price resolution with fallback to reference prices.

Callers always get a price: a live quote when the provider answers, otherwise
the asset's reference price (stocks) or a default (gold), flagged
``is_live=False``.
"""
import asyncio
import logging
from collections.abc import Iterable

import httpx

from portfolio_planner.db.seed_data import DEFAULT_GOLD_PRICE
from portfolio_planner.providers.core import PriceCache, PriceProviderABC
from portfolio_planner.schemas.market import PriceQuote

logger = logging.getLogger(__name__)

# Provider failures that trigger a fallback; anything else is a bug and propagates.
_PROVIDER_EXCEPTIONS: tuple[type[Exception], ...] = (
    ValueError,
    KeyError,
    TypeError,
    TimeoutError,
    OSError,
    asyncio.TimeoutError,
    httpx.HTTPError,
)

_STOCK = "stock"
_GOLD = "gold"


class PricingService:
    """Live prices for stocks and gold, backed by a time-bounded cache."""

    def __init__(
        self,
        stock_provider: PriceProviderABC,
        gold_provider: PriceProviderABC,
        cache: PriceCache,
        *,
        default_gold_price: float = DEFAULT_GOLD_PRICE,
    ) -> None:
        """Initialize with providers and the cache owned by the caller.

        Args:
            stock_provider: Live stock price source (e.g. YFinanceProvider).
            gold_provider: Live gold price source (e.g. GoldApiProvider).
            cache: Cache shared by requests served by this service.
            default_gold_price: Gold price used when no live or reference price exists.
        """
        self._stocks = stock_provider
        self._gold = gold_provider
        self._cache = cache
        self._default_gold_price = default_gold_price

    async def _resolve(
        self,
        kind: str,
        provider: PriceProviderABC,
        symbol: str,
        fallback_price: float,
    ) -> PriceQuote:
        cached = self._cache.get(kind, symbol)
        if cached is not None:
            return cached
        try:
            quote = await provider.get_price(symbol)
        except _PROVIDER_EXCEPTIONS as e:
            logger.warning(
                "Live %s price for %s unavailable, using fallback %.2f: %s",
                kind,
                symbol,
                fallback_price,
                e,
            )
            return PriceQuote(
                symbol=symbol,
                price=fallback_price,
                is_live=False,
                metadata={"fallback": "reference_price"},
            )
        self._cache.set(kind, symbol, quote)
        return quote

    async def stock_price(self, symbol: str, reference_price: float) -> PriceQuote:
        """Current price for a stock, or ``reference_price`` if the lookup fails."""
        return await self._resolve(_STOCK, self._stocks, symbol, reference_price)

    async def stock_prices(
        self, stocks: Iterable[tuple[str, float]]
    ) -> dict[str, PriceQuote]:
        """Prices for ``(symbol, reference_price)`` pairs, fetched in parallel."""
        pairs = list(stocks)
        quotes = await asyncio.gather(
            *(self.stock_price(symbol, reference) for symbol, reference in pairs)
        )
        return {symbol: quote for (symbol, _), quote in zip(pairs, quotes)}

    async def gold_price(
        self, state: str, reference_price: float | None = None
    ) -> PriceQuote:
        """Current gold price per 10 grams for a state."""
        fallback = self._default_gold_price if reference_price is None else reference_price
        return await self._resolve(_GOLD, self._gold, state, fallback)

    async def close(self) -> None:
        """Close both providers. Call from app lifespan shutdown."""
        for provider in (self._stocks, self._gold):
            try:
                await provider.close()
            except Exception as exc:  # pylint: disable=broad-except
                logger.warning("Error closing provider %s: %s", type(provider).__name__, exc)

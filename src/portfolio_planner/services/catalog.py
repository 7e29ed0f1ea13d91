"""Asset catalog and gold price lookups."""
import asyncio
import logging

from sqlalchemy.engine import Engine

from portfolio_planner.db.sessions import session_scope
from portfolio_planner.db.stores import AssetStore, GoldPriceStore
from portfolio_planner.schemas import AssetOut, GoldPriceOut
from portfolio_planner.services.mappers import asset_out
from portfolio_planner.services.pricing import PricingService
from portfolio_planner.utils import today_iso

logger = logging.getLogger(__name__)


class CatalogService:
    """Stock search over the seeded catalog and per-state gold prices."""

    def __init__(self, engine: Engine, pricing: PricingService) -> None:
        self._engine = engine
        self._pricing = pricing

    def _search(self, search: str, limit: int) -> list[AssetOut]:
        with session_scope(self._engine) as session:
            return [asset_out(a) for a in AssetStore(session).list_stocks(search, limit)]

    def _gold_reference(self, state: str, date: str) -> float | None:
        """Today's last live price for ``state``, else the gold asset's reference price."""
        with session_scope(self._engine) as session:
            recorded = GoldPriceStore(session).latest(state)
            if recorded is not None and recorded.date == date and recorded.is_live:
                return recorded.price
            gold = AssetStore(session).find_gold()
            return gold.reference_price if gold else None

    def _record_gold(self, state: str, price: float, date: str) -> None:
        with session_scope(self._engine) as session:
            GoldPriceStore(session).record(state, price, date, is_live=True)

    async def list_stocks(
        self, search: str = "", limit: int = 50, with_prices: bool = False
    ) -> list[AssetOut]:
        """Stocks matching ``search`` by name or symbol.

        Args:
            search: Case-insensitive substring; empty matches everything.
            limit: Maximum number of results.
            with_prices: Replace reference prices with live quotes where available.
        """
        stocks = await asyncio.to_thread(self._search, search, limit)
        if not with_prices:
            return stocks
        quotes = await self._pricing.stock_prices(
            (s.symbol, s.current_price) for s in stocks
        )
        return [
            s.model_copy(
                update={
                    "current_price": quotes[s.symbol].price,
                    "is_live_price": quotes[s.symbol].is_live,
                }
            )
            for s in stocks
        ]

    async def latest_gold_price(self, state: str) -> GoldPriceOut:
        """Current gold price for ``state``.

        Live quotes are kept as per-state history. When the live feed fails,
        the last live price recorded today for the state is served instead of
        the reference price.
        """
        date = today_iso()
        reference = await asyncio.to_thread(self._gold_reference, state, date)
        quote = await self._pricing.gold_price(state, reference)
        logger.debug("Gold price for %s: %.2f (live=%s)", state, quote.price, quote.is_live)
        if quote.is_live:
            await asyncio.to_thread(self._record_gold, state, quote.price, date)
        return GoldPriceOut(state=state, price=quote.price, date=date, is_live=quote.is_live)

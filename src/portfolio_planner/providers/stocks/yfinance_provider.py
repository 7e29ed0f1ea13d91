"""Yahoo Finance price provider for NSE-listed stocks."""
import asyncio

import yfinance as yf

from portfolio_planner.providers.core import (PriceProviderABC,
                                              normalize_nse_symbol)
from portfolio_planner.schemas.market import PriceQuote
from portfolio_planner.utils import round2, utcnow


class YFinanceProvider(PriceProviderABC):
    """Live stock prices via the yfinance library.

    No API key required. yfinance is synchronous, so lookups run in a worker
    thread.
    """

    def _extract_price(self, ticker: yf.Ticker, symbol: str) -> float:
        """Extract the last price from ticker; raises if price unavailable."""
        info = getattr(ticker, "fast_info", None)
        if info and (price := info.get("lastPrice") or info.get("regularMarketPrice")):
            return float(price)
        full = ticker.info
        price = full.get("currentPrice") or full.get("regularMarketPrice")
        if price is None:
            raise ValueError(f"Stock '{symbol}' not found or has no price data")
        return float(price)

    def _fetch_price_sync(self, symbol: str) -> PriceQuote:
        """Fetch a single price synchronously (run in thread)."""
        ticker = yf.Ticker(symbol)
        try:
            price = self._extract_price(ticker, symbol)
        except ValueError:
            raise
        except Exception as e:
            raise ValueError(f"Failed to fetch price for '{symbol}': {e}") from e
        return PriceQuote(
            symbol=symbol,
            price=round2(price),
            is_live=True,
            timestamp=utcnow(),
            metadata={"provider": "yfinance"},
        )

    async def get_price(self, symbol: str) -> PriceQuote:
        """Fetch the current price for a stock ticker (e.g. "TCS" or "TCS.NS")."""
        sym = normalize_nse_symbol(symbol)
        return await asyncio.to_thread(self._fetch_price_sync, sym)

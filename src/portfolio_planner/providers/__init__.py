"""Live price providers for stocks and gold.

- YFinanceProvider: NSE stock prices via Yahoo Finance
- GoldApiProvider: Gold price in INR via goldapi.io

Both implement PriceProviderABC and return PriceQuote objects.

Example:
    async with YFinanceProvider() as provider:
        quote = await provider.get_price("TCS.NS")
        print(f"{quote.symbol}: {quote.price}")
"""
from portfolio_planner.providers.core import PriceCache, PriceProviderABC
from portfolio_planner.providers.gold import GoldApiProvider
from portfolio_planner.providers.stocks import YFinanceProvider

__all__ = [
    "GoldApiProvider",
    "PriceCache",
    "PriceProviderABC",
    "YFinanceProvider",
]

"""Stock price providers."""
from portfolio_planner.providers.stocks.yfinance_provider import \
    YFinanceProvider

__all__ = ["YFinanceProvider"]

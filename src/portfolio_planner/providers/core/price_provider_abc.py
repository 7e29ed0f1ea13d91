"""Abstract base class for price providers."""
from abc import ABC, abstractmethod

from portfolio_planner.schemas.market import PriceQuote


class PriceProviderABC(ABC):
    """Base interface for live price lookups (stocks, gold).

    Providers raise on failure; falling back to reference prices is the
    pricing service's job, not the provider's.
    """

    @abstractmethod
    async def get_price(self, symbol: str) -> PriceQuote:
        """Fetch the current price.

        Args:
            symbol: Provider-specific key (e.g. "TCS.NS" for stocks, a state name for gold).

        Returns:
            A PriceQuote with ``is_live=True``.
        """

    async def close(self) -> None:
        """Clean up resources (connections, clients).

        Override in subclasses if cleanup is needed.
        """

    async def __aenter__(self) -> "PriceProviderABC":
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        """Async context manager exit - calls close()."""
        await self.close()

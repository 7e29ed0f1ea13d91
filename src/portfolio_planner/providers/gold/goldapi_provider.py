"""GoldAPI price provider for gold in INR."""
import os

import httpx

from portfolio_planner.providers.core import PriceProviderABC
from portfolio_planner.providers.gold.models import GoldApiQuote
from portfolio_planner.schemas.market import PriceQuote
from portfolio_planner.utils import utcnow

GRAMS_PER_TROY_OUNCE = 31.1035


def ounce_to_ten_grams(price_per_ounce: float) -> float:
    """Convert a per-troy-ounce price to the per-10-gram price quoted in India."""
    return round(price_per_ounce / GRAMS_PER_TROY_OUNCE * 10)


class GoldApiProvider(PriceProviderABC):
    """Gold price via goldapi.io (XAU/INR).

    The API has a single national price, so the state passed to ``get_price``
    only labels the quote.
    """

    BASE_URL = "https://www.goldapi.io/api"

    def __init__(self, api_key: str | None = None, timeout: float = 10.0) -> None:
        """Initialize the GoldAPI provider.

        Args:
            api_key: GoldAPI access token. Defaults to GOLD_API_KEY env var.
            timeout: Request timeout in seconds.
        """
        self._api_key = api_key or os.getenv("GOLD_API_KEY", "")
        headers: dict[str, str] = {"Accept": "application/json"}
        if self._api_key:
            headers["x-access-token"] = self._api_key
        self._client = httpx.AsyncClient(
            base_url=self.BASE_URL, headers=headers, timeout=timeout
        )

    async def get_price(self, symbol: str) -> PriceQuote:
        """Fetch the current gold price per 10 grams.

        Args:
            symbol: Indian state the price is requested for.
        """
        response = await self._client.get("/XAU/INR")
        response.raise_for_status()
        quote = GoldApiQuote.model_validate(response.json())
        return PriceQuote(
            symbol=symbol,
            price=ounce_to_ten_grams(quote.price),
            currency=quote.currency,
            is_live=True,
            timestamp=utcnow(),
            metadata={"provider": "goldapi", "unit": "10g"},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

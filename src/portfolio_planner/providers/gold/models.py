"""Models for the GoldAPI provider."""
from pydantic import BaseModel


class GoldApiQuote(BaseModel):
    """Subset of the /api/XAU/INR response we use."""

    price: float  # per troy ounce
    currency: str = "INR"
    timestamp: int | None = None

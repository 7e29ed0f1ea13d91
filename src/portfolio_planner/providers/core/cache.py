"""Time-bounded cache for live price quotes."""
import time
from collections.abc import Callable

from portfolio_planner.schemas.market import PriceQuote


class PriceCache:
    """Cache of live quotes keyed by ``(kind, symbol)``, expiring after ``ttl_seconds``.

    Owned by whoever builds it (the app lifespan, a test) and passed to the
    pricing service explicitly. Fallback quotes are never cached, so the next
    request retries the live source.
    """

    def __init__(
        self,
        ttl_seconds: float = 300.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize empty cache.

        Args:
            ttl_seconds: Seconds a quote stays valid; 0 disables caching.
            clock: Monotonic time source (injectable for tests).
        """
        self._ttl = ttl_seconds
        self._clock = clock
        self._entries: dict[tuple[str, str], tuple[float, PriceQuote]] = {}

    def get(self, kind: str, symbol: str) -> PriceQuote | None:
        """Return the cached quote if present and not expired."""
        entry = self._entries.get((kind, symbol))
        if entry is None:
            return None
        stored_at, quote = entry
        if self._clock() - stored_at >= self._ttl:
            del self._entries[(kind, symbol)]
            return None
        return quote

    def set(self, kind: str, symbol: str, quote: PriceQuote) -> None:
        if self._ttl <= 0:
            return
        self._entries[(kind, symbol)] = (self._clock(), quote)

    def __len__(self) -> int:
        return len(self._entries)

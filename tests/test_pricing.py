import asyncio

from conftest import StubProvider

from portfolio_planner.providers import PriceCache
from portfolio_planner.providers.core import normalize_nse_symbol
from portfolio_planner.providers.gold.goldapi_provider import ounce_to_ten_grams
from portfolio_planner.schemas.market import PriceQuote
from portfolio_planner.services import PricingService


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


def _service(stocks=None, gold=None, cache=None, **kwargs):
    return PricingService(
        StubProvider(stocks),
        StubProvider(gold),
        cache if cache is not None else PriceCache(ttl_seconds=60),
        **kwargs,
    )


def test_live_price_is_used_when_available():
    quote = asyncio.run(_service({"TCS.NS": 4000.0}).stock_price("TCS.NS", 3850.5))
    assert quote.price == 4000.0
    assert quote.is_live


def test_failed_lookup_falls_back_to_reference_price():
    quote = asyncio.run(_service().stock_price("INFY.NS", 1450.75))
    assert quote.price == 1450.75
    assert not quote.is_live
    assert quote.metadata == {"fallback": "reference_price"}


def test_gold_falls_back_to_reference_then_default():
    service = _service(default_gold_price=6100.0)
    assert asyncio.run(service.gold_price("Kerala", 6200.0)).price == 6200.0
    assert asyncio.run(service.gold_price("Kerala")).price == 6100.0


def test_stock_prices_keyed_by_symbol():
    service = _service({"TCS.NS": 4000.0})
    quotes = asyncio.run(service.stock_prices([("TCS.NS", 1.0), ("ITC.NS", 445.8)]))
    assert quotes["TCS.NS"].is_live
    assert quotes["ITC.NS"].price == 445.8


def test_live_quotes_are_cached_until_expiry():
    clock = FakeClock()
    service = _service({"TCS.NS": 4000.0}, cache=PriceCache(ttl_seconds=60, clock=clock))
    provider = service._stocks
    asyncio.run(service.stock_price("TCS.NS", 1.0))
    asyncio.run(service.stock_price("TCS.NS", 1.0))
    assert provider.calls == ["TCS.NS"]
    clock.now = 61
    asyncio.run(service.stock_price("TCS.NS", 1.0))
    assert provider.calls == ["TCS.NS", "TCS.NS"]


def test_fallback_quotes_are_not_cached():
    cache = PriceCache(ttl_seconds=60)
    service = _service(cache=cache)
    asyncio.run(service.stock_price("ITC.NS", 445.8))
    assert len(cache) == 0


def test_zero_ttl_disables_cache():
    cache = PriceCache(ttl_seconds=0)
    cache.set("stock", "TCS.NS", PriceQuote(symbol="TCS.NS", price=1.0))
    assert cache.get("stock", "TCS.NS") is None


def test_close_closes_both_providers():
    service = _service()
    asyncio.run(service.close())
    assert service._stocks.closed
    assert service._gold.closed


def test_symbol_normalization():
    assert normalize_nse_symbol("tcs") == "TCS.NS"
    assert normalize_nse_symbol("TCS.NS") == "TCS.NS"


def test_ounce_to_ten_grams():
    assert ounce_to_ten_grams(311035) == 100000

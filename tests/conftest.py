"""Shared fixtures: in-memory database, stub price providers and an API client."""
import pytest
from fastapi.testclient import TestClient

from portfolio_planner.db.seed_data import asset_id, reference_assets
from portfolio_planner.db.sessions import create_db_engine, init_db, session_scope
from portfolio_planner.db.stores import AssetStore
from portfolio_planner.main import create_app
from portfolio_planner.providers import PriceCache, PriceProviderABC
from portfolio_planner.schemas.market import PriceQuote


class StubProvider(PriceProviderABC):
    """Answers from a fixed table; unknown symbols fail like a dead feed."""

    def __init__(self, prices: dict[str, float] | None = None) -> None:
        self.prices = prices or {}
        self.calls: list[str] = []
        self.closed = False

    async def get_price(self, symbol: str) -> PriceQuote:
        self.calls.append(symbol)
        if symbol not in self.prices:
            raise ValueError(f"No price for {symbol}")
        return PriceQuote(symbol=symbol, price=self.prices[symbol])

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite://")
    init_db(engine)
    with session_scope(engine) as session:
        AssetStore(session).upsert_many(reference_assets())
    yield engine
    engine.dispose()


@pytest.fixture
def stock_provider() -> StubProvider:
    return StubProvider({"TCS.NS": 4000.0})


@pytest.fixture
def gold_provider() -> StubProvider:
    return StubProvider()


@pytest.fixture
def client(engine, stock_provider, gold_provider):
    app = create_app(
        engine=engine,
        stock_provider=stock_provider,
        gold_provider=gold_provider,
        cache=PriceCache(ttl_seconds=0),
    )
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def tcs() -> str:
    return asset_id("TCS.NS")


@pytest.fixture
def infy() -> str:
    return asset_id("INFY.NS")


@pytest.fixture
def reliance() -> str:
    return asset_id("RELIANCE.NS")


def profile_body(
    investment: float = 100000,
    threshold: dict | None = None,
    rate: float = 6.5,
    country: str = "India",
) -> dict:
    return {
        "full_name": "Ana Rao",
        "location": {"state": "Karnataka", "city": "Bengaluru", "country": country},
        "initial_investment_amount": investment,
        "savings_threshold": threshold or {"kind": "percentage", "value": 20},
        "annual_savings_interest_rate": rate,
    }


@pytest.fixture
def user_id(client) -> int:
    response = client.post("/users", json={"email": "ana@example.com"})
    assert response.status_code == 201
    return response.json()["user_id"]


@pytest.fixture
def active_user(client, user_id, tcs, infy) -> int:
    """User with a 100,000 investment, 20% floor and TCS + INFY selected."""
    assert client.post(f"/onboarding/{user_id}/initial-info", json=profile_body()).status_code == 200
    response = client.post(
        f"/onboarding/{user_id}/select-stocks", json={"selected_stock_ids": [tcs, infy]}
    )
    assert response.status_code == 200
    return user_id

import pytest
from sqlalchemy import update

from portfolio_planner.db.models import Portfolio
from portfolio_planner.db.seed_data import NSE_STOCKS, asset_id
from portfolio_planner.db.sessions import session_scope
from portfolio_planner.db.stores import (AlreadyExistsError, AssetStore,
                                         ConcurrentUpdateError, GoldPriceStore,
                                         NotFoundError, PortfolioStore,
                                         UserStore)


def _new_user(engine, email="ana@example.com") -> int:
    with session_scope(engine) as session:
        user = UserStore(session).create(email)
        PortfolioStore(session).get_or_create(user.id)
        return user.id


def test_emails_are_unique_case_insensitively(engine):
    _new_user(engine, "Ana@Example.com")
    with pytest.raises(AlreadyExistsError):
        _new_user(engine, "ana@example.com")


def test_missing_user_raises_not_found(engine):
    with session_scope(engine) as session, pytest.raises(NotFoundError):
        UserStore(session).get(999)


def test_save_bumps_version(engine):
    user_id = _new_user(engine)
    with session_scope(engine) as session:
        store = PortfolioStore(session)
        portfolio = store.get(user_id)
        saved = store.save(portfolio, selected_stock_ids=["A"], allocations={"A": 0.0})
        assert saved.version == 2
        assert saved.selected_stock_ids == ["A"]


def test_stale_write_is_rejected(engine):
    user_id = _new_user(engine)
    with session_scope(engine) as session:
        store = PortfolioStore(session)
        portfolio = store.get(user_id)
        # Another writer bumps the version behind this session's back.
        session.execute(
            update(Portfolio)
            .where(Portfolio.id == portfolio.id)
            .values(version=Portfolio.version + 1)
            .execution_options(synchronize_session=False)
        )
        with pytest.raises(ConcurrentUpdateError):
            store.save(portfolio, savings_allocation=1.0)


def test_seeded_catalog(engine):
    with session_scope(engine) as session:
        assets = AssetStore(session)
        assert len(assets.list_stocks(limit=500)) == len(NSE_STOCKS)
        assert assets.find_gold().symbol == "GOLD"
        matches = assets.list_stocks("tata")
        assert {a.symbol for a in matches} >= {"TCS.NS", "TATAMOTORS.NS", "TATASTEEL.NS"}
        gold_id = assets.find_gold().id
        assert set(assets.get_stocks([asset_id("TCS.NS"), gold_id, "nope"])) == {asset_id("TCS.NS")}


def test_reseeding_keeps_ids(engine):
    from portfolio_planner.db.seed_data import reference_assets

    with session_scope(engine) as session:
        AssetStore(session).upsert_many(reference_assets())
    with session_scope(engine) as session:
        assert len(AssetStore(session).list_stocks(limit=500)) == len(NSE_STOCKS)


def test_latest_gold_price_per_state(engine):
    with session_scope(engine) as session:
        prices = GoldPriceStore(session)
        prices.record("Kerala", 6000, "2024-01-01", is_live=False)
        prices.record("Kerala", 6100, "2024-01-02", is_live=True)
        prices.record("Goa", 5900, "2024-01-03", is_live=True)
    with session_scope(engine) as session:
        latest = GoldPriceStore(session).latest("Kerala")
        assert latest.price == 6100
        assert GoldPriceStore(session).latest("Punjab") is None

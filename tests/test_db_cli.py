from portfolio_planner.db import cli
from portfolio_planner.db.seed_data import NSE_STOCKS
from portfolio_planner.db.sessions import create_db_engine, session_scope
from portfolio_planner.db.stores import AssetStore


def test_seed_is_repeatable(tmp_path):
    url = f"sqlite:///{tmp_path / 'planner.db'}"
    assert cli.seed(url) == len(NSE_STOCKS) + 1
    assert cli.seed(url) == len(NSE_STOCKS) + 1
    engine = create_db_engine(url)
    with session_scope(engine) as session:
        assert len(AssetStore(session).list_stocks(limit=500)) == len(NSE_STOCKS)
    engine.dispose()


def test_main_runs_subcommand(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'planner.db'}"
    monkeypatch.setattr("sys.argv", ["portfolio-planner-db", "--database-url", url, "init"])
    assert cli.main() == 0

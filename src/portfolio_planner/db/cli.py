"""CLI entry points for creating tables and loading reference assets."""
import argparse
import logging
import sys

from portfolio_planner.db.seed_data import reference_assets
from portfolio_planner.db.sessions import (create_db_engine, init_db,
                                           session_scope)
from portfolio_planner.db.stores import AssetStore

logger = logging.getLogger(__name__)


def init(url: str | None = None) -> None:
    """Create all tables on DATABASE_URL (or ``url``)."""
    init_db(create_db_engine(url))


def seed(url: str | None = None) -> int:
    """Create tables and upsert the reference stocks and gold asset."""
    engine = create_db_engine(url)
    init_db(engine)
    with session_scope(engine) as session:
        count = AssetStore(session).upsert_many(reference_assets())
    logger.info("Seeded %d assets", count)
    return count


def main() -> int:
    parser = argparse.ArgumentParser(description="Portfolio planner database tools.")
    parser.add_argument(
        "--database-url",
        default=None,
        help="Override DATABASE_URL for this run",
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command")
    subparsers.add_parser("init", help="Create tables")
    subparsers.add_parser("seed", help="Create tables and load reference assets")
    args = parser.parse_args()

    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    try:
        if args.command == "init":
            init(args.database_url)
            print("Tables created")
        else:
            count = seed(args.database_url)
            print(f"Seeded {count} assets")
    except Exception as e:  # pylint: disable=broad-except
        print(f"Database command failed: {e}", file=sys.stderr)
        return 1
    return 0

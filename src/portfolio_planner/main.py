"""Main module for the portfolio planner service."""
import logging
import os
import subprocess
import sys
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI
from sqlalchemy.engine import Engine

from portfolio_planner.db.sessions import create_db_engine, init_db
from portfolio_planner.providers import (GoldApiProvider, PriceCache,
                                         PriceProviderABC, YFinanceProvider)
from portfolio_planner.routers import (assets_router, gold_router,
                                       onboarding_router, portfolio_router,
                                       profile_router, stocks_router,
                                       users_router)
from portfolio_planner.services import (CatalogService, OnboardingService,
                                        PortfolioService, PricingService,
                                        ProfileService)

logger = logging.getLogger(__name__)


def _cache_ttl() -> float:
    return float(os.getenv("PRICE_CACHE_TTL_SECONDS", "300"))


def create_app(
    engine: Engine | None = None,
    stock_provider: PriceProviderABC | None = None,
    gold_provider: PriceProviderABC | None = None,
    cache: PriceCache | None = None,
) -> FastAPI:
    """Build the application.

    Anything not passed in is created at startup from the environment:
    the engine from DATABASE_URL, Yahoo Finance for stocks, GoldAPI for gold.
    """

    @asynccontextmanager
    async def lifespan(fastapi_app: FastAPI):
        """Create engine, pricing and services at startup; close providers on shutdown."""
        db_engine = engine or create_db_engine()
        init_db(db_engine)

        pricing = PricingService(
            stock_provider or YFinanceProvider(),
            gold_provider or GoldApiProvider(),
            cache if cache is not None else PriceCache(ttl_seconds=_cache_ttl()),
        )

        fastapi_app.state.engine = db_engine
        fastapi_app.state.pricing = pricing
        fastapi_app.state.onboarding_service = OnboardingService(db_engine)
        fastapi_app.state.profile_service = ProfileService(db_engine)
        fastapi_app.state.portfolio_service = PortfolioService(db_engine, pricing)
        fastapi_app.state.catalog_service = CatalogService(db_engine, pricing)

        yield

        await pricing.close()
        if engine is None:
            db_engine.dispose()

    fastapi_app = FastAPI(
        title="Portfolio Planner",
        description="Onboarding, portfolio allocation and projected returns",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.include_router(users_router)
    fastapi_app.include_router(onboarding_router)
    fastapi_app.include_router(profile_router)
    fastapi_app.include_router(portfolio_router)
    fastapi_app.include_router(stocks_router)
    fastapi_app.include_router(assets_router)
    fastapi_app.include_router(gold_router)

    @fastapi_app.get("/")
    def health():
        """Return health check status."""
        return {"status": "ok"}

    return fastapi_app


app = create_app()


def _configure_logging() -> None:
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def run():
    """Run the server (uvicorn). Use for `poetry run start`."""
    _configure_logging()
    uvicorn.run("portfolio_planner.main:app", host="127.0.0.1", port=8001)


def run_dev():
    """Run the development server with Postgres running via Docker."""
    _configure_logging()
    project_root = Path(__file__).resolve().parent.parent.parent
    try:
        subprocess.run(
            ["docker", "compose", "up", "-d", "postgres"],
            cwd=project_root,
            capture_output=True,
            text=True,
            check=True,
        )
    except subprocess.CalledProcessError as e:
        print("Failed to start Postgres:", e.stderr or e.stdout, file=sys.stderr)
        sys.exit(1)
    uvicorn.run("portfolio_planner.main:app", host="0.0.0.0", port=8000, reload=True)

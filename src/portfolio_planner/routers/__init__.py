"""API routers.

Includes routes for:
- /users - Registration and onboarding status
- /onboarding - Profile capture and first stock selection
- /profile - Profile reads and edits
- /portfolio - Overview, adjustment data and bulk adjustments
- /stocks - Stock selection changes
- /assets, /gold-prices - Catalog and gold prices
"""
from portfolio_planner.routers.assets import router as assets_router
from portfolio_planner.routers.gold import router as gold_router
from portfolio_planner.routers.onboarding import router as onboarding_router
from portfolio_planner.routers.portfolio import router as portfolio_router
from portfolio_planner.routers.profile import router as profile_router
from portfolio_planner.routers.stocks import router as stocks_router
from portfolio_planner.routers.users import router as users_router

__all__ = [
    "users_router",
    "onboarding_router",
    "profile_router",
    "portfolio_router",
    "stocks_router",
    "assets_router",
    "gold_router",
]

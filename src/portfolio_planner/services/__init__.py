"""Service layer: loads state, runs the allocation engine, persists, maps errors to HTTP."""
from portfolio_planner.services.catalog import CatalogService
from portfolio_planner.services.errors import ErrorMapper, InvalidRequestError
from portfolio_planner.services.onboarding import OnboardingService
from portfolio_planner.services.portfolio import PortfolioService
from portfolio_planner.services.pricing import PricingService
from portfolio_planner.services.profile import ProfileService

__all__ = [
    "CatalogService",
    "ErrorMapper",
    "InvalidRequestError",
    "OnboardingService",
    "PortfolioService",
    "PricingService",
    "ProfileService",
]

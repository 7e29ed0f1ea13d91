"""FastAPI dependency injection: app.state holds singletons; Depends() resolves them.

Lifespan (main.py) creates the engine, pricing and services once and attaches
them to app.state; these getters are used by Depends().
"""
from typing import Annotated

from fastapi import Depends, Request

from portfolio_planner.services import (CatalogService, OnboardingService,
                                        PortfolioService, ProfileService)


def get_onboarding_service(request: Request) -> OnboardingService:
    """Resolve OnboardingService from app.state (created at startup)."""
    return request.app.state.onboarding_service


def get_profile_service(request: Request) -> ProfileService:
    """Resolve ProfileService from app.state."""
    return request.app.state.profile_service


def get_portfolio_service(request: Request) -> PortfolioService:
    """Resolve PortfolioService from app.state."""
    return request.app.state.portfolio_service


def get_catalog_service(request: Request) -> CatalogService:
    """Resolve CatalogService from app.state."""
    return request.app.state.catalog_service


# Type aliases for route injection
OnboardingServiceDep = Annotated[OnboardingService, Depends(get_onboarding_service)]
ProfileServiceDep = Annotated[ProfileService, Depends(get_profile_service)]
PortfolioServiceDep = Annotated[PortfolioService, Depends(get_portfolio_service)]
CatalogServiceDep = Annotated[CatalogService, Depends(get_catalog_service)]

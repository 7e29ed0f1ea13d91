"""Onboarding routes: profile capture, then the first stock selection."""
from fastapi import APIRouter

from portfolio_planner.deps import OnboardingServiceDep
from portfolio_planner.schemas import (InitialInfoOut, ProfileIn,
                                       StockSelectionIn, StockSelectionOut)

router = APIRouter(prefix="/onboarding", tags=["onboarding"])


@router.post("/{user_id}/initial-info", response_model=InitialInfoOut)
def save_initial_info(
    user_id: int, data: ProfileIn, service: OnboardingServiceDep
) -> InitialInfoOut:
    """Save name, location, investment amount and savings threshold.

    Returns:
        The safe-savings floor computed from the submitted threshold.
    """
    return service.save_initial_info(user_id, data)


@router.post("/{user_id}/select-stocks", response_model=StockSelectionOut)
def select_stocks(
    user_id: int, data: StockSelectionIn, service: OnboardingServiceDep
) -> StockSelectionOut:
    """Pick the initial stocks and activate the portfolio."""
    return service.select_stocks(user_id, data)

"""User registration and onboarding status routes."""
from fastapi import APIRouter, status

from portfolio_planner.deps import OnboardingServiceDep
from portfolio_planner.schemas import OnboardingStatus, UserCreate, UserOut

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", response_model=UserOut, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, service: OnboardingServiceDep) -> UserOut:
    """Register a user by email. An empty portfolio is created alongside."""
    return service.register(data)


@router.get("/{user_id}/status", response_model=OnboardingStatus)
def get_onboarding_status(user_id: int, service: OnboardingServiceDep) -> OnboardingStatus:
    """Which onboarding steps the user has completed."""
    return service.status(user_id)

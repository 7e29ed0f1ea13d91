"""Profile routes."""
from fastapi import APIRouter

from portfolio_planner.deps import ProfileServiceDep
from portfolio_planner.schemas import ProfileIn, ProfileOut, ProfileUpdateOut

router = APIRouter(prefix="/profile", tags=["profile"])


@router.get("/{user_id}", response_model=ProfileOut)
def get_profile(user_id: int, service: ProfileServiceDep) -> ProfileOut:
    return service.get(user_id)


@router.put("/{user_id}", response_model=ProfileUpdateOut)
def update_profile(user_id: int, data: ProfileIn, service: ProfileServiceDep) -> ProfileUpdateOut:
    """Edit the profile.

    The investment amount may only drop by the amount not yet allocated.
    Returns the safe-savings floor before and after the edit.
    """
    return service.update(user_id, data)

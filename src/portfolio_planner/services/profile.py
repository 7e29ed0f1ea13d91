"""Profile reads and edits."""
import logging

from sqlalchemy.engine import Engine

from portfolio_planner.core import (TOLERANCE, BelowSafeSavingsFloor,
                                    safe_savings, validate_investment_change)
from portfolio_planner.db.sessions import session_scope
from portfolio_planner.db.stores import (PortfolioStore, ProfileStore,
                                         UserStore)
from portfolio_planner.schemas import ProfileIn, ProfileOut, ProfileUpdateOut
from portfolio_planner.services.errors import SERVICE_EXCEPTIONS, ErrorMapper
from portfolio_planner.services.mappers import (allocation_of,
                                                apply_profile_input,
                                                profile_floor, profile_out,
                                                threshold_from_input)
from portfolio_planner.services.onboarding import ensure_supported_country

logger = logging.getLogger(__name__)


class ProfileService:
    def __init__(self, engine: Engine, error_mapper: ErrorMapper | None = None) -> None:
        self._engine = engine
        self._error_mapper = error_mapper or ErrorMapper(resource_name="Profile")

    def get(self, user_id: int) -> ProfileOut:
        try:
            with session_scope(self._engine) as session:
                UserStore(session).get(user_id)
                return profile_out(ProfileStore(session).get(user_id))
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

    def update(self, user_id: int, data: ProfileIn) -> ProfileUpdateOut:
        """Apply a profile edit.

        Both checks read the stored portfolio before the profile changes:
        the investment may only drop by the amount not yet allocated, and an
        active portfolio's savings must still cover the new safe-savings floor.
        The portfolio row is rewritten in the same transaction, so concurrent
        portfolio writes based on the old profile get a version conflict.
        """
        try:
            ensure_supported_country(data)
            with session_scope(self._engine) as session:
                UserStore(session).get(user_id)
                profiles = ProfileStore(session)
                profile = profiles.get(user_id)
                portfolios = PortfolioStore(session)
                portfolio = portfolios.find(user_id)

                new_floor = safe_savings(
                    data.initial_investment_amount,
                    threshold_from_input(data.savings_threshold),
                )
                if portfolio is not None:
                    validate_investment_change(
                        profile.initial_investment_amount,
                        data.initial_investment_amount,
                        allocation_of(portfolio),
                    )
                    if (
                        portfolio.onboarding_complete
                        and portfolio.savings_allocation + TOLERANCE < new_floor
                    ):
                        raise BelowSafeSavingsFloor(new_floor, portfolio.savings_allocation)

                old_floor = profile_floor(profile)
                profiles.save(apply_profile_input(profile, data))
                if portfolio is not None:
                    # Version bump orders this edit against portfolio writes.
                    portfolios.save(portfolio)
                logger.info(
                    "Updated profile for user %s (safe savings %.2f -> %.2f)",
                    user_id,
                    old_floor,
                    new_floor,
                )
                return ProfileUpdateOut(
                    **profile_out(profile).model_dump(),
                    old_safe_savings=old_floor,
                    new_safe_savings=new_floor,
                )
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

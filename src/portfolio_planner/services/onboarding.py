"""Onboarding: registration, profile capture and the first stock selection."""
import logging

from sqlalchemy.engine import Engine

from portfolio_planner.core import initial_allocations, unique_ids
from portfolio_planner.db.models import FinancialProfile
from portfolio_planner.db.sessions import session_scope
from portfolio_planner.db.stores import (AssetStore, PortfolioStore,
                                         ProfileStore, UserStore)
from portfolio_planner.schemas import (SUPPORTED_COUNTRY, InitialInfoOut,
                                       OnboardingStatus, ProfileIn,
                                       StockSelectionIn, StockSelectionOut,
                                       UserCreate, UserOut)
from portfolio_planner.services.errors import (SERVICE_EXCEPTIONS,
                                               ErrorMapper,
                                               InvalidRequestError)
from portfolio_planner.services.mappers import (apply_profile_input,
                                                profile_floor)

logger = logging.getLogger(__name__)


def ensure_supported_country(data: ProfileIn) -> None:
    if data.location.country != SUPPORTED_COUNTRY:
        raise InvalidRequestError(f"Service is only available in {SUPPORTED_COUNTRY}")


def ensure_known_stocks(assets: AssetStore, stock_ids: list[str]) -> None:
    known = assets.get_stocks(stock_ids)
    unknown = [stock_id for stock_id in stock_ids if stock_id not in known]
    if unknown:
        raise InvalidRequestError(f"Some selected stocks are invalid: {', '.join(unknown)}")


class OnboardingService:
    """Creates users and walks a portfolio from empty to active."""

    def __init__(self, engine: Engine, error_mapper: ErrorMapper | None = None) -> None:
        self._engine = engine
        self._error_mapper = error_mapper or ErrorMapper(resource_name="User")

    def register(self, data: UserCreate) -> UserOut:
        """Create a user and an empty portfolio."""
        try:
            with session_scope(self._engine) as session:
                user = UserStore(session).create(data.email)
                PortfolioStore(session).get_or_create(user.id)
                logger.info("Registered user %s", user.id)
                return UserOut(user_id=user.id, email=user.email)
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

    def status(self, user_id: int) -> OnboardingStatus:
        """Which onboarding steps the user has completed."""
        try:
            with session_scope(self._engine) as session:
                user = UserStore(session).get(user_id)
                profile = ProfileStore(session).find(user_id)
                portfolio = PortfolioStore(session).find(user_id)
                has_selection = bool(portfolio and portfolio.selected_stock_ids)
                return OnboardingStatus(
                    user_id=user.id,
                    email=user.email,
                    has_profile_info=profile is not None,
                    has_stock_selection=has_selection,
                    has_completed_onboarding=bool(
                        profile is not None
                        and has_selection
                        and portfolio.onboarding_complete
                    ),
                    full_name=profile.full_name if profile else None,
                )
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

    def save_initial_info(self, user_id: int, data: ProfileIn) -> InitialInfoOut:
        """Create or overwrite the profile and make sure a portfolio exists.

        Overwrites are only allowed before the portfolio is active; afterwards
        profile edits go through the profile service, which guards the
        investment amount.
        """
        try:
            ensure_supported_country(data)
            with session_scope(self._engine) as session:
                UserStore(session).get(user_id)
                profiles = ProfileStore(session)
                portfolios = PortfolioStore(session)
                portfolio = portfolios.get_or_create(user_id)
                if portfolio.onboarding_complete:
                    raise InvalidRequestError(
                        "Onboarding already completed. Use the profile page to update your details."
                    )
                profile = profiles.find(user_id) or FinancialProfile(user_id=user_id)
                profiles.save(apply_profile_input(profile, data))
                return InitialInfoOut(user_id=user_id, safe_savings=profile_floor(profile))
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

    def select_stocks(self, user_id: int, data: StockSelectionIn) -> StockSelectionOut:
        """Record the first stock selection and activate the portfolio.

        Every selected stock starts at zero and savings start at the
        safe-savings floor; the rest of the investment stays unallocated.
        """
        try:
            stock_ids = unique_ids(data.selected_stock_ids)
            with session_scope(self._engine) as session:
                UserStore(session).get(user_id)
                profile = ProfileStore(session).find(user_id)
                if profile is None:
                    raise InvalidRequestError("Please complete your profile information first")
                portfolios = PortfolioStore(session)
                portfolio = portfolios.get_or_create(user_id)
                if portfolio.onboarding_complete:
                    raise InvalidRequestError(
                        "Onboarding already completed. Use the stocks management page "
                        "to update your portfolio."
                    )
                ensure_known_stocks(AssetStore(session), stock_ids)
                portfolio = portfolios.save(
                    portfolio,
                    selected_stock_ids=stock_ids,
                    allocations=initial_allocations(stock_ids),
                    gold_allocation=0.0,
                    savings_allocation=profile_floor(profile),
                    onboarding_complete=True,
                )
                logger.info("User %s completed onboarding with %d stocks", user_id, len(stock_ids))
                return StockSelectionOut(
                    portfolio_id=portfolio.id,
                    user_id=user_id,
                    selected_stock_ids=list(portfolio.selected_stock_ids),
                    onboarding_complete=portfolio.onboarding_complete,
                )
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

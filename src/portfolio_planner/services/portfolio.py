"""Portfolio views, bulk adjustments and stock-selection changes.

Each write loads the profile and portfolio, runs the allocation engine, and
saves the result in the same transaction. The portfolio write is conditional
on the version that was read (see PortfolioStore.save).
"""
import asyncio
import logging
from dataclasses import dataclass

from sqlalchemy.engine import Engine

from portfolio_planner.core import (GOLD_KEY, Allocation, absolute_returns,
                                    disposable_amount, predicted_returns,
                                    reallocate_for_selection, split_gold_key,
                                    unallocated_amount, unique_ids,
                                    validate_adjustment)
from portfolio_planner.db.models import Portfolio
from portfolio_planner.db.sessions import session_scope
from portfolio_planner.db.stores import (AssetStore, PortfolioStore,
                                         ProfileStore, UserStore)
from portfolio_planner.schemas import (AdjustmentData, AdjustmentOut,
                                       AdjustPortfolioIn, AssetOut,
                                       MarketData, PortfolioOverview,
                                       PortfolioSummary, StockMetadata,
                                       StockSelectionIn,
                                       StockSelectionUpdateOut)
from portfolio_planner.services.errors import (SERVICE_EXCEPTIONS,
                                               ErrorMapper,
                                               InvalidRequestError)
from portfolio_planner.services.mappers import (absolute_out, allocation_of,
                                                asset_out, predicted_out,
                                                profile_floor, summary_of,
                                                threshold_of)
from portfolio_planner.services.onboarding import ensure_known_stocks
from portfolio_planner.services.pricing import PricingService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _OverviewState:
    """Everything the overview needs from the database, detached from the session."""

    summary: PortfolioSummary
    allocation: Allocation
    savings_rate: float
    state: str
    stocks: list[AssetOut]
    gold_reference: float | None


def _require_active(portfolio: Portfolio) -> None:
    if not portfolio.onboarding_complete:
        raise InvalidRequestError("Please complete onboarding before editing your portfolio")


class PortfolioService:
    """Reads and edits a single user's portfolio."""

    def __init__(
        self,
        engine: Engine,
        pricing: PricingService,
        error_mapper: ErrorMapper | None = None,
    ) -> None:
        self._engine = engine
        self._pricing = pricing
        self._error_mapper = error_mapper or ErrorMapper(resource_name="Portfolio")

    # ---- Reads ----
    def _load_overview_state(self, user_id: int) -> _OverviewState:
        with session_scope(self._engine) as session:
            UserStore(session).get(user_id)
            profile = ProfileStore(session).get(user_id)
            portfolio = PortfolioStore(session).get(user_id)
            assets = AssetStore(session)
            stocks = assets.get_stocks(portfolio.selected_stock_ids or [])
            gold = assets.find_gold()
            return _OverviewState(
                summary=summary_of(portfolio, profile.initial_investment_amount),
                allocation=allocation_of(portfolio),
                savings_rate=profile.annual_savings_interest_rate,
                state=profile.state,
                stocks=[
                    asset_out(stocks[stock_id])
                    for stock_id in portfolio.selected_stock_ids or []
                    if stock_id in stocks
                ],
                gold_reference=gold.reference_price if gold else None,
            )

    async def overview(self, user_id: int) -> PortfolioOverview:
        """Allocation figures plus current market prices for the selected stocks and gold."""
        try:
            state = await asyncio.to_thread(self._load_overview_state, user_id)
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

        quotes, gold = await asyncio.gather(
            self._pricing.stock_prices((s.symbol, s.current_price) for s in state.stocks),
            self._pricing.gold_price(state.state, state.gold_reference),
        )
        stocks = [
            stock.model_copy(
                update={
                    "current_price": quotes[stock.symbol].price,
                    "is_live_price": quotes[stock.symbol].is_live,
                }
            )
            for stock in state.stocks
        ]
        predicted = predicted_returns(state.allocation, state.savings_rate)
        return PortfolioOverview(
            portfolio=state.summary,
            market_data=MarketData(
                stocks=stocks,
                gold_price=gold.price,
                gold_price_is_live=gold.is_live,
            ),
            predicted_returns=predicted_out(predicted),
            projected_returns=absolute_out(absolute_returns(state.allocation, predicted)),
        )

    def adjustment_data(self, user_id: int) -> AdjustmentData:
        """Current allocation, floor and projected returns for the adjustment form."""
        try:
            with session_scope(self._engine) as session:
                UserStore(session).get(user_id)
                profile = ProfileStore(session).get(user_id)
                portfolio = PortfolioStore(session).get(user_id)
                allocation = allocation_of(portfolio)
                investment = profile.initial_investment_amount
                floor = profile_floor(profile)
                predicted = predicted_returns(allocation, profile.annual_savings_interest_rate)
                stocks = AssetStore(session).get_stocks(allocation.stock_allocations)
                return AdjustmentData(
                    total_investment=investment,
                    safe_savings=floor,
                    disposable_amount=disposable_amount(investment, floor),
                    stock_allocations=dict(allocation.stock_allocations),
                    gold_allocation=allocation.gold_allocation,
                    current_savings=allocation.savings_allocation,
                    unallocated_amount=unallocated_amount(investment, allocation),
                    predicted_returns=predicted_out(predicted),
                    projected_returns=absolute_out(absolute_returns(allocation, predicted)),
                    stock_metadata={
                        stock_id: StockMetadata(name=asset.name, symbol=asset.symbol)
                        for stock_id, asset in stocks.items()
                    },
                )
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

    # ---- Writes ----
    def adjust(self, user_id: int, data: AdjustPortfolioIn) -> AdjustmentOut:
        """Validate and store a full reallocation.

        The proposal must only name selected stocks (plus ``"gold"``); selected
        stocks it leaves out are set to zero. A total below the investment is
        stored as-is and reported as unallocated.
        """
        try:
            with session_scope(self._engine) as session:
                UserStore(session).get(user_id)
                profile = ProfileStore(session).get(user_id)
                portfolios = PortfolioStore(session)
                portfolio = portfolios.get(user_id)
                _require_active(portfolio)

                selection = list(portfolio.selected_stock_ids or [])
                unknown = [
                    key
                    for key in data.proposed_allocations
                    if key != GOLD_KEY and key not in selection
                ]
                if unknown:
                    raise InvalidRequestError(
                        f"Allocations reference stocks that are not selected: {', '.join(unknown)}"
                    )
                proposal = split_gold_key(data.proposed_allocations, data.proposed_savings)
                proposal = Allocation(
                    stock_allocations={
                        stock_id: proposal.stock_allocations.get(stock_id, 0.0)
                        for stock_id in selection
                    },
                    gold_allocation=proposal.gold_allocation,
                    savings_allocation=proposal.savings_allocation,
                )
                result = validate_adjustment(
                    proposal,
                    profile.initial_investment_amount,
                    threshold_of(profile),
                    profile.annual_savings_interest_rate,
                )
                portfolios.save(
                    portfolio,
                    allocations=dict(result.allocation.stock_allocations),
                    gold_allocation=result.allocation.gold_allocation,
                    savings_allocation=result.allocation.savings_allocation,
                )
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

        if result.has_unallocated:
            message = (
                f"Portfolio adjusted. ₹{result.unallocated_amount:.2f} remains unallocated."
            )
        else:
            message = "Portfolio adjusted successfully"
        logger.info(
            "Adjusted portfolio for user %s: total %.2f, unallocated %.2f",
            user_id,
            result.total_value,
            result.unallocated_amount,
        )
        return AdjustmentOut(
            message=message,
            allocations=dict(result.allocation.stock_allocations),
            gold_allocation=result.allocation.gold_allocation,
            savings_allocation=result.allocation.savings_allocation,
            new_total_value=result.total_value,
            unallocated_amount=result.unallocated_amount,
            updated_predictions=predicted_out(result.predicted_returns),
            projected_returns=absolute_out(
                absolute_returns(result.allocation, result.predicted_returns)
            ),
        )

    def update_selection(self, user_id: int, data: StockSelectionIn) -> StockSelectionUpdateOut:
        """Change the selected stocks; money in removed stocks moves to savings."""
        try:
            stock_ids = unique_ids(data.selected_stock_ids)
            with session_scope(self._engine) as session:
                UserStore(session).get(user_id)
                ensure_known_stocks(AssetStore(session), stock_ids)
                portfolios = PortfolioStore(session)
                portfolio = portfolios.get(user_id)
                _require_active(portfolio)

                result = reallocate_for_selection(
                    portfolio.selected_stock_ids or [],
                    portfolio.allocations or {},
                    portfolio.savings_allocation,
                    stock_ids,
                )
                portfolio = portfolios.save(
                    portfolio,
                    selected_stock_ids=stock_ids,
                    allocations=result.stock_allocations,
                    savings_allocation=result.savings_allocation,
                )
                logger.info(
                    "User %s changed stocks: +%d -%d, %.2f moved to savings",
                    user_id,
                    result.added_count,
                    result.removed_count,
                    result.reallocated_amount,
                )
                return StockSelectionUpdateOut(
                    portfolio_id=portfolio.id,
                    selected_stock_ids=list(portfolio.selected_stock_ids),
                    allocations=dict(portfolio.allocations),
                    savings_allocation=portfolio.savings_allocation,
                    added_stocks=result.added_count,
                    removed_stocks=result.removed_count,
                    reallocated_amount=result.reallocated_amount,
                )
        except SERVICE_EXCEPTIONS as e:
            self._error_mapper.raise_http(e)

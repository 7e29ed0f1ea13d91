"""Conversions between stored rows, engine values and response schemas."""
from portfolio_planner.core import (AbsoluteReturns, Allocation,
                                    PredictedReturns, SavingsThreshold,
                                    allocation_distribution,
                                    allocation_total, safe_savings,
                                    unallocated_amount)
from portfolio_planner.db.models import (Asset, AssetCategory,
                                         FinancialProfile, Portfolio)
from portfolio_planner.schemas import (AbsoluteReturnsOut, AssetOut,
                                       Coordinates, DistributionOut, Location,
                                       PortfolioSummary, PredictedReturnsOut,
                                       ProfileIn, ProfileOut,
                                       SavingsThresholdIn)


def threshold_of(profile: FinancialProfile) -> SavingsThreshold:
    return SavingsThreshold(kind=profile.threshold_kind, value=profile.threshold_value)


def threshold_from_input(data: SavingsThresholdIn) -> SavingsThreshold:
    return SavingsThreshold(kind=data.kind, value=data.value)


def profile_floor(profile: FinancialProfile) -> float:
    return safe_savings(profile.initial_investment_amount, threshold_of(profile))


def allocation_of(portfolio: Portfolio) -> Allocation:
    return Allocation(
        stock_allocations=dict(portfolio.allocations or {}),
        gold_allocation=portfolio.gold_allocation,
        savings_allocation=portfolio.savings_allocation,
    )


def apply_profile_input(profile: FinancialProfile, data: ProfileIn) -> FinancialProfile:
    """Copy form fields onto a profile row (new or existing)."""
    coords = data.location.coordinates
    profile.full_name = data.full_name
    profile.state = data.location.state
    profile.city = data.location.city
    profile.latitude = coords.lat if coords else None
    profile.longitude = coords.lng if coords else None
    profile.country = data.location.country
    profile.initial_investment_amount = data.initial_investment_amount
    profile.threshold_kind = data.savings_threshold.kind
    profile.threshold_value = data.savings_threshold.value
    profile.annual_savings_interest_rate = data.annual_savings_interest_rate
    return profile


def location_of(profile: FinancialProfile) -> Location:
    coords = None
    if profile.latitude is not None and profile.longitude is not None:
        coords = Coordinates(lat=profile.latitude, lng=profile.longitude)
    return Location(
        state=profile.state,
        city=profile.city,
        coordinates=coords,
        country=profile.country,
    )


def profile_out(profile: FinancialProfile) -> ProfileOut:
    return ProfileOut(
        full_name=profile.full_name,
        location=location_of(profile),
        initial_investment_amount=profile.initial_investment_amount,
        savings_threshold=SavingsThresholdIn(
            kind=profile.threshold_kind, value=profile.threshold_value
        ),
        annual_savings_interest_rate=profile.annual_savings_interest_rate,
        safe_savings=profile_floor(profile),
    )


def summary_of(portfolio: Portfolio, investment: float) -> PortfolioSummary:
    allocation = allocation_of(portfolio)
    return PortfolioSummary(
        user_id=portfolio.user_id,
        selected_stock_ids=list(portfolio.selected_stock_ids or []),
        allocations=dict(allocation.stock_allocations),
        gold_allocation=allocation.gold_allocation,
        savings_allocation=allocation.savings_allocation,
        total_value=allocation_total(allocation),
        distribution=DistributionOut.model_validate(allocation_distribution(allocation)),
        unallocated_amount=unallocated_amount(investment, allocation),
        onboarding_complete=portfolio.onboarding_complete,
    )


def predicted_out(predicted: PredictedReturns) -> PredictedReturnsOut:
    return PredictedReturnsOut.model_validate(predicted)


def absolute_out(absolute: AbsoluteReturns) -> AbsoluteReturnsOut:
    return AbsoluteReturnsOut.model_validate(absolute)


def asset_out(asset: Asset) -> AssetOut:
    """Catalog entry priced at its reference price until a live quote replaces it."""
    return AssetOut(
        id=asset.id,
        symbol=asset.symbol,
        name=asset.name,
        category=AssetCategory(asset.category).value,
        current_price=asset.reference_price,
        is_live_price=False,
    )

"""Request and response bodies for the HTTP API."""
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, model_validator

from portfolio_planner.core import ThresholdKind
from portfolio_planner.schemas.market import AssetOut, StockMetadata

SUPPORTED_COUNTRY = "India"

# Amounts and rates must be real numbers; JSON NaN/Infinity are rejected.
FiniteFloat = Annotated[float, Field(allow_inf_nan=False)]


# ---- Requests ----
class UserCreate(BaseModel):
    email: str = Field(min_length=3, max_length=254, pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


class Coordinates(BaseModel):
    lat: float = Field(ge=-90, le=90, allow_inf_nan=False)
    lng: float = Field(ge=-180, le=180, allow_inf_nan=False)


class Location(BaseModel):
    state: str = Field(min_length=1)
    city: str = Field(min_length=1)
    coordinates: Coordinates | None = None
    country: str = SUPPORTED_COUNTRY


class SavingsThresholdIn(BaseModel):
    """Safe-savings threshold as sent by the client."""

    kind: ThresholdKind
    value: float = Field(ge=0, allow_inf_nan=False)

    @model_validator(mode="after")
    def _percentage_in_range(self) -> "SavingsThresholdIn":
        if self.kind == ThresholdKind.PERCENTAGE and self.value > 100:
            raise ValueError("Percentage threshold must be between 0 and 100")
        return self


class ProfileIn(BaseModel):
    """Profile form shared by onboarding and profile edits."""

    full_name: str = Field(min_length=2, max_length=100)
    location: Location
    initial_investment_amount: float = Field(
        ge=1000, allow_inf_nan=False, description="Minimum investment is 1,000 INR"
    )
    savings_threshold: SavingsThresholdIn
    annual_savings_interest_rate: float = Field(ge=0, le=100, allow_inf_nan=False)


class StockSelectionIn(BaseModel):
    selected_stock_ids: list[str] = Field(min_length=1)


class AdjustPortfolioIn(BaseModel):
    """Full reallocation; ``proposed_allocations`` may carry a ``"gold"`` entry.

    Values must be finite but are not range-checked here, so the allocation
    engine can name the offending key.
    """

    proposed_allocations: dict[str, FiniteFloat]
    proposed_savings: FiniteFloat


# ---- Responses ----
class UserOut(BaseModel):
    user_id: int
    email: str


class OnboardingStatus(BaseModel):
    user_id: int
    email: str
    has_profile_info: bool
    has_stock_selection: bool
    has_completed_onboarding: bool
    full_name: str | None = None


class InitialInfoOut(BaseModel):
    user_id: int
    safe_savings: float


class StockSelectionOut(BaseModel):
    portfolio_id: int
    user_id: int
    selected_stock_ids: list[str]
    onboarding_complete: bool


class ProfileOut(BaseModel):
    full_name: str
    location: Location
    initial_investment_amount: float
    savings_threshold: SavingsThresholdIn
    annual_savings_interest_rate: float
    safe_savings: float


class ProfileUpdateOut(ProfileOut):
    old_safe_savings: float
    new_safe_savings: float


class DistributionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    savings: float
    gold: float
    stocks: float


class PredictedReturnsOut(BaseModel):
    """Annual rates in percent."""

    model_config = ConfigDict(from_attributes=True)

    stocks: dict[str, float]
    gold: float
    savings: float


class AbsoluteReturnsOut(BaseModel):
    """Projected one-year gain in currency units."""

    model_config = ConfigDict(from_attributes=True)

    stocks: dict[str, float]
    gold: float
    savings: float
    total: float


class PortfolioSummary(BaseModel):
    user_id: int
    selected_stock_ids: list[str]
    allocations: dict[str, float]
    gold_allocation: float
    savings_allocation: float
    total_value: float
    distribution: DistributionOut
    unallocated_amount: float
    onboarding_complete: bool


class MarketData(BaseModel):
    stocks: list[AssetOut]
    gold_price: float
    gold_price_is_live: bool


class PortfolioOverview(BaseModel):
    portfolio: PortfolioSummary
    market_data: MarketData
    predicted_returns: PredictedReturnsOut
    projected_returns: AbsoluteReturnsOut


class AdjustmentData(BaseModel):
    """Everything the adjustment form needs to propose a new allocation."""

    total_investment: float
    safe_savings: float
    disposable_amount: float
    stock_allocations: dict[str, float]
    gold_allocation: float
    current_savings: float
    unallocated_amount: float
    predicted_returns: PredictedReturnsOut
    projected_returns: AbsoluteReturnsOut
    stock_metadata: dict[str, StockMetadata]


class AdjustmentOut(BaseModel):
    message: str
    allocations: dict[str, float]
    gold_allocation: float
    savings_allocation: float
    new_total_value: float
    unallocated_amount: float
    updated_predictions: PredictedReturnsOut
    projected_returns: AbsoluteReturnsOut


class StockSelectionUpdateOut(BaseModel):
    portfolio_id: int
    selected_stock_ids: list[str]
    allocations: dict[str, float]
    savings_allocation: float
    added_stocks: int
    removed_stocks: int
    reallocated_amount: float

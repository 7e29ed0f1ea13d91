"""Database models for the portfolio planner.

One FinancialProfile and one Portfolio per user. Assets are shared reference
data. Live prices are fetched on demand; only gold quotes are kept, as a
per-state history.
"""
from datetime import datetime
from enum import Enum

from sqlalchemy import JSON, Column
from sqlmodel import Field, SQLModel

from portfolio_planner.core import ThresholdKind
from portfolio_planner.utils import utcnow


class AssetCategory(str, Enum):
    STOCK = "stock"
    GOLD = "gold"


class User(SQLModel, table=True):
    """Registered account. Authentication lives outside this service."""

    id: int | None = Field(default=None, primary_key=True)
    email: str = Field(unique=True, index=True)
    created_at: datetime = Field(default_factory=utcnow)


class FinancialProfile(SQLModel, table=True):
    """Investment terms captured during onboarding."""

    __tablename__ = "financial_profile"

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)
    full_name: str
    state: str
    city: str
    latitude: float | None = None
    longitude: float | None = None
    country: str = Field(default="India")
    initial_investment_amount: float
    threshold_kind: ThresholdKind
    threshold_value: float
    annual_savings_interest_rate: float
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Portfolio(SQLModel, table=True):
    """Stock selection and money per category for one user.

    ``version`` is bumped on every write; stores use it to reject writes
    based on a stale read.
    """

    id: int | None = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", unique=True, index=True)
    selected_stock_ids: list[str] = Field(default_factory=list, sa_column=Column(JSON))
    allocations: dict[str, float] = Field(default_factory=dict, sa_column=Column(JSON))
    gold_allocation: float = Field(default=0.0, ge=0)
    savings_allocation: float = Field(default=0.0, ge=0)
    onboarding_complete: bool = Field(default=False)
    version: int = Field(default=1)
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)


class Asset(SQLModel, table=True):
    """Tradable asset. ``reference_price`` is only used when no live price is available."""

    id: str = Field(primary_key=True)
    symbol: str = Field(index=True)
    name: str
    category: AssetCategory = Field(index=True)
    reference_price: float = Field(ge=0)


class GoldPrice(SQLModel, table=True):
    """Gold price per 10 grams fetched for a state on a given date."""

    __tablename__ = "gold_price"

    id: int | None = Field(default=None, primary_key=True)
    state: str = Field(index=True)
    price: float = Field(ge=0)
    date: str = Field(index=True)  # YYYY-MM-DD
    is_live: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utcnow)

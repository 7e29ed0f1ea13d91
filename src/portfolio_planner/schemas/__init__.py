"""Pydantic schemas for API and runtime use. Not persisted to DB."""
from portfolio_planner.schemas.api import (SUPPORTED_COUNTRY,
                                           AbsoluteReturnsOut,
                                           AdjustmentData, AdjustmentOut,
                                           AdjustPortfolioIn, Coordinates,
                                           DistributionOut, InitialInfoOut,
                                           Location, MarketData,
                                           OnboardingStatus,
                                           PortfolioOverview,
                                           PortfolioSummary,
                                           PredictedReturnsOut, ProfileIn,
                                           ProfileOut, ProfileUpdateOut,
                                           SavingsThresholdIn,
                                           StockSelectionIn,
                                           StockSelectionOut,
                                           StockSelectionUpdateOut,
                                           UserCreate, UserOut)
from portfolio_planner.schemas.market import (AssetOut, GoldPriceOut,
                                              PriceQuote, StockMetadata)

__all__ = [
    "SUPPORTED_COUNTRY",
    "AbsoluteReturnsOut",
    "AdjustPortfolioIn",
    "AdjustmentData",
    "AdjustmentOut",
    "AssetOut",
    "Coordinates",
    "DistributionOut",
    "GoldPriceOut",
    "InitialInfoOut",
    "Location",
    "MarketData",
    "OnboardingStatus",
    "PortfolioOverview",
    "PortfolioSummary",
    "PredictedReturnsOut",
    "PriceQuote",
    "ProfileIn",
    "ProfileOut",
    "ProfileUpdateOut",
    "SavingsThresholdIn",
    "StockMetadata",
    "StockSelectionIn",
    "StockSelectionOut",
    "StockSelectionUpdateOut",
    "UserCreate",
    "UserOut",
]

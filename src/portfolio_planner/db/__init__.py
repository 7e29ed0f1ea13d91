"""Database package: models, session management and stores."""
from portfolio_planner.db.models import (Asset, AssetCategory,
                                         FinancialProfile, GoldPrice,
                                         Portfolio, User)

__all__ = [
    "Asset",
    "AssetCategory",
    "FinancialProfile",
    "GoldPrice",
    "Portfolio",
    "User",
]

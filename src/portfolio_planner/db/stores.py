"""Per-table data access over a SQLModel session.

Stores never commit; the caller's ``session_scope`` does. Portfolio writes are
conditional on the version that was read, so two requests that read the same
portfolio cannot both write it.
"""
from collections.abc import Iterable

from sqlalchemy import func, or_, update
from sqlmodel import Session, col, select

from portfolio_planner.db.models import (Asset, AssetCategory,
                                         FinancialProfile, GoldPrice,
                                         Portfolio, User)
from portfolio_planner.utils import utcnow


class NotFoundError(LookupError):
    """A row the request depends on does not exist."""

    def __init__(self, resource: str, key: object) -> None:
        self.resource = resource
        self.key = key
        super().__init__(f"{resource} not found")


class AlreadyExistsError(ValueError):
    """A unique row already exists."""


class ConcurrentUpdateError(RuntimeError):
    """The row changed between read and write."""


class UserStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, user_id: int) -> User:
        user = self._session.get(User, user_id)
        if user is None:
            raise NotFoundError("User", user_id)
        return user

    def create(self, email: str) -> User:
        email = email.strip().lower()
        existing = self._session.exec(select(User).where(User.email == email)).first()
        if existing is not None:
            raise AlreadyExistsError("User with this email already exists")
        user = User(email=email)
        self._session.add(user)
        self._session.flush()
        return user


class ProfileStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find(self, user_id: int) -> FinancialProfile | None:
        return self._session.exec(
            select(FinancialProfile).where(FinancialProfile.user_id == user_id)
        ).first()

    def get(self, user_id: int) -> FinancialProfile:
        profile = self.find(user_id)
        if profile is None:
            raise NotFoundError("Onboarding data", user_id)
        return profile

    def save(self, profile: FinancialProfile) -> FinancialProfile:
        profile.updated_at = utcnow()
        self._session.add(profile)
        self._session.flush()
        return profile


class PortfolioStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def find(self, user_id: int) -> Portfolio | None:
        return self._session.exec(
            select(Portfolio).where(Portfolio.user_id == user_id)
        ).first()

    def get(self, user_id: int) -> Portfolio:
        portfolio = self.find(user_id)
        if portfolio is None:
            raise NotFoundError("Portfolio", user_id)
        return portfolio

    def get_or_create(self, user_id: int) -> Portfolio:
        """Return the user's portfolio, creating an empty one if missing."""
        portfolio = self.find(user_id)
        if portfolio is None:
            portfolio = Portfolio(user_id=user_id)
            self._session.add(portfolio)
            self._session.flush()
        return portfolio

    def save(
        self,
        portfolio: Portfolio,
        *,
        selected_stock_ids: list[str] | None = None,
        allocations: dict[str, float] | None = None,
        gold_allocation: float | None = None,
        savings_allocation: float | None = None,
        onboarding_complete: bool | None = None,
    ) -> Portfolio:
        """Write the given fields if the row still has the version that was read.

        Raises:
            ConcurrentUpdateError: Another write happened since ``portfolio`` was loaded.
        """
        values: dict = {"version": portfolio.version + 1, "updated_at": utcnow()}
        if selected_stock_ids is not None:
            values["selected_stock_ids"] = list(selected_stock_ids)
        if allocations is not None:
            values["allocations"] = dict(allocations)
        if gold_allocation is not None:
            values["gold_allocation"] = gold_allocation
        if savings_allocation is not None:
            values["savings_allocation"] = savings_allocation
        if onboarding_complete is not None:
            values["onboarding_complete"] = onboarding_complete

        result = self._session.execute(
            update(Portfolio)
            .where(col(Portfolio.id) == portfolio.id)
            .where(col(Portfolio.version) == portfolio.version)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise ConcurrentUpdateError(
                "Portfolio was modified by another request; reload and retry"
            )
        self._session.refresh(portfolio)
        return portfolio


class AssetStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def list_stocks(self, search: str = "", limit: int = 50) -> list[Asset]:
        """Stocks whose name or symbol contains ``search`` (case-insensitive)."""
        statement = select(Asset).where(Asset.category == AssetCategory.STOCK)
        if search:
            pattern = f"%{search.lower()}%"
            statement = statement.where(
                or_(
                    func.lower(Asset.name).like(pattern),
                    func.lower(Asset.symbol).like(pattern),
                )
            )
        statement = statement.order_by(Asset.symbol).limit(limit)
        return list(self._session.exec(statement).all())

    def get_many(self, asset_ids: Iterable[str]) -> list[Asset]:
        ids = list(asset_ids)
        if not ids:
            return []
        return list(self._session.exec(select(Asset).where(col(Asset.id).in_(ids))).all())

    def get_stocks(self, stock_ids: Iterable[str]) -> dict[str, Asset]:
        """Stocks by id; ids that are unknown or not stocks are absent."""
        return {
            asset.id: asset
            for asset in self.get_many(stock_ids)
            if asset.category == AssetCategory.STOCK
        }

    def find_gold(self) -> Asset | None:
        return self._session.exec(
            select(Asset).where(Asset.category == AssetCategory.GOLD)
        ).first()

    def upsert_many(self, assets: Iterable[Asset]) -> int:
        count = 0
        for asset in assets:
            self._session.merge(asset)
            count += 1
        self._session.flush()
        return count


class GoldPriceStore:
    def __init__(self, session: Session) -> None:
        self._session = session

    def record(self, state: str, price: float, date: str, *, is_live: bool) -> GoldPrice:
        row = GoldPrice(state=state, price=price, date=date, is_live=is_live)
        self._session.add(row)
        self._session.flush()
        return row

    def latest(self, state: str) -> GoldPrice | None:
        return self._session.exec(
            select(GoldPrice)
            .where(GoldPrice.state == state)
            .order_by(col(GoldPrice.date).desc(), col(GoldPrice.id).desc())
        ).first()

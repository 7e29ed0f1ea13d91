"""Mapping of service and engine exceptions to HTTP responses."""
from dataclasses import dataclass
from typing import Any

from fastapi import HTTPException

from portfolio_planner.core import (AllocationError, BelowSafeSavingsFloor,
                                    InvalidAllocation,
                                    InvestmentReductionError, OverAllocated)
from portfolio_planner.db.stores import (AlreadyExistsError,
                                         ConcurrentUpdateError, NotFoundError)


class InvalidRequestError(ValueError):
    """The request is well-formed but not allowed in the current state."""


# Exceptions services map to HTTP; all others propagate (e.g. bugs, BaseException).
SERVICE_EXCEPTIONS: tuple[type[Exception], ...] = (
    AllocationError,
    InvalidRequestError,
    NotFoundError,
    AlreadyExistsError,
    ConcurrentUpdateError,
)


def _allocation_detail(exc: AllocationError) -> dict[str, Any]:
    detail: dict[str, Any] = {"error": type(exc).__name__, "message": str(exc)}
    if isinstance(exc, InvalidAllocation):
        detail["key"] = exc.key
    elif isinstance(exc, BelowSafeSavingsFloor):
        detail["safe_savings"] = exc.floor
    elif isinstance(exc, OverAllocated):
        detail["total"] = exc.total
        detail["investment"] = exc.investment
    elif isinstance(exc, InvestmentReductionError):
        detail["reduction"] = exc.reduction
        detail["unallocated_amount"] = exc.unallocated
    return detail


@dataclass(frozen=True)
class ErrorMapper:
    """Maps service exceptions to HTTP (status_code, detail).

    Engine rejections become 400 with a structured detail carrying the
    offending key or the floor, so clients can display them.
    """

    resource_name: str = "Resource"

    def to_http(self, exc: Exception) -> tuple[int, Any]:
        """Map an exception to (status_code, detail) for HTTP responses."""
        if isinstance(exc, AllocationError):
            return (400, _allocation_detail(exc))
        if isinstance(exc, InvalidRequestError):
            return (400, str(exc))
        if isinstance(exc, NotFoundError):
            return (404, str(exc) or f"{self.resource_name} not found")
        if isinstance(exc, (AlreadyExistsError, ConcurrentUpdateError)):
            return (409, str(exc))
        return (500, "Internal server error")

    def raise_http(self, exc: Exception) -> None:
        """Map exception to HTTP and raise HTTPException. Never returns."""
        status_code, detail = self.to_http(exc)
        raise HTTPException(status_code=status_code, detail=detail) from exc

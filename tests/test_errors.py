import pytest
from fastapi import HTTPException

from portfolio_planner.core import BelowSafeSavingsFloor, OverAllocated
from portfolio_planner.db.stores import (AlreadyExistsError,
                                         ConcurrentUpdateError, NotFoundError)
from portfolio_planner.services import ErrorMapper, InvalidRequestError


@pytest.mark.parametrize(
    "exc,status",
    [
        (OverAllocated(2, 1), 400),
        (InvalidRequestError("nope"), 400),
        (NotFoundError("User", 1), 404),
        (AlreadyExistsError("dup"), 409),
        (ConcurrentUpdateError("stale"), 409),
        (RuntimeError("boom"), 500),
    ],
)
def test_status_codes(exc, status):
    assert ErrorMapper().to_http(exc)[0] == status


def test_allocation_errors_carry_structured_detail():
    _, detail = ErrorMapper().to_http(BelowSafeSavingsFloor(20000, 100))
    assert detail == {
        "error": "BelowSafeSavingsFloor",
        "message": "Savings cannot be less than safe savings amount of 20000.00",
        "safe_savings": 20000,
    }


def test_raise_http_chains_cause():
    original = NotFoundError("Portfolio", 7)
    with pytest.raises(HTTPException) as exc_info:
        ErrorMapper(resource_name="Portfolio").raise_http(original)
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Portfolio not found"
    assert exc_info.value.__cause__ is original

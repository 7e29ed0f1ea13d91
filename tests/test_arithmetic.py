import pytest

from portfolio_planner.core import (Allocation, SavingsThreshold,
                                    ThresholdKind, allocation_distribution,
                                    allocation_total, disposable_amount,
                                    distribution, safe_savings,
                                    total_allocated, unallocated_amount)


@pytest.mark.parametrize(
    "investment,percent,expected",
    [(100000, 20, 20000), (2500, 10, 250), (1000, 0, 0), (50000, 100, 50000)],
)
def test_percentage_threshold_scales_with_investment(investment, percent, expected):
    threshold = SavingsThreshold(ThresholdKind.PERCENTAGE, percent)
    assert safe_savings(investment, threshold) == pytest.approx(expected)


@pytest.mark.parametrize("investment", [1000, 100000, 5_000_000])
def test_fixed_threshold_ignores_investment(investment):
    assert safe_savings(investment, SavingsThreshold(ThresholdKind.FIXED, 15000)) == 15000


def test_total_with_empty_stock_map():
    assert total_allocated({}, 500, 1500) == 2000


def test_total_sums_every_category():
    assert total_allocated({"a": 100, "b": 250.5}, 50, 1000) == pytest.approx(1400.5)


def test_distribution_of_empty_portfolio_is_all_zero():
    result = distribution({}, 0, 0)
    assert (result.savings, result.gold, result.stocks) == (0.0, 0.0, 0.0)


@pytest.mark.parametrize(
    "stocks,gold,savings",
    [
        ({"a": 1000, "b": 500}, 300, 200),
        ({}, 0, 1),
        ({"a": 1 / 3}, 2 / 3, 1 / 7),
        ({"a": 40000}, 10000, 20000),
    ],
)
def test_distribution_sums_to_hundred(stocks, gold, savings):
    result = distribution(stocks, gold, savings)
    assert result.savings + result.gold + result.stocks == pytest.approx(100, abs=0.01)


def test_distribution_shares():
    result = distribution({"a": 30000, "b": 10000}, 10000, 50000)
    assert result.stocks == pytest.approx(40)
    assert result.gold == pytest.approx(10)
    assert result.savings == pytest.approx(50)


def test_allocation_helpers_and_unallocated():
    allocation = Allocation({"a": 40000}, 10000, 20000)
    assert allocation_total(allocation) == 70000
    assert allocation.stocks_total == 40000
    assert allocation_distribution(allocation).stocks == pytest.approx(40000 / 70000 * 100)
    assert unallocated_amount(100000, allocation) == 30000


def test_disposable_amount():
    assert disposable_amount(100000, 20000) == 80000

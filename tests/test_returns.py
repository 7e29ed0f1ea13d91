import pytest

from portfolio_planner.core import (DEFAULT_STOCK_RETURN, GOLD_RETURN,
                                    Allocation, PredictedReturns,
                                    absolute_returns, predicted_returns,
                                    projected_value, stock_return_rate,
                                    total_projected_return)


def test_every_unlisted_stock_gets_the_default_rate():
    predicted = predicted_returns(Allocation({"A": 1, "B": 2}, 0, 0), 6.5)
    assert predicted.stocks == {"A": DEFAULT_STOCK_RETURN, "B": DEFAULT_STOCK_RETURN}
    assert predicted.gold == GOLD_RETURN == 8.0
    assert predicted.savings == 6.5


def test_rate_table_overrides_default():
    assert stock_return_rate("A", {"A": 15.0}) == 15.0
    assert stock_return_rate("B", {"A": 15.0}) == DEFAULT_STOCK_RETURN
    predicted = predicted_returns(Allocation({"A": 1, "B": 1}, 0, 0), 4, rates={"A": 9.0})
    assert predicted.stocks == {"A": 9.0, "B": DEFAULT_STOCK_RETURN}


def test_projected_total_for_mixed_portfolio():
    allocation = Allocation({"A": 50000}, 10000, 20000)
    predicted = predicted_returns(allocation, 6.5)
    absolute = absolute_returns(allocation, predicted)
    assert absolute.stocks == {"A": pytest.approx(6250)}
    assert absolute.gold == pytest.approx(800)
    assert absolute.savings == pytest.approx(1300)
    assert absolute.total == pytest.approx(8350)
    assert total_projected_return(allocation, predicted) == pytest.approx(8350)


def test_stock_without_rate_earns_nothing():
    allocation = Allocation({"A": 1000}, 0, 0)
    absolute = absolute_returns(allocation, PredictedReturns(stocks={}, gold=8.0, savings=0))
    assert absolute.total == 0


@pytest.mark.parametrize(
    "amount,rate,years,expected",
    [(1000, 10, 1, 1100), (1000, 10, 2, 1210), (5000, 0, 5, 5000), (1000, 12.5, 0, 1000)],
)
def test_projected_value_compounds(amount, rate, years, expected):
    assert projected_value(amount, rate, years) == pytest.approx(expected)


def test_projected_value_defaults_to_one_year():
    assert projected_value(200, 8) == pytest.approx(216)

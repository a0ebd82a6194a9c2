from __future__ import annotations

import math

import pytest

from broker_pnl import BrokerPosition, aggregate


def _position(
    symbol: str,
    broker_id: str,
    quantity: int,
    avg_price: float,
    current_price: float,
    *,
    pnl: float | None = None,
    day_pnl: float = 0.0,
) -> BrokerPosition:
    if pnl is None:
        pnl = (current_price - avg_price) * quantity
    cost = avg_price * quantity
    return BrokerPosition(
        symbol=symbol,
        broker_id=broker_id,
        broker_name=broker_id.upper(),
        quantity=quantity,
        avg_price=avg_price,
        current_price=current_price,
        pnl=pnl,
        pnl_percent=pnl / cost * 100 if cost else 0.0,
        day_pnl=day_pnl,
    )


def test_same_symbol_across_brokers_merges_into_one_aggregate():
    positions = [
        _position("TCS", "b1", 10, 100.0, 110.0, pnl=100.0),
        _position("TCS", "b2", 10, 120.0, 110.0, pnl=-100.0),
    ]
    [tcs] = aggregate(positions)
    assert tcs.total_quantity == 20
    assert tcs.avg_price == pytest.approx(110.0)
    assert tcs.total_pnl == pytest.approx(0.0)
    assert tcs.total_value == pytest.approx(2200.0)
    assert tcs.total_pnl_percent == pytest.approx(0.0)
    assert tcs.broker_positions == tuple(positions)
    assert tcs.broker_count == 2


def test_avg_price_is_quantity_weighted():
    positions = [
        _position("INFY", "b1", 3, 100.0, 105.0),
        _position("INFY", "b2", 7, 90.0, 105.0),
        _position("INFY", "b3", 5, 130.0, 105.0),
    ]
    [infy] = aggregate(positions)
    expected = (3 * 100.0 + 7 * 90.0 + 5 * 130.0) / 15
    assert infy.total_quantity == 15
    assert infy.avg_price == pytest.approx(expected)


def test_total_value_is_conserved_across_aggregation():
    positions = [
        _position("TCS", "b1", 10, 100.0, 110.0),
        _position("INFY", "b1", 4, 1500.0, 1450.0),
        _position("TCS", "b2", 6, 105.0, 110.0),
        _position("HDFC", "b2", 12, 1600.0, 1650.0),
    ]
    aggregates = aggregate(positions)
    assert sum(a.total_value for a in aggregates) == pytest.approx(
        sum(p.quantity * p.current_price for p in positions)
    )


def test_groups_follow_first_seen_order_and_are_case_sensitive():
    positions = [
        _position("ZEE", "b1", 1, 10.0, 10.0),
        _position("abc", "b1", 1, 10.0, 10.0),
        _position("ABC", "b2", 1, 10.0, 10.0),
        _position("ZEE", "b2", 1, 10.0, 10.0),
    ]
    assert [a.symbol for a in aggregate(positions)] == ["ZEE", "abc", "ABC"]


def test_pnl_percent_is_recomputed_from_cost_basis():
    positions = [
        _position("TCS", "b1", 10, 100.0, 120.0),
        _position("TCS", "b2", 10, 80.0, 120.0),
    ]
    [tcs] = aggregate(positions)
    # cost 1800, value 2400
    assert tcs.total_pnl_percent == pytest.approx(600 / 1800 * 100)


def test_day_pnl_percent_uses_value_before_day_move():
    [tcs] = aggregate([_position("TCS", "b1", 10, 100.0, 110.0, day_pnl=100.0)])
    assert tcs.day_pnl_percent == pytest.approx(10.0)


def test_zero_quantity_position_yields_zero_percentages():
    [empty] = aggregate([_position("TCS", "b1", 0, 100.0, 110.0, pnl=0.0)])
    assert empty.total_pnl_percent == 0.0
    assert empty.day_pnl_percent == 0.0
    assert empty.avg_price == 0.0
    assert not math.isnan(empty.total_pnl_percent)


def test_malformed_input_is_propagated_not_rejected():
    [odd] = aggregate([_position("TCS", "b1", -5, 100.0, 110.0)])
    assert odd.total_quantity == -5
    assert odd.total_value == pytest.approx(-550.0)
    assert odd.avg_price == pytest.approx(100.0)


def test_empty_input_returns_no_aggregates():
    assert aggregate([]) == ()

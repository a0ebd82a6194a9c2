from __future__ import annotations

import pytest

from broker_pnl import BrokerConnection, BrokerPosition, broker_performance, summarize


def _brokers(*ids: str) -> list[BrokerConnection]:
    return [BrokerConnection(id=i, display_name=f"Broker {i}", broker_type="zerodha") for i in ids]


def _position(
    symbol: str,
    broker_id: str,
    *,
    quantity: int = 10,
    current_price: float = 100.0,
    pnl: float = 0.0,
    pnl_percent: float = 0.0,
    day_pnl: float = 0.0,
) -> BrokerPosition:
    return BrokerPosition(
        symbol=symbol,
        broker_id=broker_id,
        broker_name=f"Broker {broker_id}",
        quantity=quantity,
        avg_price=current_price,
        current_price=current_price,
        pnl=pnl,
        pnl_percent=pnl_percent,
        day_pnl=day_pnl,
    )


def test_summary_totals_and_counts_per_broker():
    positions = [
        _position("TCS", "b1", quantity=10, current_price=110.0, pnl=100.0, pnl_percent=10.0, day_pnl=20.0),
        _position("INFY", "b1", quantity=5, current_price=200.0, pnl=-50.0, pnl_percent=-4.76, day_pnl=-10.0),
        _position("HDFC", "b1", quantity=1, current_price=50.0, pnl=0.0),
        _position("TCS", "b2", quantity=2, current_price=110.0, pnl=20.0, pnl_percent=10.0),
    ]
    b1, b2 = summarize(positions, _brokers("b1", "b2"))

    assert b1.broker_id == "b1"
    assert b1.broker_name == "Broker b1"
    assert b1.broker_type == "zerodha"
    assert b1.total_value == pytest.approx(1100.0 + 1000.0 + 50.0)
    assert b1.total_pnl == pytest.approx(50.0)
    assert b1.day_pnl == pytest.approx(10.0)
    assert b1.position_count == 3
    assert b1.profitable_positions == 1
    assert b1.losing_positions == 1
    assert b1.profitable_positions + b1.losing_positions <= b1.position_count
    assert b1.avg_pnl_per_position == pytest.approx(50.0 / 3)
    assert b1.total_pnl_percent == pytest.approx(50.0 / (2150.0 - 50.0) * 100)
    assert b1.day_pnl_percent == pytest.approx(10.0 / (2150.0 - 10.0) * 100)
    assert b1.top_performer == "TCS"
    assert b1.worst_performer == "INFY"

    assert b2.position_count == 1
    assert b2.top_performer == b2.worst_performer == "TCS"


def test_broker_without_positions_is_dropped():
    positions = [_position("TCS", "b2", pnl=10.0)]
    summaries = summarize(positions, _brokers("b1", "b2", "b3"))
    assert [s.broker_id for s in summaries] == ["b2"]


def test_empty_positions_yield_no_summaries():
    assert summarize([], _brokers("b1")) == ()


def test_positions_for_unregistered_brokers_are_ignored():
    positions = [_position("TCS", "ghost", pnl=10.0), _position("INFY", "b1", pnl=5.0)]
    [summary] = summarize(positions, _brokers("b1"))
    assert summary.position_count == 1
    assert summary.total_pnl == pytest.approx(5.0)


def test_identical_pnl_percent_keeps_first_position_as_performer():
    positions = [
        _position("TCS", "b1", pnl=10.0, pnl_percent=1.0),
        _position("INFY", "b1", pnl=10.0, pnl_percent=1.0),
        _position("HDFC", "b1", pnl=10.0, pnl_percent=1.0),
    ]
    [summary] = summarize(positions, _brokers("b1"))
    assert summary.top_performer == "TCS"
    assert summary.worst_performer == "TCS"


def test_duplicate_symbol_at_one_broker_compares_against_the_holding_position():
    positions = [
        _position("TCS", "b1", pnl_percent=15.0),
        _position("INFY", "b1", pnl_percent=5.0),
        _position("TCS", "b1", pnl_percent=-20.0),
        _position("HDFC", "b1", pnl_percent=10.0),
    ]
    [summary] = summarize(positions, _brokers("b1"))
    # HDFC (10) must not displace the 15% TCS holder even though a later TCS lost money
    assert summary.top_performer == "TCS"
    assert summary.worst_performer == "TCS"


def test_zero_value_broker_reports_zero_percentages():
    [summary] = summarize([_position("TCS", "b1", quantity=0, pnl=0.0)], _brokers("b1"))
    assert summary.total_pnl_percent == 0.0
    assert summary.day_pnl_percent == 0.0


def test_broker_performance_win_loss_statistics():
    positions = [
        _position("TCS", "b1", quantity=10, current_price=100.0, pnl=300.0),
        _position("INFY", "b1", quantity=10, current_price=100.0, pnl=100.0),
        _position("HDFC", "b1", quantity=10, current_price=100.0, pnl=-100.0),
        _position("WIPRO", "b1", quantity=10, current_price=100.0, pnl=0.0),
        _position("TCS", "b2", quantity=1, current_price=100.0, pnl=-5.0),
    ]
    b1, b2 = broker_performance(positions, _brokers("b1", "b2", "b3"))

    assert b1.win_rate == pytest.approx(50.0)
    assert b1.avg_win == pytest.approx(200.0)
    assert b1.avg_loss == pytest.approx(100.0)
    assert b1.profit_factor == pytest.approx(2.0)
    assert b1.return_percent == pytest.approx(300.0 / 4000.0 * 100)

    assert b2.win_rate == 0.0
    assert b2.avg_win == 0.0
    assert b2.avg_loss == pytest.approx(5.0)
    assert b2.profit_factor == 0.0

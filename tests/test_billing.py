"""Tests for the electricity bill meter."""

import pytest

from thermosim.models.billing import BillMeter


def test_one_kilowatt_hour_costs_eight():
    bill = BillMeter()

    bill.accumulate(1000.0, 3600.0)

    assert bill.total_kwh == pytest.approx(1.0)
    assert bill.total_cost() == 8.0


def test_cost_is_rounded_to_cents():
    bill = BillMeter()

    # 1357.5 W for 3 s = 4072.5 Ws
    bill.accumulate(1357.5, 3.0)

    assert bill.energy_ws == pytest.approx(4072.5)
    assert bill.total_cost() == 0.01


def test_total_cost_never_decreases():
    bill = BillMeter()
    costs = [bill.total_cost()]

    # 1 kWh = 8.0 at each non-zero step
    for power in (0.0, 1000.0, 0.0, 2000.0, 500.0):
        bill.accumulate(power, 3600.0)
        costs.append(bill.total_cost())

    assert costs == sorted(costs)
    assert costs == [0.0, 0.0, 8.0, 8.0, 24.0, 28.0]


@pytest.mark.parametrize("power, duration", [(-1.0, 3.0), (100.0, -3.0)])
def test_negative_inputs_are_rejected(power, duration):
    bill = BillMeter()

    with pytest.raises(ValueError):
        bill.accumulate(power, duration)

    assert bill.energy_ws == 0.0


def test_custom_tariff_and_points():
    bill = BillMeter(cost_per_kwh=10.0)
    bill.accumulate(2000.0, 1800.0)

    points = bill.get_points()

    assert points['kwh_total'] == pytest.approx(1.0)
    assert points['total_cost'] == 10.0
    assert points['cost_per_kwh'] == 10.0

"""Tests for the warning line, maintenance reminder and per-person energy."""

import pytest

from tests.helpers import make_result
from thermosim.models.advisories import (
    EMPTY_ROOM_WARNING, ENERGY_TIP, MAINTENANCE_RUNTIME_SECONDS, OVERHEAT_WARNING,
    energy_per_person_kwh, evaluate, warning_for,
)


def test_overheat_has_highest_priority():
    result = make_result(occupancy=0, temperature=30.0, total_power=3000.0)

    assert warning_for(result, 21.0) == OVERHEAT_WARNING


def test_empty_room_warning():
    result = make_result(occupancy=0, temperature=20.0, total_power=3000.0)

    assert warning_for(result, 21.0) == EMPTY_ROOM_WARNING


def test_energy_tip_above_2500_watts():
    assert warning_for(make_result(temperature=20.0, total_power=2600.0), 21.0) == ENERGY_TIP
    assert warning_for(make_result(temperature=20.0, total_power=2500.0), 21.0) == ""


def test_no_warning_when_comfortable():
    assert warning_for(make_result(temperature=21.0, total_power=100.0), 21.0) == ""


def test_energy_per_person():
    # 1200 W for 3 s = 3600 Ws = 0.001 kWh, split over 4 people
    result = make_result(occupancy=4, total_power=1200.0)

    assert energy_per_person_kwh(result, 3.0) == pytest.approx(0.00025)
    assert energy_per_person_kwh(make_result(occupancy=0), 3.0) is None


def test_maintenance_after_24_hours():
    result = make_result()

    assert not evaluate(result, 21.0, MAINTENANCE_RUNTIME_SECONDS, 3.0).maintenance_due
    assert evaluate(result, 21.0, MAINTENANCE_RUNTIME_SECONDS + 1, 3.0).maintenance_due


def test_evaluate_combines_everything():
    result = make_result(temperature=20.0, total_power=2600.0, occupancy=2)

    advisories = evaluate(result, 21.0, 60, 3.0)

    assert advisories.warning == ENERGY_TIP
    assert advisories.high_power_tip is True
    assert advisories.maintenance_due is False
    assert advisories.energy_per_person_kwh == pytest.approx(round(2600.0 * 3 / 3_600_000 / 2, 5))

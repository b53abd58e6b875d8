"""Builders for results and reports used across the presenter tests."""

from thermosim.models.controls import ControlSnapshot
from thermosim.models.results import Advisories, SimulationResult, TickReport


def make_result(**overrides):
    values = dict(
        occupancy=15,
        temperature=30.0,
        humidity=51.5,
        ac_power=720.0,
        secondary_ac_power=540.0,
        humidifier_power=37.5,
        fan_power=60.0,
        heater_power=0.0,
        total_power=1357.5,
    )
    values.update(overrides)
    return SimulationResult(**values)


def make_report(result=None, total_cost=0.01, runtime_seconds=3, advisories=None):
    return TickReport(
        result=result or make_result(),
        total_cost=total_cost,
        runtime_seconds=runtime_seconds,
        controls=ControlSnapshot(),
        advisories=advisories or Advisories(),
    )

"""Shared fixtures for the thermostat simulator tests."""

import pytest

from thermosim.interfaces import Sensor
from thermosim.models import SimulationEngine, ThermostatControls


class FixedSensor(Sensor):
    """Sensor stub that always reads the same value and records resets."""

    def __init__(self, reading: float):
        self.reading = reading
        self.resets = []

    def sample(self) -> float:
        return self.reading

    def reset(self, value: float) -> None:
        self.resets.append(value)


@pytest.fixture
def controls():
    return ThermostatControls(desired_temp=21.0, window_open=False, tick_interval_ms=3000, month="March")


@pytest.fixture
def make_engine(controls):
    """Build an engine with stubbed sensors and a fixed occupancy."""

    def _make(temperature_reading=15.0, humidity_reading=50.0, occupancy=0, **kwargs):
        return SimulationEngine(
            kwargs.pop('controls', controls),
            temperature_sensor=FixedSensor(temperature_reading),
            humidity_sensor=FixedSensor(humidity_reading),
            occupancy_source=lambda: occupancy,
            **kwargs,
        )

    return _make

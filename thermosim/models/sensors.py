"""
Environment sensors with random perturbation around a settable baseline.
"""
import math
import random
from typing import Optional

from thermosim.interfaces import Sensor


def round_half_up(value: float) -> float:
    """Round to the nearest integer, ties away from negative infinity."""
    return float(math.floor(value + 0.5))


class TemperatureSensor(Sensor):
    """
    Room temperature sensor (°C).
    Each sample drifts the internal value by a uniform amount in [-5, 0).
    """

    NOISE_LOW = -5.0
    NOISE_HIGH = 0.0

    def __init__(self, base_temperature: float, rng: Optional[random.Random] = None):
        self._value = float(base_temperature)
        self._rng = rng or random.Random()

    @property
    def current_value(self) -> float:
        return self._value

    def sample(self) -> float:
        self._value += self.NOISE_LOW + self._rng.random() * (self.NOISE_HIGH - self.NOISE_LOW)
        # Reading is half the internal value
        return round_half_up(self._value * 5) / 10.0

    def reset(self, value: float) -> None:
        self._value = float(value)


class HumiditySensor(Sensor):
    """Relative humidity sensor (%). Each sample drifts by a uniform amount in [-15, 15)."""

    NOISE_LOW = -15.0
    NOISE_HIGH = 15.0

    def __init__(self, base_humidity: float, rng: Optional[random.Random] = None):
        self._value = float(base_humidity)
        self._rng = rng or random.Random()

    @property
    def current_value(self) -> float:
        return self._value

    def sample(self) -> float:
        self._value += self.NOISE_LOW + self._rng.random() * (self.NOISE_HIGH - self.NOISE_LOW)
        return round_half_up(self._value * 10) / 10.0

    def reset(self, value: float) -> None:
        self._value = float(value)

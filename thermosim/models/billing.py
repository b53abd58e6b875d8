from typing import Dict

from thermosim.interfaces import PointProvider

WATT_SECONDS_PER_KWH = 3_600_000.0


class BillMeter(PointProvider):
    """
    Electricity meter for the room.
    Accumulates energy in watt-seconds and converts it to a monetary cost.
    """

    def __init__(self, cost_per_kwh: float = 8.0):
        if cost_per_kwh < 0:
            raise ValueError(f"cost_per_kwh must be non-negative, got {cost_per_kwh}")
        self._cost_per_kwh = float(cost_per_kwh)
        self._watt_seconds = 0.0

    @property
    def cost_per_kwh(self) -> float:
        return self._cost_per_kwh

    @property
    def energy_ws(self) -> float:
        """Cumulative energy in watt-seconds."""
        return self._watt_seconds

    @property
    def total_kwh(self) -> float:
        return self._watt_seconds / WATT_SECONDS_PER_KWH

    def accumulate(self, power_watts: float, duration_seconds: float) -> None:
        """Add `power_watts x duration_seconds` to the running total."""
        if power_watts < 0:
            raise ValueError(f"power must be non-negative, got {power_watts} W")
        if duration_seconds < 0:
            raise ValueError(f"duration must be non-negative, got {duration_seconds} s")
        self._watt_seconds += power_watts * duration_seconds

    def total_cost(self) -> float:
        return round(self.total_kwh * self._cost_per_kwh, 2)

    def get_points(self) -> Dict[str, float]:
        return {
            'energy_ws': self._watt_seconds,
            'kwh_total': self.total_kwh,
            'cost_per_kwh': self._cost_per_kwh,
            'total_cost': self.total_cost(),
        }

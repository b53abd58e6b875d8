from dataclasses import dataclass
from typing import Any, Dict, Optional

from .controls import ControlSnapshot


@dataclass(frozen=True)
class SimulationResult:
    """Snapshot of one tick. Immutable once produced."""
    occupancy: int
    temperature: float
    humidity: float
    ac_power: float
    secondary_ac_power: float
    humidifier_power: float
    fan_power: float
    heater_power: float
    total_power: float

    @property
    def cooling(self) -> bool:
        return self.ac_power > 0 or self.secondary_ac_power > 0

    @property
    def heating(self) -> bool:
        return self.heater_power > 0

    @property
    def total_power_kw(self) -> float:
        return self.total_power / 1000.0

    def get_points(self) -> Dict[str, float]:
        return {
            'occupancy': self.occupancy,
            'temperature': self.temperature,
            'humidity': self.humidity,
            'ac_power': self.ac_power,
            'secondary_ac_power': self.secondary_ac_power,
            'humidifier_power': self.humidifier_power,
            'fan_power': self.fan_power,
            'heater_power': self.heater_power,
            'total_power': self.total_power,
        }


@dataclass(frozen=True)
class Advisories:
    warning: str = ""
    maintenance_due: bool = False
    high_power_tip: bool = False
    energy_per_person_kwh: Optional[float] = None


@dataclass(frozen=True)
class TickReport:
    """What presenters receive after each tick."""
    result: SimulationResult
    total_cost: float
    runtime_seconds: int
    controls: ControlSnapshot
    advisories: Advisories

    def to_dict(self) -> Dict[str, Any]:
        data = dict(self.result.get_points())
        data.update({
            'total_power_kw': round(self.result.total_power_kw, 3),
            'total_cost': self.total_cost,
            'runtime_seconds': self.runtime_seconds,
            'warning': self.advisories.warning,
            'maintenance_due': self.advisories.maintenance_due,
            'high_power_tip': self.advisories.high_power_tip,
            'energy_per_person_kwh': self.advisories.energy_per_person_kwh,
            'desired_temp': self.controls.desired_temp,
        })
        return data

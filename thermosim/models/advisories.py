"""
Operator advisories derived from a tick result: the dashboard warning line,
the AC maintenance reminder and per-person energy use.
"""
from typing import Optional

from .results import Advisories, SimulationResult

OVERHEAT_WARNING = "ALERT: Room is overheating!"
EMPTY_ROOM_WARNING = "No one is in the room. AC is off."
ENERGY_TIP = "Tip: Reduce room temp by 1°C to save ~7% energy."
MAINTENANCE_WARNING = "Maintenance Alert: AC runtime exceeded 24 hours."

HIGH_POWER_WATTS = 2500.0
MAINTENANCE_RUNTIME_SECONDS = 24 * 60 * 60


def warning_for(result: SimulationResult, desired_temp: float) -> str:
    """First matching warning, in priority order; empty when all is well."""
    if result.temperature > desired_temp:
        return OVERHEAT_WARNING
    if result.occupancy == 0:
        return EMPTY_ROOM_WARNING
    if result.total_power > HIGH_POWER_WATTS:
        return ENERGY_TIP
    return ""


def energy_per_person_kwh(result: SimulationResult, interval_seconds: float) -> Optional[float]:
    if result.occupancy <= 0:
        return None
    total_kwh = result.total_power * interval_seconds / 3_600_000.0
    return round(total_kwh / result.occupancy, 5)


def evaluate(result: SimulationResult, desired_temp: float,
             runtime_seconds: float, interval_seconds: float) -> Advisories:
    return Advisories(
        warning=warning_for(result, desired_temp),
        maintenance_due=runtime_seconds > MAINTENANCE_RUNTIME_SECONDS,
        high_power_tip=result.total_power > HIGH_POWER_WATTS,
        energy_per_person_kwh=energy_per_person_kwh(result, interval_seconds),
    )

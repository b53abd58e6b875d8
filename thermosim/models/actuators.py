from dataclasses import dataclass, field
from typing import Dict, Optional

from .types import ActuatorKind, TargetSource


@dataclass(frozen=True)
class ActuatorConfig:
    """
    Immutable per-actuator constants.
    The variant is selected by `kind`, so one Actuator type covers every device.
    """
    name: str
    kind: ActuatorKind
    target: Optional[float] = None  # None when the target follows the live setpoint
    target_source: TargetSource = TargetSource.FIXED
    watts_per_unit: float = 0.0  # W per °C or W per % RH
    max_watts: Optional[float] = None  # None = uncapped
    threshold: float = 0.0  # STEP actuators switch on above this value
    step_watts: float = 0.0


# Typical window AC unit ~1000W at max
PRIMARY_AC = ActuatorConfig(
    name="Primary AC",
    kind=ActuatorKind.PROPORTIONAL,
    target_source=TargetSource.SETPOINT,
    watts_per_unit=80.0,
    max_watts=1000.0,
)

# Smaller unit ~750W max
SECONDARY_AC = ActuatorConfig(
    name="Secondary AC",
    kind=ActuatorKind.PROPORTIONAL,
    target_source=TargetSource.SETPOINT,
    watts_per_unit=60.0,
    max_watts=750.0,
)

HEATER = ActuatorConfig(
    name="Heater",
    kind=ActuatorKind.HEATING,
    target=21.0,
    watts_per_unit=150.0,
)

HUMIDIFIER = ActuatorConfig(
    name="Humidifier",
    kind=ActuatorKind.PROPORTIONAL,
    target=50.0,
    watts_per_unit=25.0,
    max_watts=300.0,
)

# Typical ceiling fan ~60W
SMART_FAN = ActuatorConfig(
    name="Smart Fan",
    kind=ActuatorKind.STEP,
    threshold=26.0,
    step_watts=60.0,
)


@dataclass(frozen=True)
class Actuator:
    """Stateless power model: a pure function of the sensed value and the config."""
    config: ActuatorConfig

    @property
    def name(self) -> str:
        return self.config.name

    def _target(self, setpoint: Optional[float]) -> float:
        if self.config.target_source == TargetSource.SETPOINT:
            if setpoint is None:
                raise ValueError(f"{self.config.name} requires the desired temperature setpoint")
            return float(setpoint)
        return float(self.config.target)

    def _cap(self, watts: float) -> float:
        if self.config.max_watts is None:
            return watts
        return min(self.config.max_watts, watts)

    def power(self, current_value: float, setpoint: Optional[float] = None) -> float:
        """Power draw in watts for the given reading."""
        cfg = self.config

        if cfg.kind == ActuatorKind.STEP:
            return cfg.step_watts if current_value > cfg.threshold else 0.0

        target = self._target(setpoint)

        if cfg.kind == ActuatorKind.HEATING:
            # No cooling capability
            if current_value >= target:
                return 0.0
            return self._cap(round((target - current_value) * cfg.watts_per_unit, 1))

        diff = abs(current_value - target)
        return self._cap(round(diff * cfg.watts_per_unit, 1))


@dataclass(frozen=True)
class ActuatorBank:
    """The closed set of devices installed in the room."""
    primary_ac: Actuator = field(default_factory=lambda: Actuator(PRIMARY_AC))
    secondary_ac: Actuator = field(default_factory=lambda: Actuator(SECONDARY_AC))
    heater: Actuator = field(default_factory=lambda: Actuator(HEATER))
    humidifier: Actuator = field(default_factory=lambda: Actuator(HUMIDIFIER))
    fan: Actuator = field(default_factory=lambda: Actuator(SMART_FAN))

    def describe(self) -> Dict[str, Dict]:
        """Nameplate data for each device, keyed by attribute name."""
        result = {}
        for key in ('primary_ac', 'secondary_ac', 'heater', 'humidifier', 'fan'):
            cfg = getattr(self, key).config
            result[key] = {
                'name': cfg.name,
                'kind': cfg.kind.value,
                'target': cfg.target,
                'target_source': cfg.target_source.value,
                'watts_per_unit': cfg.watts_per_unit,
                'max_watts': cfg.max_watts,
            }
        return result

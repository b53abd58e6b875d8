from .types import ActuatorKind, TargetSource, SensorMode, EngineState
from .sensors import TemperatureSensor, HumiditySensor
from .actuators import (
    ActuatorConfig, Actuator, ActuatorBank,
    PRIMARY_AC, SECONDARY_AC, HEATER, HUMIDIFIER, SMART_FAN
)
from .billing import BillMeter
from .controls import ThermostatControls, ControlSnapshot
from .results import SimulationResult, TickReport, Advisories
from .engine import SimulationEngine
from .scheduler import SimulationRunner

__all__ = [
    'ActuatorKind', 'TargetSource', 'SensorMode', 'EngineState',
    'TemperatureSensor', 'HumiditySensor',
    'ActuatorConfig', 'Actuator', 'ActuatorBank',
    'PRIMARY_AC', 'SECONDARY_AC', 'HEATER', 'HUMIDIFIER', 'SMART_FAN',
    'BillMeter',
    'ThermostatControls', 'ControlSnapshot',
    'SimulationResult', 'TickReport', 'Advisories',
    'SimulationEngine',
    'SimulationRunner',
]

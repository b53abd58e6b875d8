from enum import Enum

class ActuatorKind(Enum):
    PROPORTIONAL = "Proportional"  # |current - target| x coefficient, capped
    HEATING = "Heating"            # only draws power below target
    STEP = "Step"                  # fixed wattage above a threshold

class TargetSource(Enum):
    FIXED = "Fixed"
    SETPOINT = "Setpoint"  # follows the live desired temperature

class SensorMode(Enum):
    ANCHORED = "Anchored"  # sensors re-baselined every tick
    DRIFTING = "Drifting"  # random walk, re-baselined only when the month changes

class EngineState(Enum):
    IDLE = "Idle"
    RUNNING = "Running"

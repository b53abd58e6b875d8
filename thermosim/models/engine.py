import logging
import random
from typing import Callable, Dict, Optional

from thermosim.climate import Baseline
from thermosim.interfaces import PointProvider, Sensor
from .actuators import ActuatorBank
from .billing import BillMeter
from .controls import ControlSnapshot, ThermostatControls
from .results import SimulationResult
from .sensors import HumiditySensor, TemperatureSensor
from .types import EngineState, SensorMode

logger = logging.getLogger("ThermostatEngine")

MAX_OCCUPANCY = 20
RUNAWAY_TEMPERATURE = 45.0
DEGREES_PER_PERSON = 1.0
HUMIDITY_PER_PERSON = 0.1
WINDOW_COOLING = 1.5
HEATER_WATTS_PER_DEGREE_GAIN = 600.0
SECONDARY_AC_MIN_OCCUPANCY = 11
FAN_MIN_OCCUPANCY = 6


class SimulationEngine(PointProvider):
    """
    Single-room thermostat simulation (SRP - computes one tick at a time).
    Depends on abstractions (DIP) - sensors, actuators and the bill meter can be injected.

    The engine never blocks and never schedules itself; callers must serialize
    calls to step().
    """

    def __init__(self,
                 controls: ThermostatControls,
                 temperature_sensor: Sensor = None,
                 humidity_sensor: Sensor = None,
                 actuators: ActuatorBank = None,
                 bill: BillMeter = None,
                 rng: random.Random = None,
                 occupancy_source: Callable[[], int] = None,
                 sensor_mode: SensorMode = SensorMode.ANCHORED):
        self._controls = controls
        self._rng = rng or random.Random()

        baseline = controls.snapshot().baseline
        self._baseline: Baseline = baseline
        self._temperature_sensor = temperature_sensor or TemperatureSensor(baseline.temperature, self._rng)
        self._humidity_sensor = humidity_sensor or HumiditySensor(baseline.humidity, self._rng)
        self._actuators = actuators or ActuatorBank()
        self._bill = bill or BillMeter()
        self._occupancy_source = occupancy_source or self._draw_occupancy
        self._sensor_mode = sensor_mode

        self._state = EngineState.IDLE
        self._runtime_ms = 0
        self._ticks = 0
        self._last_result: Optional[SimulationResult] = None

        logger.info(f"Engine created (baseline {baseline.temperature}°C / {baseline.humidity}% RH, "
                    f"sensor mode {sensor_mode.value})")

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def bill(self) -> BillMeter:
        return self._bill

    @property
    def actuators(self) -> ActuatorBank:
        return self._actuators

    @property
    def sensor_mode(self) -> SensorMode:
        return self._sensor_mode

    @property
    def ticks(self) -> int:
        """Number of completed ticks."""
        return self._ticks

    @property
    def last_result(self) -> Optional[SimulationResult]:
        return self._last_result

    def total_cost(self) -> float:
        return self._bill.total_cost()

    def total_runtime_seconds(self) -> int:
        """Elapsed simulated seconds."""
        return self._runtime_ms // 1000

    def _draw_occupancy(self) -> int:
        return self._rng.randint(0, MAX_OCCUPANCY)

    def _rebaseline(self, snapshot: ControlSnapshot) -> None:
        """Reset sensors to the active month's baseline."""
        baseline = snapshot.baseline
        if self._sensor_mode == SensorMode.DRIFTING and baseline == self._baseline:
            return
        if baseline != self._baseline:
            logger.info(f"Baseline changed to {snapshot.month}: "
                        f"{baseline.temperature}°C / {baseline.humidity}% RH")
        self._temperature_sensor.reset(baseline.temperature)
        self._humidity_sensor.reset(baseline.humidity)
        self._baseline = baseline

    def step(self, duration_s: Optional[float] = None,
             snapshot: Optional[ControlSnapshot] = None) -> SimulationResult:
        """
        Advance the simulation by one tick.

        duration_s defaults to the configured tick interval. The bill is charged
        for the tick's total power over that duration. A scheduler that has
        already read the controls may pass its snapshot so both agree.
        """
        if snapshot is None:
            snapshot = self._controls.snapshot()
        if duration_s is None:
            duration_s = snapshot.tick_interval_s
        if duration_s < 0:
            raise ValueError(f"Tick duration must be non-negative, got {duration_s}")

        self._rebaseline(snapshot)
        acts = self._actuators

        people = int(self._occupancy_source())
        temp = self._temperature_sensor.sample() + people * DEGREES_PER_PERSON
        if snapshot.window_open:
            temp -= WINDOW_COOLING
        if temp > RUNAWAY_TEMPERATURE:
            # Sensor blow-up: replace with a fresh reading
            temp = float(self._rng.randrange(40))
        humidity = self._humidity_sensor.sample() + people * HUMIDITY_PER_PERSON

        desired = snapshot.desired_temp
        temp_diff = temp - desired

        if temp_diff > 0:
            # Room is too warm, use AC
            heater_power = 0.0
            ac_power = 0.0 if people == 0 else acts.primary_ac.power(temp, desired)
            if people >= SECONDARY_AC_MIN_OCCUPANCY:
                secondary_ac_power = acts.secondary_ac.power(temp, desired)
            else:
                secondary_ac_power = 0.0
        else:
            ac_power = 0.0
            secondary_ac_power = 0.0
            heater_power = acts.heater.power(temp)

        humidifier_power = acts.humidifier.power(humidity)
        fan_power = acts.fan.power(temp) if people >= FAN_MIN_OCCUPANCY else 0.0

        temp += heater_power / HEATER_WATTS_PER_DEGREE_GAIN
        total_power = ac_power + secondary_ac_power + humidifier_power + fan_power + heater_power

        self._runtime_ms += int(round(duration_s * 1000))
        self._bill.accumulate(total_power, duration_s)

        result = SimulationResult(
            occupancy=people,
            temperature=temp,
            humidity=humidity,
            ac_power=ac_power,
            secondary_ac_power=secondary_ac_power,
            humidifier_power=humidifier_power,
            fan_power=fan_power,
            heater_power=heater_power,
            total_power=total_power,
        )
        self._last_result = result
        self._ticks += 1
        self._state = EngineState.RUNNING

        logger.debug(f"Tick {self._ticks}: {people} people, {temp:.2f}°C, {humidity:.1f}% RH, "
                     f"{total_power:.1f} W")
        return result

    def get_points(self) -> Dict[str, float]:
        points = {
            'ticks': self._ticks,
            'runtime_seconds': self.total_runtime_seconds(),
            'total_cost': self.total_cost(),
        }
        if self._last_result:
            points.update(self._last_result.get_points())
        return points

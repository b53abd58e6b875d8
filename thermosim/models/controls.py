import logging
import math
import threading
from dataclasses import dataclass, replace
from typing import Any, Dict, Optional

from thermosim.climate import Baseline, canonical_month, get_baseline, month_names

logger = logging.getLogger("ThermostatEngine")


@dataclass(frozen=True)
class ControlSnapshot:
    """Immutable copy of the shared settings, taken once at the start of a tick."""
    desired_temp: float = 21.0
    window_open: bool = False
    tick_interval_ms: int = 3000
    month: str = "January"
    alert_sound: bool = False

    @property
    def tick_interval_s(self) -> float:
        return self.tick_interval_ms / 1000.0

    @property
    def baseline(self) -> Baseline:
        return get_baseline(self.month)


class ThermostatControls:
    """
    Shared settings written by the presentation layer and read by the engine.
    Read-mostly: the engine takes a snapshot per tick instead of holding the lock.
    Invalid values are rejected here so they never reach the engine.
    """

    # Numeric parameter metadata (UI ranges)
    DEFAULTS = {
        'desired_temp': {
            'value': 21.0,
            'min': 16.0,
            'max': 30.0,
            'unit': '°C',
            'description': 'Desired room temperature (setpoint)',
        },
        'tick_interval_ms': {
            'value': 3000,
            'min': 100,
            'max': 60000,
            'unit': 'ms',
            'description': 'Simulated and wall time between ticks',
        },
    }

    def __init__(self, desired_temp: float = 21.0, window_open: bool = False,
                 tick_interval_ms: int = 3000, month: str = "January",
                 alert_sound: bool = False):
        self._lock = threading.Lock()
        self._state = ControlSnapshot(
            desired_temp=self._validate_desired_temp(desired_temp),
            window_open=self._validate_flag('window_open', window_open),
            tick_interval_ms=self._validate_interval(tick_interval_ms),
            month=self._validate_month(month),
            alert_sound=self._validate_flag('alert_sound', alert_sound),
        )

    # --- Validation ---

    @classmethod
    def _validate_range(cls, key: str, value: float) -> None:
        spec = cls.DEFAULTS[key]
        if value < spec['min'] or value > spec['max']:
            raise ValueError(
                f"{key} must be between {spec['min']} and {spec['max']} {spec['unit']}, got {value}"
            )

    @classmethod
    def _validate_desired_temp(cls, value: Any) -> float:
        if isinstance(value, bool):
            raise ValueError(f"desired_temp must be a number, got {value!r}")
        try:
            value = float(value)
        except (TypeError, ValueError, OverflowError):
            raise ValueError(f"desired_temp must be a number, got {value!r}")
        if not math.isfinite(value):
            raise ValueError(f"desired_temp must be a finite number, got {value!r}")
        cls._validate_range('desired_temp', value)
        return value

    @classmethod
    def _validate_interval(cls, value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, (int, float, str)):
            raise ValueError(f"tick_interval_ms must be an integer, got {value!r}")
        try:
            as_float = float(value)
        except (ValueError, OverflowError):
            raise ValueError(f"tick_interval_ms must be an integer, got {value!r}")
        if not math.isfinite(as_float):
            raise ValueError(f"tick_interval_ms must be a finite number, got {value!r}")
        if as_float != int(as_float):
            raise ValueError(f"tick_interval_ms must be an integer, got {value!r}")
        if as_float <= 0:
            raise ValueError(f"tick_interval_ms must be positive, got {value!r}")
        cls._validate_range('tick_interval_ms', int(as_float))
        return int(as_float)

    @staticmethod
    def _validate_flag(key: str, value: Any) -> bool:
        if not isinstance(value, bool):
            raise ValueError(f"{key} must be true or false, got {value!r}")
        return value

    @staticmethod
    def _validate_month(value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError(f"month must be a month name, got {value!r}")
        return canonical_month(value)

    _VALIDATORS = {
        'desired_temp': '_validate_desired_temp',
        'tick_interval_ms': '_validate_interval',
        'month': '_validate_month',
    }

    def _validate(self, key: str, value: Any) -> Any:
        if key in ('window_open', 'alert_sound'):
            return self._validate_flag(key, value)
        if key not in self._VALIDATORS:
            raise ValueError(f"Unknown control: {key}")
        return getattr(self, self._VALIDATORS[key])(value)

    # --- Access ---

    def snapshot(self) -> ControlSnapshot:
        with self._lock:
            return self._state

    def update(self, **changes: Any) -> ControlSnapshot:
        """Validate and apply several settings atomically. Nothing is applied if any value is invalid."""
        validated = {key: self._validate(key, value) for key, value in changes.items()}
        with self._lock:
            self._state = replace(self._state, **validated)
            state = self._state
        if validated:
            logger.info(f"Controls updated: {validated}")
        return state

    @property
    def desired_temp(self) -> float:
        return self.snapshot().desired_temp

    @desired_temp.setter
    def desired_temp(self, value: float) -> None:
        self.update(desired_temp=value)

    @property
    def window_open(self) -> bool:
        return self.snapshot().window_open

    @window_open.setter
    def window_open(self, value: bool) -> None:
        self.update(window_open=value)

    @property
    def tick_interval_ms(self) -> int:
        return self.snapshot().tick_interval_ms

    @tick_interval_ms.setter
    def tick_interval_ms(self, value: int) -> None:
        self.update(tick_interval_ms=value)

    @property
    def month(self) -> str:
        return self.snapshot().month

    @month.setter
    def month(self, value: str) -> None:
        self.update(month=value)

    @property
    def alert_sound(self) -> bool:
        return self.snapshot().alert_sound

    @alert_sound.setter
    def alert_sound(self, value: bool) -> None:
        self.update(alert_sound=value)

    def get_all(self) -> Dict[str, Dict]:
        """Get all controls with their current values and metadata."""
        state = self.snapshot()
        result = {}
        for key, spec in self.DEFAULTS.items():
            result[key] = {
                'value': getattr(state, key),
                'default': spec['value'],
                'min': spec['min'],
                'max': spec['max'],
                'unit': spec['unit'],
                'description': spec['description'],
            }
        result['window_open'] = {'value': state.window_open, 'default': False}
        result['alert_sound'] = {'value': state.alert_sound, 'default': False}
        result['month'] = {'value': state.month, 'default': 'January', 'options': month_names()}
        return result

    def as_dict(self, state: Optional[ControlSnapshot] = None) -> Dict[str, Any]:
        state = state or self.snapshot()
        return {
            'desired_temp': state.desired_temp,
            'window_open': state.window_open,
            'tick_interval_ms': state.tick_interval_ms,
            'month': state.month,
            'alert_sound': state.alert_sound,
        }

"""
Application settings loaded from YAML, with environment variable overrides.
"""
import os
import yaml
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from thermosim.models.controls import ThermostatControls
from thermosim.models.types import SensorMode

logger = logging.getLogger("Settings")

DEFAULT_CONFIG_PATH = os.path.join(os.path.dirname(__file__), 'config', 'thermostat.yaml')


@dataclass
class AppSettings:
    # Initial control values
    month: str = "January"
    desired_temp: float = 21.0
    window_open: bool = False
    tick_interval_ms: int = 3000
    alert_sound: bool = False
    # Simulation
    sensor_mode: SensorMode = SensorMode.ANCHORED
    seed: Optional[str] = None
    # Presentation
    log_file: str = "thermostat_log.txt"
    history_window: int = 200
    console_output: bool = True
    # Web
    web_host: str = "0.0.0.0"
    web_port: int = 8080
    autostart: bool = False
    config_file: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def build_controls(self) -> ThermostatControls:
        """Create the shared controls. Raises ValueError on out-of-range values."""
        return ThermostatControls(
            desired_temp=self.desired_temp,
            window_open=self.window_open,
            tick_interval_ms=self.tick_interval_ms,
            month=self.month,
            alert_sound=self.alert_sound,
        )


def _read_yaml(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        logger.warning(f"Config file not found: {path}")
        return {}
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Failed to load config from {path}: {e}")
        return {}
    if not isinstance(data, dict):
        logger.error(f"Config file {path} must contain a mapping, ignoring it")
        return {}
    return data


def _parse_sensor_mode(value: Any) -> SensorMode:
    if isinstance(value, SensorMode):
        return value
    try:
        return SensorMode(str(value).capitalize())
    except ValueError:
        logger.warning(f"Unknown sensor mode '{value}', using Anchored")
        return SensorMode.ANCHORED


def load_settings(path: str = None, environ: Dict[str, str] = None) -> AppSettings:
    """
    Load settings from a YAML file (default: THERMOSIM_CONFIG or the bundled
    thermostat.yaml) and apply environment overrides.
    """
    env = os.environ if environ is None else environ
    path = path or env.get("THERMOSIM_CONFIG") or DEFAULT_CONFIG_PATH
    data = _read_yaml(path)

    controls = data.get('controls', {}) or {}
    simulation = data.get('simulation', {}) or {}
    presentation = data.get('presentation', {}) or {}
    web = data.get('web', {}) or {}

    settings = AppSettings(
        month=controls.get('month', "January"),
        desired_temp=controls.get('desired_temp', 21.0),
        window_open=controls.get('window_open', False),
        tick_interval_ms=controls.get('tick_interval_ms', 3000),
        alert_sound=controls.get('alert_sound', False),
        sensor_mode=_parse_sensor_mode(simulation.get('sensor_mode', 'anchored')),
        seed=simulation.get('seed'),
        log_file=presentation.get('log_file', "thermostat_log.txt"),
        history_window=int(presentation.get('history_window', 200)),
        console_output=bool(presentation.get('console_output', True)),
        web_host=web.get('host', "0.0.0.0"),
        web_port=int(web.get('port', 8080)),
        autostart=bool(data.get('autostart', False)),
        config_file=path,
        extra={k: v for k, v in data.items()
               if k not in ('controls', 'simulation', 'presentation', 'web', 'autostart')},
    )

    # Environment overrides
    settings.web_host = env.get("WEB_HOST", settings.web_host)
    settings.web_port = int(env.get("WEB_PORT", settings.web_port))
    settings.log_file = env.get("THERMOSIM_LOG_FILE", settings.log_file)
    if env.get("SEED"):
        settings.seed = env["SEED"]

    logger.info(f"Loaded settings from {path}")
    return settings

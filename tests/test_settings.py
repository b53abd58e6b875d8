"""Tests for YAML settings and environment overrides."""

import pytest

from thermosim.models.types import SensorMode
from thermosim.settings import DEFAULT_CONFIG_PATH, load_settings

CONFIG = """
controls:
  month: july
  desired_temp: 24
  window_open: true
  tick_interval_ms: 1000
simulation:
  sensor_mode: drifting
  seed: abc
presentation:
  log_file: out/log.txt
  history_window: 50
  console_output: false
web:
  host: 127.0.0.1
  port: 9000
autostart: true
site: lab-3
"""


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "thermostat.yaml"
    path.write_text(CONFIG, encoding="utf-8")
    return str(path)


def test_load_from_yaml(config_file):
    settings = load_settings(config_file, environ={})

    assert settings.month == "july"
    assert settings.desired_temp == 24
    assert settings.window_open is True
    assert settings.sensor_mode == SensorMode.DRIFTING
    assert settings.seed == "abc"
    assert settings.log_file == "out/log.txt"
    assert settings.history_window == 50
    assert settings.console_output is False
    assert settings.web_host == "127.0.0.1"
    assert settings.web_port == 9000
    assert settings.autostart is True
    assert settings.extra == {'site': 'lab-3'}


def test_build_controls_validates_and_canonicalizes(config_file):
    controls = load_settings(config_file, environ={}).build_controls()

    assert controls.month == "July"
    assert controls.tick_interval_ms == 1000


def test_environment_overrides(config_file):
    env = {"WEB_HOST": "0.0.0.0", "WEB_PORT": "9090", "THERMOSIM_LOG_FILE": "/tmp/t.log", "SEED": "42"}

    settings = load_settings(config_file, environ=env)

    assert settings.web_host == "0.0.0.0"
    assert settings.web_port == 9090
    assert settings.log_file == "/tmp/t.log"
    assert settings.seed == "42"


def test_config_path_from_environment(config_file):
    settings = load_settings(environ={"THERMOSIM_CONFIG": config_file})

    assert settings.config_file == config_file
    assert settings.web_port == 9000


def test_missing_file_gives_defaults(tmp_path):
    settings = load_settings(str(tmp_path / "missing.yaml"), environ={})

    assert settings.month == "January"
    assert settings.tick_interval_ms == 3000
    assert settings.sensor_mode == SensorMode.ANCHORED


def test_malformed_yaml_gives_defaults(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("controls: [unclosed", encoding="utf-8")

    settings = load_settings(str(path), environ={})

    assert settings.desired_temp == 21.0


def test_unknown_sensor_mode_falls_back(tmp_path):
    path = tmp_path / "mode.yaml"
    path.write_text("simulation:\n  sensor_mode: wobbly\n", encoding="utf-8")

    assert load_settings(str(path), environ={}).sensor_mode == SensorMode.ANCHORED


def test_bundled_config_loads():
    settings = load_settings(DEFAULT_CONFIG_PATH, environ={})

    assert settings.build_controls().snapshot().month == "January"
    assert settings.web_port == 8080

"""
Output adapters for tick reports: the append-only text log, the console
summary and the in-memory state behind the web dashboard.
"""
import logging
import os
import threading
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Optional

from thermosim.interfaces import TickSink
from thermosim.models.advisories import MAINTENANCE_WARNING
from thermosim.models.results import TickReport

logger = logging.getLogger("Presenters")

RECORD_SEPARATOR = "----------------------------"


def format_log_record(report: TickReport) -> str:
    """One human-readable record, newline terminated."""
    r = report.result
    lines = [
        f"People in room: {r.occupancy}",
        f"Current Room Temperature: {r.temperature} °C",
        f"AC Power Consumption: {r.ac_power} W",
        f"Secondary AC Power Consumption: {r.secondary_ac_power} W",
        f"Current Room Humidity: {r.humidity} %",
        f"Humidifier Power Consumption: {r.humidifier_power} W",
        f"Smart Fan Power Consumption: {r.fan_power} W",
        f"Heater Power Consumption: {r.heater_power} W",
        f"Total Electricity Cost: ${report.total_cost}",
        RECORD_SEPARATOR,
    ]
    return "\n".join(lines) + "\n"


class LogFilePresenter(TickSink):
    """
    Appends one record per tick to a UTF-8 text file (created if absent).
    No rotation. A failed write is reported and skipped; the simulation goes on.
    """

    def __init__(self, path: str):
        self._path = path
        self._failures = 0

    @property
    def path(self) -> str:
        return self._path

    @property
    def failures(self) -> int:
        """Number of records that could not be written."""
        return self._failures

    def handle(self, report: TickReport) -> None:
        record = format_log_record(report)
        try:
            directory = os.path.dirname(self._path)
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(record)
        except OSError as e:
            self._failures += 1
            logger.error(f"Failed to write log record to {self._path}: {e}")


class ConsolePresenter(TickSink):
    """Per-tick summary through the logging system."""

    def __init__(self, log: logging.Logger = None):
        self._log = log or logging.getLogger("Thermostat")

    def handle(self, report: TickReport) -> None:
        r = report.result
        adv = report.advisories
        self._log.info(
            f"People: {r.occupancy} | Temp: {r.temperature:.1f} °C | Humidity: {r.humidity:.1f} % | "
            f"AC: {r.ac_power} W | Secondary AC: {r.secondary_ac_power} W | Heater: {r.heater_power} W | "
            f"Humidifier: {r.humidifier_power} W | Fan: {r.fan_power} W | "
            f"Total Electricity Cost: ${report.total_cost}"
        )
        if adv.warning:
            self._log.warning(adv.warning)
        if adv.maintenance_due:
            self._log.warning(MAINTENANCE_WARNING)
        if adv.energy_per_person_kwh is not None:
            self._log.info(f"Energy used per person: {adv.energy_per_person_kwh} kWh")


@dataclass(frozen=True)
class SeriesPoint:
    time_s: int
    temperature: float
    humidity: float
    power_kw: float


class TimeSeries:
    """Bounded append-only series for the scrolling graph. Oldest points drop off."""

    def __init__(self, maxlen: int = 200):
        if maxlen <= 0:
            raise ValueError(f"History window must be positive, got {maxlen}")
        self._points: Deque[SeriesPoint] = deque(maxlen=maxlen)

    @property
    def maxlen(self) -> int:
        return self._points.maxlen

    def __len__(self) -> int:
        return len(self._points)

    def append(self, time_s: int, temperature: float, humidity: float, power_w: float) -> None:
        self._points.append(SeriesPoint(time_s, temperature, humidity, power_w / 1000.0))

    def clear(self) -> None:
        self._points.clear()

    def points(self) -> List[SeriesPoint]:
        return list(self._points)

    def to_dict(self) -> Dict[str, List[float]]:
        points = self.points()
        return {
            'time': [p.time_s for p in points],
            'temperature': [p.temperature for p in points],
            'humidity': [p.humidity for p in points],
            'power_kw': [p.power_kw for p in points],
        }


class DashboardPresenter(TickSink):
    """
    Live values and graph history for the web dashboard.
    Written by the scheduler thread, read by request threads.
    """

    def __init__(self, history_window: int = 200):
        self._series = TimeSeries(history_window)
        self._latest: Optional[TickReport] = None
        self._lock = threading.Lock()

    @property
    def series(self) -> TimeSeries:
        return self._series

    @property
    def latest(self) -> Optional[TickReport]:
        with self._lock:
            return self._latest

    def handle(self, report: TickReport) -> None:
        r = report.result
        with self._lock:
            self._latest = report
            self._series.append(report.runtime_seconds, r.temperature, r.humidity, r.total_power)

    def reset(self) -> None:
        with self._lock:
            self._latest = None
            self._series.clear()

    def status(self) -> Dict[str, Any]:
        """Label values for the dashboard; None until the first tick."""
        with self._lock:
            report = self._latest
        if report is None:
            return {'has_data': False}
        data = report.to_dict()
        data['has_data'] = True
        data['maintenance_warning'] = MAINTENANCE_WARNING if report.advisories.maintenance_due else ""
        return data

    def history(self) -> Dict[str, List[float]]:
        with self._lock:
            return self._series.to_dict()

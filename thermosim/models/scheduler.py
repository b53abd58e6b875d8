import logging
import threading
from typing import Callable, List, Optional

from thermosim.interfaces import TickSink
from .advisories import evaluate
from .controls import ThermostatControls
from .engine import SimulationEngine
from .results import TickReport

logger = logging.getLogger("Scheduler")

EngineFactory = Callable[[ThermostatControls], SimulationEngine]


class SimulationRunner:
    """
    Periodic scheduler that owns the engine exclusively (SRP - timing only).
    The tick interval is re-read from the controls at every boundary, so a
    change takes effect on the next tick.
    """

    def __init__(self,
                 controls: ThermostatControls,
                 sinks: List[TickSink] = None,
                 engine_factory: EngineFactory = None):
        self._controls = controls
        self._sinks: List[TickSink] = list(sinks or [])
        self._engine_factory = engine_factory or SimulationEngine
        self._engine = self._engine_factory(controls)
        self._last_report: Optional[TickReport] = None
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        # Serializes ticks against engine replacement
        self._lock = threading.RLock()
        # Serializes start/stop/reset requests from the web threads
        self._lifecycle_lock = threading.RLock()

    @property
    def engine(self) -> SimulationEngine:
        return self._engine

    @property
    def controls(self) -> ThermostatControls:
        return self._controls

    @property
    def last_report(self) -> Optional[TickReport]:
        return self._last_report

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def add_sink(self, sink: TickSink) -> None:
        self._sinks.append(sink)

    def tick(self) -> TickReport:
        """Run one tick synchronously and publish it to every sink."""
        with self._lock:
            engine = self._engine
            snapshot = self._controls.snapshot()
            result = engine.step(snapshot.tick_interval_s, snapshot)
            runtime = engine.total_runtime_seconds()
            report = TickReport(
                result=result,
                total_cost=engine.total_cost(),
                runtime_seconds=runtime,
                controls=snapshot,
                advisories=evaluate(result, snapshot.desired_temp, runtime, snapshot.tick_interval_s),
            )
            self._last_report = report

        for sink in self._sinks:
            try:
                sink.handle(report)
            except Exception:
                logger.exception(f"Sink {type(sink).__name__} failed; simulation continues")
        return report

    def _loop(self) -> None:
        """Tick, then wait for the current interval or a stop request."""
        while not self._stop_event.is_set():
            self.tick()
            interval_s = self._controls.snapshot().tick_interval_s
            if self._stop_event.wait(interval_s):
                break

    def start(self) -> bool:
        """Start ticking. Returns False if already running."""
        with self._lifecycle_lock:
            if self.is_running:
                return False
            self._stop_event.clear()
            self._thread = threading.Thread(target=self._loop, name="thermostat-scheduler", daemon=True)
            self._thread.start()
        logger.info("Simulation started")
        return True

    def stop(self, timeout: Optional[float] = None) -> bool:
        """
        Stop ticking. Any tick in flight completes first. Returns False if not
        running, or if the loop is still finishing its tick when the timeout
        expires; the stop request stays pending and a later stop() can wait again.
        """
        with self._lifecycle_lock:
            if self._thread is None:
                return False
            self._stop_event.set()
            if self._thread is not threading.current_thread():
                self._thread.join(timeout)
                if self._thread.is_alive():
                    logger.warning("Scheduler thread still finishing its tick; stop pending")
                    return False
            self._thread = None
        logger.info("Simulation stopped")
        return True

    def reset(self) -> None:
        """
        Discard the engine with its bill and runtime, build a fresh one from the
        current controls, and resume if the simulation was running.
        """
        with self._lifecycle_lock:
            was_running = self.is_running
            self.stop()
            with self._lock:
                self._engine = self._engine_factory(self._controls)
                self._last_report = None
        for sink in self._sinks:
            try:
                sink.reset()
            except Exception:
                logger.exception(f"Sink {type(sink).__name__} failed to reset")
        logger.info("Simulation reset")
        if was_running:
            self.start()

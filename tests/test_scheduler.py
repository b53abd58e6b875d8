"""Tests for the periodic simulation runner."""

import threading

import pytest

from thermosim.interfaces import TickSink
from thermosim.models import SimulationEngine, SimulationRunner, ThermostatControls
from thermosim.presenters import DashboardPresenter


class RecordingSink(TickSink):
    def __init__(self):
        self.reports = []
        self.resets = 0
        self.got_report = threading.Event()

    def handle(self, report):
        self.reports.append(report)
        self.got_report.set()

    def reset(self):
        self.resets += 1


class BrokenSink(TickSink):
    def handle(self, report):
        raise RuntimeError("display went away")

    def reset(self):
        raise RuntimeError("display went away")


class BlockingSink(TickSink):
    """Holds the scheduler thread inside handle() until released."""

    def __init__(self):
        self.entered = threading.Event()
        self.release = threading.Event()

    def handle(self, report):
        self.entered.set()
        self.release.wait(5)


@pytest.fixture
def fast_controls():
    return ThermostatControls(tick_interval_ms=100, month="March")


def test_tick_publishes_report_to_every_sink(fast_controls):
    # Arrange
    first, second = RecordingSink(), RecordingSink()
    runner = SimulationRunner(fast_controls, [first, second])

    # Act
    report = runner.tick()

    # Assert
    assert first.reports == [report]
    assert second.reports == [report]
    assert runner.last_report is report
    assert report.controls == fast_controls.snapshot()
    assert report.total_cost == runner.engine.total_cost()


def test_failing_sink_does_not_stop_the_simulation(fast_controls):
    sink = RecordingSink()
    runner = SimulationRunner(fast_controls, [BrokenSink(), sink])

    runner.tick()
    runner.tick()

    assert len(sink.reports) == 2
    assert runner.engine.ticks == 2


def test_runtime_advances_once_per_tick():
    controls = ThermostatControls(tick_interval_ms=1000)
    runner = SimulationRunner(controls)

    for _ in range(5):
        report = runner.tick()

    assert report.runtime_seconds == 5


def test_start_and_stop(fast_controls):
    # Arrange
    sink = RecordingSink()
    runner = SimulationRunner(fast_controls, [sink])

    # Act
    assert runner.start() is True
    assert runner.start() is False
    ticked = sink.got_report.wait(5)
    assert runner.stop(timeout=5) is True

    # Assert
    assert ticked
    assert not runner.is_running
    assert runner.stop() is False


def test_reset_builds_fresh_engine_and_resets_sinks(fast_controls):
    # Arrange
    sink = RecordingSink()
    dashboard = DashboardPresenter()
    runner = SimulationRunner(fast_controls, [sink, dashboard, BrokenSink()])
    runner.tick()
    old_engine = runner.engine

    # Act
    runner.reset()

    # Assert
    assert runner.engine is not old_engine
    assert runner.engine.ticks == 0
    assert runner.engine.total_cost() == 0.0
    assert runner.last_report is None
    assert sink.resets == 1
    assert dashboard.status() == {'has_data': False}
    assert not runner.is_running


def test_reset_resumes_a_running_simulation(fast_controls):
    runner = SimulationRunner(fast_controls)
    runner.start()
    try:
        runner.reset()
        assert runner.is_running
    finally:
        runner.stop(timeout=5)


def test_engine_factory_is_used_for_every_engine(fast_controls):
    built = []

    def factory(controls):
        engine = SimulationEngine(controls)
        built.append(engine)
        return engine

    runner = SimulationRunner(fast_controls, engine_factory=factory)
    runner.reset()

    assert len(built) == 2
    assert runner.engine is built[-1]


def test_stop_timeout_keeps_slow_loop_owned(fast_controls):
    # Arrange - the loop is stuck in a slow sink
    sink = BlockingSink()
    runner = SimulationRunner(fast_controls, [sink])
    runner.start()
    assert sink.entered.wait(5)

    # Act
    stopped = runner.stop(timeout=0.05)
    restarted = runner.start()

    # Assert - no second loop while the first is still alive
    assert stopped is False
    assert restarted is False
    assert runner.is_running

    sink.release.set()
    assert runner.stop(timeout=5) is True
    assert not runner.is_running

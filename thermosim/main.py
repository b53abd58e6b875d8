"""
Thermostat Simulator Main Entry Point

- SRP: engine computes ticks, runner schedules them, presenters display them
- DIP: the orchestrator receives its components already built
"""
import asyncio
import logging
import random
from typing import List

from thermosim.interfaces import TickSink
from thermosim.models import SimulationEngine, SimulationRunner, ThermostatControls
from thermosim.presenters import ConsolePresenter, DashboardPresenter, LogFilePresenter
from thermosim.settings import AppSettings, load_settings
from thermosim.web.app import WebServer

logger = logging.getLogger("Main")


def build_engine_factory(settings: AppSettings):
    """Engine factory used at start-up and on every reset."""
    resets = [0]

    def factory(controls: ThermostatControls) -> SimulationEngine:
        rng = None
        if settings.seed:
            # Each engine instance gets its own reproducible stream
            rng = random.Random(f"{settings.seed}_{resets[0]}")
        resets[0] += 1
        return SimulationEngine(controls, rng=rng, sensor_mode=settings.sensor_mode)

    return factory


class ThermostatSimulator:
    """
    Main orchestrator (SRP - only coordinates components).
    """

    def __init__(self,
                 runner: SimulationRunner,
                 web_server: WebServer = None,
                 autostart: bool = False):
        self._runner = runner
        self._web = web_server
        self._autostart = autostart

    async def initialize(self) -> None:
        """Initialize all components."""
        logger.info("Initializing Thermostat Simulator...")

        if self._web:
            self._web.start()

        if self._autostart:
            self._runner.start()

        logger.info("Thermostat Simulator initialized")

    async def run(self) -> None:
        """Keep the process alive while the scheduler and web threads work."""
        logger.info("Entering main loop")
        while True:
            await asyncio.sleep(1)

    def stop(self) -> None:
        """Stop all components."""
        logger.info("Stopping Thermostat Simulator...")
        self._runner.stop()
        if self._web:
            self._web.stop()
        logger.info("Thermostat Simulator stopped")


def build_simulator(settings: AppSettings) -> ThermostatSimulator:
    controls = settings.build_controls()
    dashboard = DashboardPresenter(settings.history_window)

    sinks: List[TickSink] = [dashboard, LogFilePresenter(settings.log_file)]
    if settings.console_output:
        sinks.append(ConsolePresenter())

    runner = SimulationRunner(controls, sinks, engine_factory=build_engine_factory(settings))
    web = WebServer(runner, controls, dashboard, host=settings.web_host, port=settings.web_port)
    return ThermostatSimulator(runner, web, autostart=settings.autostart)


async def main():
    """Application entry point."""
    settings = load_settings()
    simulator = build_simulator(settings)

    try:
        await simulator.initialize()
        await simulator.run()
    finally:
        simulator.stop()


def cli() -> None:
    # Configure Logging
    logging.basicConfig(
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        level=logging.INFO
    )
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    cli()

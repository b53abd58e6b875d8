"""
Abstract interfaces following Interface Segregation Principle (ISP) and
Dependency Inversion Principle (DIP).
"""
from abc import ABC, abstractmethod
from typing import Dict, TYPE_CHECKING

if TYPE_CHECKING:
    from thermosim.models.results import TickReport


class Sensor(ABC):
    """Interface for stateful environment sensors."""

    @abstractmethod
    def sample(self) -> float:
        """Perturb the internal state and return the new reading."""
        pass

    @abstractmethod
    def reset(self, value: float) -> None:
        """Overwrite the internal state (e.g. when the baseline changes)."""
        pass


class PointProvider(ABC):
    """Interface for components that expose readable points."""

    @abstractmethod
    def get_points(self) -> Dict[str, float]:
        """Return a dictionary of point names to values."""
        pass


class TickSink(ABC):
    """
    Consumer of per-tick reports (presenters, loggers, dashboards).
    New outputs can be added by extending this class without touching the runner.
    """

    @abstractmethod
    def handle(self, report: 'TickReport') -> None:
        """Consume one tick report."""
        pass

    def reset(self) -> None:
        """Discard any accumulated state. Called when the simulation is reset."""
        pass

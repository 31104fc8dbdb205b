from abc import ABC, abstractmethod

from models import Vehicle


class DrivingBehavior(ABC):
    """
    Chooses driver inputs between ticks.

    The simulator calls `start` once, then alternates `vehicle.update()` and
    `act(vehicle)`, so inputs set in `act` apply to the next tick.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """name just for logging"""
        pass

    def start(self, vehicle: Vehicle) -> None:
        """Prepare a parked vehicle for driving"""
        vehicle.turn_key(True)

    @abstractmethod
    def act(self, vehicle: Vehicle) -> None:
        raise NotImplementedError

    def reset(self):
        """Reset any internal state (for a new run)"""
        pass

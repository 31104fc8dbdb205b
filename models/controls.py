"""Driver control inputs: the pedal pair and the hand brake lever."""
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class HandBrake(Enum):
    DISENGAGED = "disengaged"
    HALF = "half"
    FULL = "full"

    @property
    def effect(self) -> Optional[float]:
        """Braking floor applied by the lever, None when released."""
        return _HANDBRAKE_EFFECTS[self]

    @property
    def floor(self) -> float:
        return self.effect or 0.0


_HANDBRAKE_EFFECTS = {
    HandBrake.DISENGAGED: None,
    HandBrake.HALF: 0.75,
    HandBrake.FULL: 1.0,
}


class PedalKind(Enum):
    RELEASED = "released"
    ACCELERATOR = "accelerator"
    BRAKE = "brake"


@dataclass(frozen=True)
class Pedal:
    """
    The foot pedal currently pressed.

    Only one of accelerator and brake can be down at a time, so pressing one
    releases the other.
    """
    kind: PedalKind = PedalKind.RELEASED
    position: float = 0.0

    @classmethod
    def accelerator(cls, position: float) -> 'Pedal':
        return cls(PedalKind.ACCELERATOR, position) if position > 0.0 else cls()

    @classmethod
    def brake(cls, position: float) -> 'Pedal':
        return cls(PedalKind.BRAKE, position) if position > 0.0 else cls()

    @property
    def accelerator_position(self) -> float:
        return self.position if self.kind is PedalKind.ACCELERATOR else 0.0

    @property
    def brake_position(self) -> float:
        return self.position if self.kind is PedalKind.BRAKE else 0.0

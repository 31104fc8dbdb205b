"""Merge pedal braking and hand brake into one smoothed braking fraction."""
from config import BaseVehicleConfig

from .controls import HandBrake
from .smoothing import SmoothingWindow


class BrakingModel:
    """
    effective_braking = ema(max(brake_position, hand_brake floor))

    The hand brake acts as a floor, not an addition. Samples at or below
    `braking_threshold` are kept out of the window; a merged value of exactly
    zero clears the window so releasing the brake takes effect immediately.
    """

    def __init__(self, config: BaseVehicleConfig):
        self.config = config

    @staticmethod
    def merge(brake_position: float, hand_brake: HandBrake) -> float:
        return max(brake_position, hand_brake.floor)

    def update(self, window: SmoothingWindow, brake_position: float, hand_brake: HandBrake) -> float:
        braking = self.merge(brake_position, hand_brake)
        if braking == 0.0:
            window.reset(0.0)
            return 0.0
        if braking > self.config.braking_threshold:
            window.push(braking)
        return min(1.0, max(0.0, window.smooth(self.config.braking_alpha)))

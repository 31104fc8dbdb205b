"""Road speed from transmission RPM and braking."""
from config import BaseVehicleConfig

from .smoothing import SmoothingWindow


class SpeedModel:
    """
    Rules, first match wins:

    1. Drivetrain open (clutch out or ignition off): coast, speed *= coast_factor - braking,
       dropping to 0 once below min_speed.
    2. Pedal released and (speed < stop_speed or braking > stop_braking): stop dead.
    3. Otherwise push |transmission_rpm| * speed_factor * (1 - braking) * extra_factor
       into the window and publish the smoothed value.

    Speed is a magnitude; the reverse direction lives in the gear, not the sign.
    """

    def __init__(self, config: BaseVehicleConfig):
        self.config = config

    def coast(self, speed: float, effective_braking: float) -> float:
        speed = speed * (self.config.coast_factor - effective_braking)
        return speed if speed >= self.config.min_speed else 0.0

    def should_stop(self, speed: float, accelerator_position: float, effective_braking: float) -> bool:
        return accelerator_position == 0.0 and (
            speed < self.config.stop_speed or effective_braking > self.config.stop_braking
        )

    def instantaneous_speed(self, transmission_rpm: float, effective_braking: float,
                            extra_factor: float = 1.0) -> float:
        sample = abs(transmission_rpm) * self.config.speed_factor * (1.0 - effective_braking) * extra_factor
        return max(0.0, sample)

    def update(self,
               window: SmoothingWindow,
               speed: float,
               transmission_rpm: float,
               effective_braking: float,
               accelerator_position: float,
               engaged: bool,
               extra_factor: float = 1.0) -> float:
        """Return the new published speed, updating `window` in place."""
        if not engaged:
            speed = self.coast(speed, effective_braking)
            # re-engaging smooths from the coasting speed, not a stale sample
            window.reset(speed)
            return speed

        if self.should_stop(speed, accelerator_position, effective_braking):
            window.reset(0.0)
            return 0.0

        window.push(self.instantaneous_speed(transmission_rpm, effective_braking, extra_factor))
        return max(0.0, window.smooth(self.config.speed_alpha))

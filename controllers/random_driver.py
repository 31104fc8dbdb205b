import logging
from typing import Optional, Tuple

import numpy as np

from models import Car, ElectricCar, Gear, HandBrake, Vehicle, can_shift

from .base import DrivingBehavior

logger = logging.getLogger(__name__)

# Forward gears in order, for stepping one gear at a time
FORWARD_GEARS = (Gear.FIRST, Gear.SECOND, Gear.THIRD, Gear.FOURTH, Gear.FIFTH)

# gear -> (min speed, min rpm, next gear); both limits must be exceeded
UPSHIFT_RULES = {
    Gear.FIRST: (10.0, 2500.0, Gear.SECOND),
    Gear.SECOND: (25.0, 3000.0, Gear.THIRD),
    Gear.THIRD: (50.0, 3500.0, Gear.FOURTH),
    Gear.FOURTH: (80.0, 4000.0, Gear.FIFTH),
}

# (max speed, gear): the lowest band matching the current speed wins
DOWNSHIFT_BANDS = (
    (10, Gear.FIRST),
    (20, Gear.SECOND),
    (40, Gear.THIRD),
    (70, Gear.FOURTH),
)


def target_gear(gear: Gear, speed: float, rpm: float) -> Gear:
    """Gear the driver would like to be in for the given speed and rpm."""
    if gear is Gear.REVERSE:
        return Gear.NEUTRAL
    if gear is Gear.NEUTRAL:
        return Gear.FIRST

    whole_speed = int(speed)
    rank = FORWARD_GEARS.index(gear)
    for max_speed, band_gear in DOWNSHIFT_BANDS:
        if FORWARD_GEARS.index(band_gear) >= rank:
            break
        if whole_speed <= max_speed:
            return band_gear

    if gear in UPSHIFT_RULES:
        min_speed, min_rpm, next_gear = UPSHIFT_RULES[gear]
        if speed > min_speed and rpm > min_rpm:
            return next_gear
    return gear


def next_gear_towards(current: Gear, target: Gear) -> Gear:
    """One step from `current` towards `target` along the shift graph."""
    if current is target or can_shift(current, target):
        return target
    if current in FORWARD_GEARS and target in FORWARD_GEARS:
        step = 1 if FORWARD_GEARS.index(target) > FORWARD_GEARS.index(current) else -1
        return FORWARD_GEARS[FORWARD_GEARS.index(current) + step]
    # Reverse <-> forward always goes through neutral
    return Gear.NEUTRAL


class RandomDriver(DrivingBehavior):
    """
    Randomised commuter.

    Rules, in order:
    1. Low on energy: brake to a stop, park, replenish for a random dwell.
    2. Shift when rpm leaves the comfortable band (or occasionally anyway).
    3. Occasionally tap the brake; rarely pull the hand brake.
    4. Otherwise press the accelerator somewhere between 25 % and 100 %.
    """

    def __init__(self,
                 rng: Optional[np.random.Generator] = None,
                 refill_threshold: float = 0.25,
                 refill_rate: float = 0.001,
                 dwell_ticks: Tuple[int, int] = (450, 1050),
                 brake_probability: float = 0.05,
                 handbrake_probability: float = 0.005,
                 shift_probability: float = 0.05):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.refill_threshold = refill_threshold
        self.refill_rate = refill_rate
        self.dwell_ticks = dwell_ticks
        self.brake_probability = brake_probability
        self.handbrake_probability = handbrake_probability
        self.shift_probability = shift_probability

        self.stop_remaining: Optional[int] = None
        self.stops = 0

    @property
    def name(self) -> str:
        return "random"

    def reset(self):
        self.stop_remaining = None
        self.stops = 0

    @property
    def is_refilling(self) -> bool:
        return self.stop_remaining is not None

    def start(self, vehicle: Car) -> None:
        super().start(vehicle)
        vehicle.set_handbrake_position(HandBrake.DISENGAGED)
        vehicle.set_clutch_position(1.0)
        vehicle.shift_gear(Gear.FIRST)
        vehicle.set_clutch_position(0.5)
        vehicle.set_accelerator_position(0.5)
        vehicle.set_clutch_position(0.0)

    # ==================== Variant hooks ====================

    def _replenish(self, vehicle: Vehicle) -> None:
        vehicle.refuel(self.refill_rate)

    def _capacity(self, vehicle: Vehicle) -> float:
        return 1.0

    def _approach_stop(self, vehicle: Vehicle) -> None:
        vehicle.set_clutch_position(self.rng.uniform(0.3, 0.9))

    def _park(self, vehicle: Vehicle) -> None:
        vehicle.shift_gear(Gear.NEUTRAL)
        vehicle.set_clutch_position(0.0)

    def _drivetrain(self, vehicle: Vehicle) -> None:
        rpm = vehicle.rpm
        if (self.rng.random() < self.shift_probability and rpm > 2500) or rpm > 3500 or rpm < 1250:
            self.shift_gears(vehicle, self.rng.uniform(0.25, 1.0))
        else:
            vehicle.set_clutch_position(0.0)

    def shift_gears(self, vehicle: Car, clutch_position: float) -> None:
        gear = next_gear_towards(vehicle.gear, target_gear(vehicle.gear, vehicle.speed, vehicle.rpm))
        if gear is not vehicle.gear:
            vehicle.set_clutch_position(clutch_position)
            vehicle.shift_gear(gear)

    # ==================== Decision ====================

    def act(self, vehicle: Vehicle) -> None:
        low = vehicle.energy_level < self.refill_threshold

        # Slow down towards the station
        if low and not self.is_refilling and vehicle.speed != 0.0:
            self._approach_stop(vehicle)
            vehicle.set_brake_position(self.rng.uniform(0.3, 0.9))
            return

        if low and not self.is_refilling:
            vehicle.set_handbrake_position(HandBrake.FULL)
            vehicle.set_brake_position(0.0)
            self._park(vehicle)
            self.stop_remaining = int(self.rng.integers(*self.dwell_ticks, endpoint=True))
            self.stops += 1
            logger.info("Stopping to refill at %.3f for %d ticks", vehicle.energy_level, self.stop_remaining)

        if self.is_refilling:
            full = vehicle.energy_level + self.refill_rate >= self._capacity(vehicle)
            if self.stop_remaining <= 0 or full:
                self.stop_remaining = None
                vehicle.set_handbrake_position(HandBrake.DISENGAGED)
                return
            self.stop_remaining -= 1
            self._replenish(vehicle)
            return

        self._drivetrain(vehicle)

        # Very few times, press the brake to slow down
        if self.rng.random() < self.brake_probability or vehicle.brake_position > 0.5:
            vehicle.set_brake_position(self.rng.uniform(0.3, 1.0))
            return
        vehicle.set_brake_position(0.0)

        # Even fewer times, pull the hand brake, otherwise ease it off
        if self.rng.random() < self.handbrake_probability:
            if self.rng.random() < 0.25 or vehicle.hand_brake is HandBrake.HALF:
                vehicle.set_handbrake_position(HandBrake.FULL)
                return
            vehicle.set_handbrake_position(HandBrake.HALF)
        elif vehicle.hand_brake is not HandBrake.DISENGAGED:
            if self.rng.random() < 0.25 or vehicle.hand_brake is HandBrake.FULL:
                vehicle.set_handbrake_position(HandBrake.HALF)
            else:
                vehicle.set_handbrake_position(HandBrake.DISENGAGED)

        vehicle.set_accelerator_position(self.rng.uniform(0.25, 1.0))


class RandomEVDriver(RandomDriver):
    """Same habits behind the wheel of an electric car: no gears, charge stops."""

    @property
    def name(self) -> str:
        return "random-ev"

    def start(self, vehicle: ElectricCar) -> None:
        DrivingBehavior.start(self, vehicle)
        vehicle.set_handbrake_position(HandBrake.DISENGAGED)
        vehicle.set_accelerator_position(0.5)

    def _replenish(self, vehicle: ElectricCar) -> None:
        vehicle.charge(self.refill_rate)

    def _capacity(self, vehicle: ElectricCar) -> float:
        return vehicle.soh

    def _approach_stop(self, vehicle: ElectricCar) -> None:
        pass

    def _park(self, vehicle: ElectricCar) -> None:
        pass

    def _drivetrain(self, vehicle: ElectricCar) -> None:
        pass


def driver_for(vehicle: Vehicle, rng: Optional[np.random.Generator] = None, **kwargs) -> RandomDriver:
    if isinstance(vehicle, ElectricCar):
        return RandomEVDriver(rng=rng, **kwargs)
    return RandomDriver(rng=rng, **kwargs)

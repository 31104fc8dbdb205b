"""
Vehicle state machines.

A vehicle is driven by calling its setters and then `update()` once per tick.
Each tick runs the same pipeline in a fixed order:

    engine/motor RPM -> effective braking -> road speed -> energy use

`Car` is the combustion variant with a clutch and a five speed gearbox,
`ElectricCar` drives the wheels straight from the motor and tracks battery
health. Neither ever raises from `update()`; derived quantities are clamped
at their natural limits instead.
"""
import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from config import BaseVehicleConfig, ElectricVehicleConfig, VehicleConfig

from .braking import BrakingModel
from .controls import HandBrake, Pedal
from .energy import Battery, FuelTank
from .errors import InvalidInputError, check_fraction
from .gearbox import Gear, GearTable, get_gear_table
from .powertrain import PowertrainModel
from .smoothing import SmoothingWindow
from .speed import SpeedModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VehicleState:
    """Read-only copy of a vehicle after a tick"""
    tick: int
    speed: float                 # km/h
    rpm: float
    transmission_rpm: float
    effective_braking: float
    accelerator_position: float
    brake_position: float
    hand_brake: HandBrake
    ignition: bool
    energy_level: float          # fuel level or state of charge
    distance_travelled: float    # km
    energy_consumed: float
    clutch_position: float = 0.0  # combustion only
    gear: Optional[Gear] = None   # combustion only
    soh: Optional[float] = None   # electric only


class Vehicle(ABC):
    """Shared driver controls and the per-tick update pipeline."""

    def __init__(self, config: BaseVehicleConfig):
        self.config = config
        self._powertrain = PowertrainModel(config)
        self._braking_model = BrakingModel(config)
        self._speed_model = SpeedModel(config)

        self._pedal = Pedal()
        self._hand_brake = HandBrake.FULL
        self._ignition = False

        self._speed = 0.0
        self._rpm = 0.0
        self._transmission_rpm = 0.0
        self._effective_braking = 0.0
        self._distance_travelled = 0.0
        self._ticks = 0

        self.instantaneous_speeds = SmoothingWindow(seed=0.0)
        self.instantaneous_braking = SmoothingWindow(seed=0.0)

    # ==================== Driver inputs ====================

    def set_accelerator_position(self, position: float) -> None:
        """Press the accelerator; this releases the brake pedal."""
        self._pedal = Pedal.accelerator(check_fraction("accelerator_position", position))

    def set_brake_position(self, position: float) -> None:
        """Press the brake; this releases the accelerator."""
        self._pedal = Pedal.brake(check_fraction("brake_position", position))

    def set_handbrake_position(self, position: HandBrake) -> None:
        if not isinstance(position, HandBrake):
            raise InvalidInputError("hand_brake", position, "a HandBrake")
        self._hand_brake = position

    def turn_key(self, on: bool) -> None:
        on = bool(on)
        if on != self._ignition:
            logger.debug("Ignition %s", "on" if on else "off")
        self._ignition = on

    # ==================== Accessors ====================

    @property
    def speed(self) -> float:
        return self._speed

    @property
    def rpm(self) -> float:
        return self._rpm

    @property
    def transmission_rpm(self) -> float:
        return self._transmission_rpm

    @property
    def effective_braking(self) -> float:
        return self._effective_braking

    @property
    def accelerator_position(self) -> float:
        return self._pedal.accelerator_position

    @property
    def brake_position(self) -> float:
        return self._pedal.brake_position

    @property
    def pedal(self) -> Pedal:
        return self._pedal

    @property
    def hand_brake(self) -> HandBrake:
        return self._hand_brake

    @property
    def ignition(self) -> bool:
        return self._ignition

    @property
    def distance_travelled(self) -> float:
        return self._distance_travelled

    @property
    def ticks(self) -> int:
        return self._ticks

    # ==================== Variant hooks ====================

    @property
    @abstractmethod
    def energy_level(self) -> float:
        """Fuel level or state of charge"""

    @property
    @abstractmethod
    def energy_consumed(self) -> float:
        pass

    @abstractmethod
    def _drivetrain_engaged(self) -> bool:
        pass

    @abstractmethod
    def _output_rpm(self, rpm: float) -> float:
        pass

    @abstractmethod
    def _consume_energy(self) -> None:
        pass

    def _speed_factor(self) -> float:
        return 1.0

    def _variant_fields(self) -> Dict[str, Any]:
        """Extra VehicleState fields owned by the variant"""
        return {}

    # ==================== Tick ====================

    def update(self) -> None:
        """Advance the simulation by one tick."""
        self._update_rpm()
        self._update_braking()
        self._update_speed()
        self._consume_energy()
        self._distance_travelled += self._speed / self.config.seconds_per_hour
        self._ticks += 1

    def _update_rpm(self) -> None:
        self._rpm = self._powertrain.engine_rpm(
            self.accelerator_position, self._ignition, self.energy_level > 0.0
        )
        self._transmission_rpm = self._output_rpm(self._rpm)

    def _update_braking(self) -> None:
        self._effective_braking = self._braking_model.update(
            self.instantaneous_braking, self.brake_position, self._hand_brake
        )

    def _update_speed(self) -> None:
        self._speed = self._speed_model.update(
            self.instantaneous_speeds,
            self._speed,
            self._transmission_rpm,
            self._effective_braking,
            self.accelerator_position,
            engaged=self._ignition and self._drivetrain_engaged(),
            extra_factor=self._speed_factor(),
        )

    def snapshot(self) -> VehicleState:
        return VehicleState(
            tick=self._ticks,
            speed=self._speed,
            rpm=self._rpm,
            transmission_rpm=self._transmission_rpm,
            effective_braking=self._effective_braking,
            accelerator_position=self.accelerator_position,
            brake_position=self.brake_position,
            hand_brake=self._hand_brake,
            ignition=self._ignition,
            energy_level=self.energy_level,
            distance_travelled=self._distance_travelled,
            energy_consumed=self.energy_consumed,
            **self._variant_fields(),
        )


class Car(Vehicle):
    """Combustion car with a clutch, a gearbox and a fuel tank."""

    def __init__(self, fuel_level: float = 1.0, config: Optional[VehicleConfig] = None):
        super().__init__(config or VehicleConfig())
        self.gear_table: GearTable = get_gear_table(self.config.gear_table)
        self._tank = FuelTank(self.config, level=min(1.0, max(0.0, fuel_level)))
        self._gear = Gear.NEUTRAL
        self._clutch_position = 0.0
        self._fuel_consumed = 0.0

    def shift_gear(self, gear: Gear) -> None:
        if not isinstance(gear, Gear):
            raise InvalidInputError("gear", gear, "a Gear")
        self._gear = gear

    def set_clutch_position(self, position: float) -> None:
        self._clutch_position = check_fraction("clutch_position", position)

    def refuel(self, amount: float) -> float:
        """Add fuel; overflow past a full tank wraps around."""
        return self._tank.refuel(amount)

    @property
    def gear(self) -> Gear:
        return self._gear

    @property
    def gear_ratio(self) -> float:
        return self.gear_table.ratio(self._gear)

    @property
    def clutch_position(self) -> float:
        return self._clutch_position

    @property
    def fuel_level(self) -> float:
        return self._tank.level

    @property
    def energy_level(self) -> float:
        return self._tank.level

    @property
    def energy_consumed(self) -> float:
        """Total fuel burned, as a fraction of a tank"""
        return self._fuel_consumed

    def _drivetrain_engaged(self) -> bool:
        return self._powertrain.is_engaged(self._clutch_position)

    def _output_rpm(self, rpm: float) -> float:
        return self._powertrain.transmission_rpm(rpm, self.gear_ratio, self._clutch_position)

    def _consume_energy(self) -> None:
        power = self._powertrain.power_output(self._rpm)
        self._fuel_consumed += self._tank.burn(power, self.gear_ratio)

    def _variant_fields(self) -> Dict[str, Any]:
        return {"gear": self._gear, "clutch_position": self._clutch_position}


class ElectricCar(Vehicle):
    """Direct drive electric car; the hand brake also scales wheel speed."""

    def __init__(self, soc: float = 1.0, soh: float = 1.0,
                 config: Optional[ElectricVehicleConfig] = None):
        config = config or ElectricVehicleConfig()
        if not isinstance(config, ElectricVehicleConfig):
            raise TypeError(f"ElectricCar needs an ElectricVehicleConfig, got {type(config).__name__}")
        super().__init__(config)
        self._battery = Battery(self.config, soc=soc, soh=soh)

    def charge(self, amount: float) -> float:
        """Add charge; overflow past the health ceiling wraps around."""
        return self._battery.charge(amount)

    @property
    def soc(self) -> float:
        return self._battery.soc

    @property
    def soh(self) -> float:
        return self._battery.soh

    @property
    def energy_level(self) -> float:
        return self._battery.soc

    @property
    def energy_consumed(self) -> float:
        return self._battery.energy_consumed

    def _drivetrain_engaged(self) -> bool:
        return True

    def _output_rpm(self, rpm: float) -> float:
        return rpm

    def _speed_factor(self) -> float:
        return 1.0 - self._hand_brake.floor

    def _consume_energy(self) -> None:
        self._battery.discharge(self._powertrain.power_output(self._rpm))

    def _variant_fields(self) -> Dict[str, Any]:
        return {"soh": self._battery.soh}

"""
Energy stores: a fuel tank for combustion cars and a battery for electric ones.

Both are depleted once per tick from the engine/motor power and clamp at zero.
Replenishing wraps around instead of clamping: the tank wraps modulo a full
tank (1.0) and the battery wraps modulo its current state of health.
"""
import logging
from dataclasses import dataclass

from config import VehicleConfig, ElectricVehicleConfig

from .errors import check_amount

logger = logging.getLogger(__name__)


@dataclass
class FuelTank:
    """Fuel level as a fraction of a full tank."""
    config: VehicleConfig
    level: float = 1.0

    @property
    def is_empty(self) -> bool:
        return self.level <= 0.0

    def fuel_burned(self, power: float, gear_ratio: float) -> float:
        """
        Fuel used for one tick. The gear ratio stands in for engine load:
        taller gears burn less. Reverse uses its magnitude and neutral (no
        load) counts as a unit ratio.
        """
        load_ratio = abs(gear_ratio) or 1.0
        return power * self.config.load_factor / load_ratio * self.config.bsfc * self.config.fuel_scale

    def burn(self, power: float, gear_ratio: float) -> float:
        """Deplete the tank; returns the amount actually taken."""
        burned = min(self.level, self.fuel_burned(power, gear_ratio))
        was_empty = self.is_empty
        self.level = max(0.0, self.level - burned)
        if self.is_empty and not was_empty:
            logger.info("Fuel tank ran dry")
        return burned

    def refuel(self, amount: float) -> float:
        amount = check_amount("refuel amount", amount)
        self.level = (self.level + amount) % 1.0
        return self.level


@dataclass
class Battery:
    """
    State of charge (SOC) and state of health (SOH), both fractions of the
    original capacity. SOC never exceeds SOH and SOH never recovers.
    """
    config: ElectricVehicleConfig
    soc: float = 1.0
    soh: float = 1.0
    energy_consumed: float = 0.0

    def __post_init__(self):
        self.soh = min(1.0, max(self.config.min_soh, self.soh))
        self.soc = min(self.soh, max(0.0, self.soc))

    @property
    def is_empty(self) -> bool:
        return self.soc <= 0.0

    def _degrade(self, reason: str) -> None:
        previous = self.soh
        self.soh = max(self.config.min_soh, self.soh - self.config.health_penalty)
        self.soc = min(self.soc, self.soh)
        if self.soh < previous:
            logger.debug("Battery health %.4f -> %.4f (%s)", previous, self.soh, reason)

    def discharge(self, power: float) -> float:
        """Draw one tick of `power` [kW]; returns the charge used."""
        charge_used = power * self.config.load_factor / self.config.seconds_per_hour
        self.energy_consumed += charge_used
        self.soc = max(0.0, self.soc - charge_used * self.config.charge_scale)
        if self.soc < self.config.low_soc_threshold:
            self._degrade("deep discharge")
        return charge_used

    def charge(self, amount: float) -> float:
        amount = check_amount("charge amount", amount)
        self.soc = (self.soc + amount) % self.soh
        if amount > self.config.fast_charge_threshold:
            self._degrade("fast charge")
        return self.soc

"""Engine / motor speed and the RPM delivered to the transmission output."""
import math

from config import BaseVehicleConfig


class PowertrainModel:

    def __init__(self, config: BaseVehicleConfig):
        self.config = config

    def engine_rpm(self, accelerator_position: float, ignition: bool, has_energy: bool) -> float:
        """Affine pedal map from base_rpm to max_rpm; zero when off or out of energy."""
        if not ignition or not has_energy:
            return 0.0
        return self.config.base_rpm + self.config.rpm_span * accelerator_position

    def is_engaged(self, clutch_position: float) -> bool:
        """Clutch at or below the biting point couples engine and gearbox."""
        return clutch_position <= self.config.biting_point

    def transmission_rpm(self, rpm: float, gear_ratio: float, clutch_position: float) -> float:
        """Signed output RPM (negative in reverse), zero with the clutch open."""
        if not self.is_engaged(clutch_position):
            return 0.0
        return rpm * gear_ratio

    def power_output(self, rpm: float) -> float:
        """Power [kW] at `rpm` under full torque, capped at max_power."""
        return min(self.config.max_power, rpm * self.config.max_torque * 2.0 * math.pi / 60000.0)

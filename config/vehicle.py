from dataclasses import dataclass, fields, replace
from typing import Dict, Mapping, Optional, TypeVar
import math


@dataclass(frozen=True)
class BaseVehicleConfig:
    """
    Constants shared by every drivetrain.

    The model is a lightweight approximation (no mass, inertia or drag terms),
    so most values are scaling constants rather than physical properties.
    Instances are immutable; derive variants with `dataclasses.replace`.
    """
    # ==================== Engine / motor ====================
    base_rpm: float = 750.0       # [rpm] idle speed with the pedal released
    max_rpm: float = 5000.0       # [rpm] at full accelerator
    max_power: float = 100.0      # [kW]
    max_torque: float = 200.0     # [Nm]

    # ==================== Wheels ====================
    wheel_radius: float = 0.4     # [m]

    # ==================== Smoothing ====================
    speed_alpha: float = 0.7
    braking_alpha: float = 0.7
    braking_threshold: float = 0.1  # braking samples at or below are not filtered

    # ==================== Stopping / coasting ====================
    stop_speed: float = 3.0       # [km/h] below this a released pedal stops the car
    stop_braking: float = 0.75    # effective braking above this stops the car
    coast_factor: float = 0.97    # per-tick decay with the drivetrain open
    min_speed: float = 1e-3       # [km/h] coasting below this counts as stopped

    # ==================== Consumption ====================
    load_factor: float = 5.0
    seconds_per_hour: float = 3600.0  # one tick of speed [km/h] adds speed / 3600 km

    @property
    def wheel_circumference(self) -> float:
        """Wheel circumference [m]"""
        return 2.0 * math.pi * self.wheel_radius

    @property
    def speed_factor(self) -> float:
        """RPM to km/h conversion"""
        return self.wheel_circumference * 0.006

    @property
    def rpm_span(self) -> float:
        return self.max_rpm - self.base_rpm

    # ==================== Named profiles ====================

    @classmethod
    def for_torque(cls):
        """Short ratios, quick to pull away"""
        return get_vehicle_config("torque", base=cls())

    @classmethod
    def for_economy(cls):
        """Tall ratios tuned for fuel economy, softer speed filter"""
        return get_vehicle_config("economy", base=cls())


@dataclass(frozen=True)
class VehicleConfig(BaseVehicleConfig):
    """Combustion vehicle: clutch, gearbox and fuel tank."""
    bsfc: float = 180.0           # [g/kWh] brake specific fuel consumption
    gear_table: str = "torque"    # key into models.gearbox.GEAR_TABLES
    biting_point: float = 0.5     # clutch positions above this open the drivetrain
    fuel_scale: float = 1e-10     # fuel_burned -> tank fraction


@dataclass(frozen=True)
class ElectricVehicleConfig(BaseVehicleConfig):
    """
    Battery electric vehicle.

    No gearbox or clutch: the motor drives the wheels directly. Battery health
    drops by `health_penalty` for every tick spent below `low_soc_threshold`
    and for every charge larger than `fast_charge_threshold`.
    """
    speed_alpha: float = 0.5
    braking_alpha: float = 0.5

    charge_scale: float = 1e-10          # charge_used -> SOC fraction
    low_soc_threshold: float = 0.10
    fast_charge_threshold: float = 0.02
    health_penalty: float = 2.0 ** -8
    min_soh: float = 2.0 ** -8           # health floor, keeps soh strictly positive


ConfigT = TypeVar("ConfigT", bound=BaseVehicleConfig)


# ==================== Profile variants ====================

_PROFILE_OVERRIDES: Mapping[str, Dict[str, object]] = {
    "torque": {
        "gear_table": "torque",
        "speed_alpha": 0.7,
        "braking_alpha": 0.7,
    },
    "economy": {
        "gear_table": "economy",
        "speed_alpha": 0.5,
        "braking_alpha": 0.5,
    },
}


def _field_names(cfg: BaseVehicleConfig) -> set:
    return {f.name for f in fields(cfg)}


def get_vehicle_config(profile: str = "torque", *, base: Optional[ConfigT] = None) -> ConfigT:
    """Return a config for a named profile.

    The profile only overrides the fields the base config has, so an electric
    base keeps its battery settings and never picks up a gear table.
    """
    cfg = base if base is not None else VehicleConfig()
    try:
        overrides = _PROFILE_OVERRIDES[profile.lower()]
    except KeyError as e:
        raise ValueError(f"Unknown vehicle profile: {profile}. Options: {list(_PROFILE_OVERRIDES.keys())}") from e
    known = _field_names(cfg)
    return replace(cfg, **{k: v for k, v in overrides.items() if k in known})


def config_from_mapping(data: Mapping[str, object], *, base: ConfigT) -> ConfigT:
    """Apply a plain mapping of overrides (e.g. a YAML `vehicle:` section) to `base`.

    Raises ValueError for keys the config class does not define.
    """
    unknown = set(data) - _field_names(base)
    if unknown:
        raise ValueError(f"Unknown {type(base).__name__} settings: {sorted(unknown)}")
    return replace(base, **data)

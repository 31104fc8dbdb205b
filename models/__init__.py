from .gearbox import Gear, GearTable, GEAR_TABLES, GEAR_TRANSITIONS, can_shift, get_gear_table
from .controls import HandBrake, Pedal, PedalKind
from .smoothing import SmoothingWindow, exponential_moving_average
from .braking import BrakingModel
from .powertrain import PowertrainModel
from .speed import SpeedModel
from .energy import FuelTank, Battery
from .errors import InvalidInputError
from .vehicle import Vehicle, Car, ElectricCar, VehicleState

__all__ = [
    'Gear',
    'GearTable',
    'GEAR_TABLES',
    'GEAR_TRANSITIONS',
    'can_shift',
    'get_gear_table',
    'HandBrake',
    'Pedal',
    'PedalKind',
    'SmoothingWindow',
    'exponential_moving_average',
    'BrakingModel',
    'PowertrainModel',
    'SpeedModel',
    'FuelTank',
    'Battery',
    'InvalidInputError',
    'Vehicle',
    'Car',
    'ElectricCar',
    'VehicleState',
]

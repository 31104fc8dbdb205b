from .base import DrivingBehavior
from .random_driver import (
    RandomDriver,
    RandomEVDriver,
    driver_for,
    target_gear,
    next_gear_towards,
)

__all__ = [
    'DrivingBehavior',
    'RandomDriver',
    'RandomEVDriver',
    'driver_for',
    'target_gear',
    'next_gear_towards',
]

from .drive import (
    DriveSimulator,
    DriveResult,
)

__all__ = [
    'DriveSimulator',
    'DriveResult',
]

from .vehicle import (
    BaseVehicleConfig,
    VehicleConfig,
    ElectricVehicleConfig,
    get_vehicle_config,
    config_from_mapping,
)


def get_default_config(variant: str = "combustion") -> BaseVehicleConfig:
    configs = {
        'combustion': VehicleConfig,
        'electric': ElectricVehicleConfig,
    }
    try:
        return configs[variant.lower()]()
    except KeyError as e:
        raise ValueError(f"Unknown vehicle variant: {variant}. Options: {list(configs.keys())}") from e


__all__ = [
    'BaseVehicleConfig',
    'VehicleConfig',
    'ElectricVehicleConfig',
    'get_default_config',
    'get_vehicle_config',
    'config_from_mapping',
]

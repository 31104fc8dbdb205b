"""Console rendering of a vehicle state, one block per tick."""
from models import VehicleState

TANK_LITRES = 40.0


def format_telemetry(state: VehicleState) -> str:
    lines = ["\t----", f"Speed: {state.speed:.2f} km/h"]
    if state.soh is None:
        lines.append(f"Fuel: {state.energy_level * TANK_LITRES:.2f} L")
        lines.append(f"Gear: {state.gear}")
    else:
        lines.append(f"Charge: {state.energy_level * 100:.1f}%")
        lines.append(f"Health: {state.soh * 100:.1f}%")
    lines += [
        f"RPM: {state.rpm:.0f}",
        f"Accelerator: {state.accelerator_position:.2f}",
        f"Brake: {state.brake_position:.2f}",
    ]
    if state.soh is None:
        lines.append(f"Clutch: {state.clutch_position:.2f}")
    lines += [
        f"Hand brake: {state.hand_brake.value}",
        f"Distance travelled: {state.distance_travelled:.3f} km",
    ]
    return "\n".join(lines)

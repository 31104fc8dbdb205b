import numpy as np
from typing import Dict, List, Optional
from dataclasses import dataclass, field
import time

from models import Vehicle, VehicleState
from controllers import DrivingBehavior


@dataclass
class DriveResult:
    """Container for drive simulation telemetry (one entry per tick)"""

    # Time series data
    ticks: np.ndarray                # Tick index
    speeds: np.ndarray               # Speed (km/h)
    rpms: np.ndarray                 # Engine / motor rpm
    energy_levels: np.ndarray        # Fuel level or SOC (0-1)
    effective_braking: np.ndarray    # Smoothed braking (0-1)
    distances: np.ndarray            # Cumulative distance (km)

    # Control history
    throttle_history: np.ndarray     # Accelerator (0-1)
    brake_history: np.ndarray        # Brake pedal (0-1)
    gear_history: List[str] = field(default_factory=list)

    # Electric only
    soh_history: Optional[np.ndarray] = None

    # Summary statistics
    distance_travelled: float = 0.0
    average_speed: float = 0.0       # running (avg + speed) / 2, as shown on the dashboard
    mean_speed: float = 0.0          # arithmetic mean over all ticks
    energy_consumed: float = 0.0
    stops: int = 0
    wall_time: float = 0.0

    @property
    def n_ticks(self) -> int:
        return len(self.ticks)

    @property
    def max_speed(self) -> float:
        return float(self.speeds.max()) if self.n_ticks else 0.0

    @property
    def final_energy_level(self) -> float:
        return float(self.energy_levels[-1]) if self.n_ticks else 0.0

    def summary(self) -> Dict:
        stats = {
            'ticks': self.n_ticks,
            'distance_km': self.distance_travelled,
            'average_speed_kmh': self.average_speed,
            'mean_speed_kmh': self.mean_speed,
            'max_speed_kmh': self.max_speed,
            'final_energy_level': self.final_energy_level,
            'energy_consumed': self.energy_consumed,
            'stops': self.stops,
        }
        if self.soh_history is not None and len(self.soh_history):
            stats['final_soh'] = float(self.soh_history[-1])
        return stats


class DriveSimulator:
    """Run a vehicle under a driving behavior for a fixed number of ticks"""

    def __init__(self, vehicle: Vehicle, driver: DrivingBehavior):
        self.vehicle = vehicle
        self.driver = driver
        self.average_speed = 0.0

    def step(self) -> VehicleState:
        """One tick: update the vehicle, then let the driver react"""
        self.vehicle.update()
        state = self.vehicle.snapshot()
        self.average_speed = (self.average_speed + state.speed) * 0.5
        self.driver.act(self.vehicle)
        return state

    def run(self, n_ticks: int, callback=None) -> DriveResult:
        """Simulate `n_ticks` ticks

        Args:
            n_ticks: Number of ticks to simulate
            callback: Optional callable receiving each VehicleState

        Returns:
            DriveResult with complete telemetry
        """
        if n_ticks < 0:
            raise ValueError("n_ticks must be >= 0")

        start = time.time()
        self.average_speed = 0.0
        self.driver.start(self.vehicle)

        states = []
        for _ in range(n_ticks):
            state = self.step()
            states.append(state)
            if callback is not None:
                callback(state)

        return self._collect(states, time.time() - start)

    def _collect(self, states: List[VehicleState], wall_time: float) -> DriveResult:
        speeds = np.array([s.speed for s in states], dtype=float)
        has_soh = bool(states) and states[0].soh is not None

        return DriveResult(
            ticks=np.array([s.tick for s in states], dtype=int),
            speeds=speeds,
            rpms=np.array([s.rpm for s in states], dtype=float),
            energy_levels=np.array([s.energy_level for s in states], dtype=float),
            effective_braking=np.array([s.effective_braking for s in states], dtype=float),
            distances=np.array([s.distance_travelled for s in states], dtype=float),
            throttle_history=np.array([s.accelerator_position for s in states], dtype=float),
            brake_history=np.array([s.brake_position for s in states], dtype=float),
            gear_history=[str(s.gear) if s.gear is not None else "D" for s in states],
            soh_history=np.array([s.soh for s in states], dtype=float) if has_soh else None,
            distance_travelled=self.vehicle.distance_travelled,
            average_speed=self.average_speed,
            mean_speed=float(speeds.mean()) if len(speeds) else 0.0,
            energy_consumed=self.vehicle.energy_consumed,
            stops=getattr(self.driver, 'stops', 0),
            wall_time=wall_time,
        )

from pathlib import Path
from datetime import datetime
import json
from typing import Dict

import numpy as np
import matplotlib.pyplot as plt

from simulation import DriveResult


class RunManager:
    """Manages results directory structure and file saving"""

    def __init__(self, run_name: str, base_dir: str = "results"):
        self.run_name = run_name
        self.base_dir = Path(base_dir)
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

        # results/<run_name>/YYYYMMDD_HHMMSS/{plots,data}
        self.run_dir = self.base_dir / run_name.lower() / self.timestamp
        self.run_dir.mkdir(parents=True, exist_ok=True)

        self.plots_dir = self.run_dir / "plots"
        self.plots_dir.mkdir(exist_ok=True)

        self.data_dir = self.run_dir / "data"
        self.data_dir.mkdir(exist_ok=True)

        print(f"\n📁 Results directory: {self.run_dir}")

    def save_plot(self, fig: plt.Figure, name: str):
        path = self.plots_dir / f"{name}.png"
        fig.savefig(path, dpi=150, bbox_inches='tight')
        print(f"   ✓ Saved {path.name}")
        return path

    def save_json(self, data: Dict, name: str):
        path = self.data_dir / f"{name}.json"
        with open(path, 'w') as f:
            json.dump(to_builtin(data), f, indent=2)
        print(f"   ✓ Saved {path.name}")
        return path

    def save_telemetry(self, result: DriveResult, name: str = "telemetry"):
        """Save the per-tick arrays as a single .npz archive"""
        path = self.data_dir / f"{name}.npz"
        arrays = {
            'ticks': result.ticks,
            'speeds': result.speeds,
            'rpms': result.rpms,
            'energy_levels': result.energy_levels,
            'effective_braking': result.effective_braking,
            'distances': result.distances,
            'throttle': result.throttle_history,
            'brake': result.brake_history,
        }
        if result.soh_history is not None:
            arrays['soh'] = result.soh_history
        np.savez(path, **arrays)
        print(f"   ✓ Saved {path.name}")
        return path


def to_builtin(obj):
    """Convert numpy values nested in dicts/lists to plain Python for JSON"""
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    elif isinstance(obj, np.integer):
        return int(obj)
    elif isinstance(obj, np.floating):
        return float(obj)
    elif isinstance(obj, dict):
        return {k: to_builtin(v) for k, v in obj.items()}
    elif isinstance(obj, (list, tuple)):
        return [to_builtin(item) for item in obj]
    return obj


def export_results(result: DriveResult, vehicle, args) -> Dict:
    """Collect run metadata, vehicle config and summary statistics"""
    return {
        'metadata': {
            'variant': args.variant,
            'profile': args.profile,
            'seed': args.seed,
            'ticks': args.ticks,
            'timestamp': datetime.now().isoformat(),
        },
        'config': {
            name: getattr(vehicle.config, name)
            for name in vehicle.config.__dataclass_fields__
        },
        'summary': result.summary(),
    }

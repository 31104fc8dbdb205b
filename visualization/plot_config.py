"""Shared plotting defaults for visualization modules."""

from __future__ import annotations

from typing import Dict, Tuple

import matplotlib.pyplot as plt

DEFAULT_COLORS: Dict[str, str] = {
    "speed": "#1f77b4",
    "rpm": "#9467bd",
    "throttle": "#2ca02c",
    "brake": "#d62728",
    "braking": "#ff7f0e",
    "fuel": "#8c564b",
    "soc": "#2ca02c",
    "soh": "#7f7f7f",
    "constraint": "#7f7f7f",
}


def apply_plot_style(dense: bool = True) -> None:
    """Matplotlib defaults for per-tick telemetry.

    Drives run for thousands of ticks, so dense plots use thin lines and no
    x margin to keep the trace readable end to end.
    """
    plt.rcParams.update(
        {
            "font.size": 9,
            "axes.titlesize": 11,
            "axes.grid": True,
            "axes.xmargin": 0.0 if dense else 0.05,
            "grid.alpha": 0.3,
            "grid.linestyle": ":",
            "lines.linewidth": 0.9 if dense else 1.5,
            "legend.fontsize": 8,
            "legend.loc": "upper right",
            "figure.dpi": 110,
            "savefig.bbox": "tight",
        }
    )


def get_rpm_bounds(vehicle_config=None) -> Tuple[float, float]:
    """Return (base, max) rpm for reference lines."""
    if vehicle_config is None:
        return 750.0, 5000.0
    return float(vehicle_config.base_rpm), float(vehicle_config.max_rpm)

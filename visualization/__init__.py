from .telemetry_viz import plot_drive_results, plot_gear_usage
from .plot_config import apply_plot_style

__all__ = [
    'plot_drive_results',
    'plot_gear_usage',
    'apply_plot_style',
]

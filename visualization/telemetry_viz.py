import numpy as np
import matplotlib.pyplot as plt
from typing import Optional

from simulation import DriveResult

from .plot_config import DEFAULT_COLORS, apply_plot_style, get_rpm_bounds


def plot_drive_results(result: DriveResult,
                       vehicle_config=None,
                       title: str = "Drive Telemetry",
                       save_path: Optional[str] = None) -> plt.Figure:
    apply_plot_style(dense=result.n_ticks > 500)
    electric = result.soh_history is not None

    fig, axes = plt.subplots(4, 1, figsize=(12, 10), sharex=True)
    t = result.ticks

    # Speed
    axes[0].plot(t, result.speeds, color=DEFAULT_COLORS["speed"])
    axes[0].set_ylabel('Speed (km/h)')
    axes[0].set_title(f'Speed (avg {result.mean_speed:.1f} km/h, {result.distance_travelled:.2f} km)')

    # RPM
    base_rpm, max_rpm = get_rpm_bounds(vehicle_config)
    axes[1].plot(t, result.rpms, color=DEFAULT_COLORS["rpm"])
    axes[1].axhline(y=base_rpm, color=DEFAULT_COLORS["constraint"], linestyle=':', alpha=0.6)
    axes[1].axhline(y=max_rpm, color=DEFAULT_COLORS["constraint"], linestyle=':', alpha=0.6)
    axes[1].set_ylabel('Motor RPM' if electric else 'Engine RPM')

    # Pedals & braking
    axes[2].fill_between(t, result.throttle_history * 100, alpha=0.5,
                         color=DEFAULT_COLORS["throttle"], label='Accelerator')
    axes[2].fill_between(t, -result.brake_history * 100, alpha=0.5,
                         color=DEFAULT_COLORS["brake"], label='Brake')
    axes[2].plot(t, -result.effective_braking * 100, color=DEFAULT_COLORS["braking"],
                 linewidth=1.0, label='Effective braking')
    axes[2].set_ylabel('Pedal (%)')
    axes[2].legend(loc='upper right')

    # Energy
    if electric:
        axes[3].plot(t, result.energy_levels * 100, color=DEFAULT_COLORS["soc"], label='SOC')
        axes[3].plot(t, result.soh_history * 100, color=DEFAULT_COLORS["soh"], linestyle='--', label='SOH')
        axes[3].legend(loc='upper right')
        axes[3].set_ylabel('Battery (%)')
    else:
        axes[3].plot(t, result.energy_levels * 100, color=DEFAULT_COLORS["fuel"])
        axes[3].set_ylabel('Fuel (%)')
    axes[3].set_ylim([0, 105])
    axes[3].set_xlabel('Tick')

    fig.suptitle(title, fontsize=14, fontweight='bold')
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig


def plot_gear_usage(result: DriveResult, save_path: Optional[str] = None) -> plt.Figure:
    """Share of ticks spent in each gear"""
    apply_plot_style(dense=False)
    labels, counts = np.unique(np.array(result.gear_history), return_counts=True)
    fig, ax = plt.subplots(figsize=(6, 4))
    ax.bar(labels, counts / max(result.n_ticks, 1) * 100, color=DEFAULT_COLORS["speed"], alpha=0.8)
    ax.set_ylabel('Ticks (%)')
    ax.set_xlabel('Gear')
    ax.set_title('Gear Usage')
    plt.tight_layout()

    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')

    return fig

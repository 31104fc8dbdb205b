from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Annotated, Dict, Literal, Optional

import typer
import yaml

from .vehicle import (
    BaseVehicleConfig,
    ElectricVehicleConfig,
    VehicleConfig,
    config_from_mapping,
    get_vehicle_config,
)


@dataclass
class AppConfig:
    variant: Literal["combustion", "electric"] = "combustion"
    profile: Literal["torque", "economy"] = "torque"
    ticks: int = 3600
    seed: int | None = None
    initial_level: float | None = None   # fuel level or SOC; random when unset
    initial_soh: float = 1.0
    refill_threshold: float = 0.25
    verbose: bool = False
    plot: bool = True
    save_json: bool = True
    results_dir: str = "results"
    vehicle: Dict[str, float] = field(default_factory=dict)  # per-field overrides

    def build_vehicle_config(self) -> BaseVehicleConfig:
        base = ElectricVehicleConfig() if self.variant == "electric" else VehicleConfig()
        return config_from_mapping(self.vehicle, base=get_vehicle_config(self.profile, base=base))


def _load_yaml_defaults(path: Path) -> dict:
    """Load a YAML config file and return its contents as a dict."""
    with open(path) as f:
        data = yaml.safe_load(f)
    return data if isinstance(data, dict) else {}


def build_app_config(cli_values: dict, config_path: Optional[Path] = None) -> AppConfig:
    """YAML provides defaults; explicitly passed CLI values override them."""
    if config_path is None:
        return AppConfig(**cli_values)
    yaml_defaults = _load_yaml_defaults(config_path)
    known = AppConfig.__dataclass_fields__.keys()
    unknown = set(yaml_defaults) - set(known)
    if unknown:
        raise ValueError(f"Unknown settings in {config_path}: {sorted(unknown)}")
    return AppConfig(**{**yaml_defaults, **cli_values})


app = typer.Typer(add_completion=False)


@app.command(help="Vehicle dynamics demo drive")
def cli(
    # ── Vehicle ───────────────────────────────────────────────────
    variant: Annotated[Optional[str], typer.Option(help="combustion or electric")] = None,
    profile: Annotated[Optional[str], typer.Option(help="Vehicle profile: torque or economy")] = None,
    initial_level: Annotated[Optional[float], typer.Option(help="Initial fuel level / SOC [0-1] (random if unset)")] = None,
    initial_soh: Annotated[Optional[float], typer.Option(help="Initial battery health (0-1], electric only")] = None,

    # ── Simulation ────────────────────────────────────────────────
    ticks: Annotated[Optional[int], typer.Option(help="Number of ticks to simulate")] = None,
    seed: Annotated[Optional[int], typer.Option(help="Random seed for the driver")] = None,
    refill_threshold: Annotated[Optional[float], typer.Option(help="Energy level that triggers a refuel / charge stop")] = None,
    verbose: Annotated[Optional[bool], typer.Option("--verbose/--quiet", help="Print telemetry every tick")] = None,

    # ── Output ────────────────────────────────────────────────────
    plot: Annotated[Optional[bool], typer.Option("--plot/--no-plot", help="Generate telemetry plots")] = None,
    save_json: Annotated[Optional[bool], typer.Option("--save-json/--no-save-json", help="Save run summary as JSON")] = None,
    results_dir: Annotated[Optional[str], typer.Option(help="Directory for run outputs")] = None,

    # ── Config file ───────────────────────────────────────────────
    config: Annotated[Optional[Path], typer.Option(help="Path to YAML config file")] = None,
):
    """Entry point — build AppConfig from CLI args (with optional YAML defaults) and run."""
    from main import main as run_main

    # Options left at None were not given on the command line
    cli_values = {
        "variant": variant, "profile": profile, "initial_level": initial_level,
        "initial_soh": initial_soh, "ticks": ticks, "seed": seed,
        "refill_threshold": refill_threshold, "verbose": verbose,
        "plot": plot, "save_json": save_json, "results_dir": results_dir,
    }
    cli_values = {k: v for k, v in cli_values.items() if v is not None}

    try:
        args = build_app_config(cli_values, config)
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e
    if args.variant not in ("combustion", "electric"):
        raise typer.BadParameter(f"variant must be 'combustion' or 'electric', got {args.variant!r}")
    run_main(args)

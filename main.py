import sys
import logging
import numpy as np
import matplotlib.pyplot as plt
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from config import ElectricVehicleConfig
from config.app_config import AppConfig, app
from models import Car, ElectricCar, Vehicle
from controllers import driver_for
from simulation import DriveSimulator
from utils import RunManager, export_results, format_telemetry
from visualization import plot_drive_results, plot_gear_usage


def build_vehicle(args: AppConfig, rng: np.random.Generator) -> Vehicle:
    vehicle_config = args.build_vehicle_config()
    level = args.initial_level if args.initial_level is not None else float(rng.uniform(0.0, 1.0))
    if isinstance(vehicle_config, ElectricVehicleConfig):
        return ElectricCar(soc=level, soh=args.initial_soh, config=vehicle_config)
    return Car(fuel_level=level, config=vehicle_config)


def main(args: AppConfig):
    """Main execution function."""
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    print("="*70)
    print("  VEHICLE DYNAMICS DEMO DRIVE")
    print("="*70)

    # =========================================================================
    print("\n" + "="*70)
    print("CONFIGURATION")
    print("="*70)

    rng = np.random.default_rng(args.seed)
    vehicle = build_vehicle(args, rng)
    cfg = vehicle.config

    print(f"\nVariant: {args.variant} ({args.profile} profile)")
    print(f"Engine: {cfg.base_rpm:.0f}-{cfg.max_rpm:.0f} rpm, "
          f"{cfg.max_power:.0f} kW, {cfg.max_torque:.0f} Nm")
    print(f"Smoothing: speed alpha={cfg.speed_alpha}, braking alpha={cfg.braking_alpha}")
    print(f"Initial energy level: {vehicle.energy_level*100:.1f}%")

    # =========================================================================
    print("\n" + "="*70)
    print(f"DRIVE ({args.ticks} ticks)")
    print("="*70)

    driver = driver_for(vehicle, rng=rng, refill_threshold=args.refill_threshold)
    simulator = DriveSimulator(vehicle, driver)
    callback = (lambda state: print(format_telemetry(state))) if args.verbose else None
    result = simulator.run(args.ticks, callback=callback)
    print(f"   ✓ Simulated {result.n_ticks} ticks in {result.wall_time:.2f}s")

    # =========================================================================
    print("\n" + "="*70)
    print("RESULTS SUMMARY")
    print("="*70)

    summary = result.summary()
    print(f"\n   Distance travelled: {summary['distance_km']:.3f} km")
    print(f"   Average speed:      {summary['average_speed_kmh']:.2f} km/h (running), "
          f"{summary['mean_speed_kmh']:.2f} km/h (mean)")
    print(f"   Max speed:          {summary['max_speed_kmh']:.2f} km/h")
    print(f"   Final energy level: {summary['final_energy_level']*100:.2f}%")
    if 'final_soh' in summary:
        print(f"   Final health:       {summary['final_soh']*100:.2f}%")
    print(f"   Refill stops:       {summary['stops']}")

    if not (args.plot or args.save_json):
        return result, None

    run_manager = RunManager(f"{args.variant}_{args.profile}", base_dir=args.results_dir)

    if args.save_json:
        run_manager.save_json(export_results(result, vehicle, args), "summary")
        run_manager.save_telemetry(result)

    if args.plot:
        print("\n" + "="*70)
        print("GENERATING PLOTS")
        print("="*70)

        fig = plot_drive_results(result, vehicle_config=cfg,
                                 title=f"{args.variant.title()} drive ({args.profile})")
        run_manager.save_plot(fig, "01_telemetry")
        plt.close(fig)

        if isinstance(vehicle, Car):
            fig = plot_gear_usage(result)
            run_manager.save_plot(fig, "02_gear_usage")
            plt.close(fig)

        print("\n✓ All plots saved!")

    print("\n" + "="*70)
    print("  COMPLETE")
    print("="*70)
    print(f"\n📁 All results saved to: {run_manager.run_dir}")

    return result, run_manager


if __name__ == "__main__":
    app()

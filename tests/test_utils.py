import json
import tempfile
import unittest
from pathlib import Path

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
import numpy as np

from config.app_config import AppConfig
from main import main
from models import Car, ElectricCar, HandBrake
from utils import RunManager, export_results, format_telemetry, to_builtin
from visualization import apply_plot_style, plot_drive_results, plot_gear_usage


class DisplayTests(unittest.TestCase):
    def test_combustion_block(self):
        car = Car(fuel_level=0.5)
        car.turn_key(True)
        car.set_handbrake_position(HandBrake.DISENGAGED)
        car.update()
        text = format_telemetry(car.snapshot())
        self.assertIn("Fuel: 20.00 L", text)
        self.assertIn("Gear: N", text)
        self.assertIn("Clutch:", text)
        self.assertNotIn("Health", text)

    def test_electric_block(self):
        ev = ElectricCar(soc=0.5, soh=0.9)
        text = format_telemetry(ev.snapshot())
        self.assertIn("Charge: 50.0%", text)
        self.assertIn("Health: 90.0%", text)
        self.assertNotIn("Gear", text)


class RunOutputTests(unittest.TestCase):
    def test_to_builtin(self):
        data = {'a': np.arange(3), 'b': np.float64(1.5), 'c': [np.int64(2)], 'd': (1, 2)}
        self.assertEqual(to_builtin(data), {'a': [0, 1, 2], 'b': 1.5, 'c': [2], 'd': [1, 2]})

    def test_main_writes_summary(self):
        with tempfile.TemporaryDirectory() as tmp:
            args = AppConfig(ticks=40, seed=5, initial_level=0.8, plot=False,
                             save_json=True, results_dir=tmp)
            result, run_manager = main(args)

            self.assertEqual(result.n_ticks, 40)
            summary_path = run_manager.data_dir / "summary.json"
            self.assertTrue(summary_path.exists())
            self.assertTrue((run_manager.data_dir / "telemetry.npz").exists())
            data = json.loads(summary_path.read_text())
            self.assertEqual(data['metadata']['variant'], "combustion")
            self.assertEqual(data['summary']['ticks'], 40)
            self.assertEqual(data['config']['base_rpm'], 750.0)

    def test_main_without_outputs(self):
        args = AppConfig(variant="electric", ticks=25, seed=1, plot=False, save_json=False)
        result, run_manager = main(args)
        self.assertIsNone(run_manager)
        self.assertEqual(result.n_ticks, 25)
        self.assertIsNotNone(result.soh_history)

    def test_run_manager_layout(self):
        with tempfile.TemporaryDirectory() as tmp:
            manager = RunManager("Combustion_Torque", base_dir=tmp)
            self.assertTrue(manager.plots_dir.is_dir())
            self.assertEqual(manager.run_dir.parent.name, "combustion_torque")
            self.assertTrue(str(manager.run_dir).startswith(str(Path(tmp))))


class PlotTests(unittest.TestCase):
    def tearDown(self):
        plt.close("all")

    def test_plot_style_density(self):
        apply_plot_style(dense=True)
        self.assertEqual(plt.rcParams["axes.xmargin"], 0.0)
        self.assertEqual(plt.rcParams["lines.linewidth"], 0.9)
        apply_plot_style(dense=False)
        self.assertEqual(plt.rcParams["lines.linewidth"], 1.5)

    def test_drive_plots(self):
        args = AppConfig(ticks=30, seed=2, initial_level=0.6, plot=False, save_json=False)
        result, _ = main(args)
        fig = plot_drive_results(result)
        self.assertEqual(len(fig.axes), 4)
        fig = plot_gear_usage(result)
        self.assertEqual(len(fig.axes), 1)


if __name__ == "__main__":
    unittest.main()

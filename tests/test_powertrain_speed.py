import math
import unittest

from config import VehicleConfig
from models.powertrain import PowertrainModel
from models.smoothing import SmoothingWindow
from models.speed import SpeedModel


class PowertrainModelTests(unittest.TestCase):
    def setUp(self):
        self.config = VehicleConfig()
        self.powertrain = PowertrainModel(self.config)

    def test_pedal_map(self):
        self.assertEqual(self.powertrain.engine_rpm(0.0, True, True), 750.0)
        self.assertEqual(self.powertrain.engine_rpm(0.5, True, True), 2875.0)
        self.assertEqual(self.powertrain.engine_rpm(1.0, True, True), 5000.0)

    def test_off_or_empty_gives_zero(self):
        self.assertEqual(self.powertrain.engine_rpm(0.7, False, True), 0.0)
        self.assertEqual(self.powertrain.engine_rpm(0.7, True, False), 0.0)

    def test_clutch_biting_point(self):
        self.assertEqual(self.powertrain.transmission_rpm(2000.0, 1.25, 0.5), 2500.0)
        self.assertEqual(self.powertrain.transmission_rpm(2000.0, 1.25, 0.51), 0.0)

    def test_reverse_is_negative(self):
        self.assertEqual(self.powertrain.transmission_rpm(2000.0, -0.75, 0.0), -1500.0)

    def test_power_output_is_capped(self):
        expected = 2875.0 * 200.0 * 2.0 * math.pi / 60000.0
        self.assertAlmostEqual(self.powertrain.power_output(2875.0), expected, places=9)
        self.assertEqual(self.powertrain.power_output(5000.0), 100.0)
        self.assertEqual(self.powertrain.power_output(0.0), 0.0)


class SpeedModelTests(unittest.TestCase):
    def setUp(self):
        self.config = VehicleConfig()
        self.model = SpeedModel(self.config)
        self.window = SmoothingWindow(seed=0.0)

    def test_speed_factor(self):
        self.assertAlmostEqual(self.config.speed_factor, 2 * math.pi * 0.4 * 0.006, places=12)

    def test_coasting_decay(self):
        self.assertAlmostEqual(self.model.coast(50.0, 0.0), 48.5, places=9)
        self.assertAlmostEqual(self.model.coast(50.0, 0.5), 23.5, places=9)
        self.assertEqual(self.model.coast(50.0, 1.0), 0.0)
        self.assertEqual(self.model.coast(1e-4, 0.0), 0.0)

    def test_disengaged_coasts_and_reseeds_window(self):
        speed = self.model.update(self.window, 40.0, 3000.0, 0.0, 0.5, engaged=False)
        self.assertAlmostEqual(speed, 38.8, places=9)
        self.assertEqual(self.window.values(), (speed, speed))

    def test_clean_stop(self):
        self.assertEqual(self.model.update(self.window, 2.9, 900.0, 0.0, 0.0, engaged=True), 0.0)
        self.assertEqual(self.model.update(self.window, 60.0, 900.0, 0.8, 0.0, engaged=True), 0.0)

    def test_no_stop_while_accelerating(self):
        speed = self.model.update(self.window, 2.0, 1000.0, 0.0, 0.3, engaged=True)
        self.assertGreater(speed, 0.0)

    def test_instantaneous_sample_is_smoothed(self):
        sample = 1000.0 * self.config.speed_factor * 0.8
        speed = self.model.update(self.window, 10.0, 1000.0, 0.2, 0.4, engaged=True)
        self.assertAlmostEqual(speed, 0.7 * sample, places=9)
        self.assertAlmostEqual(self.window.latest, sample, places=9)

    def test_reverse_speed_is_a_magnitude(self):
        forward = self.model.instantaneous_speed(1500.0, 0.0)
        backward = self.model.instantaneous_speed(-1500.0, 0.0)
        self.assertEqual(forward, backward)
        self.assertGreater(backward, 0.0)

    def test_extra_factor(self):
        full = self.model.instantaneous_speed(1500.0, 0.0)
        self.assertAlmostEqual(self.model.instantaneous_speed(1500.0, 0.0, extra_factor=0.25), full * 0.25)

    def test_first_sample_into_empty_window(self):
        window = SmoothingWindow()
        speed = self.model.update(window, 10.0, 1000.0, 0.0, 0.5, engaged=True)
        self.assertAlmostEqual(speed, 1000.0 * self.config.speed_factor, places=9)


if __name__ == "__main__":
    unittest.main()

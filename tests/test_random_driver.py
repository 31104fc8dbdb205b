import unittest

import numpy as np

from controllers import RandomDriver, RandomEVDriver, driver_for, next_gear_towards, target_gear
from models import Car, ElectricCar, Gear, HandBrake


class GearChoiceTests(unittest.TestCase):
    def test_upshift_needs_speed_and_rpm(self):
        self.assertIs(target_gear(Gear.FIRST, 15.0, 3000.0), Gear.SECOND)
        self.assertIs(target_gear(Gear.FIRST, 15.0, 2000.0), Gear.FIRST)
        self.assertIs(target_gear(Gear.FIRST, 5.0, 3000.0), Gear.FIRST)
        self.assertIs(target_gear(Gear.FOURTH, 85.0, 4500.0), Gear.FIFTH)

    def test_downshift_by_speed_band(self):
        self.assertIs(target_gear(Gear.SECOND, 8.0, 1000.0), Gear.FIRST)
        self.assertIs(target_gear(Gear.THIRD, 15.0, 1000.0), Gear.SECOND)
        self.assertIs(target_gear(Gear.FIFTH, 5.0, 2000.0), Gear.FIRST)
        self.assertIs(target_gear(Gear.FIFTH, 65.0, 2000.0), Gear.FOURTH)

    def test_hold_between_bands(self):
        self.assertIs(target_gear(Gear.SECOND, 18.0, 3500.0), Gear.SECOND)
        self.assertIs(target_gear(Gear.FIFTH, 120.0, 4800.0), Gear.FIFTH)

    def test_neutral_and_reverse(self):
        self.assertIs(target_gear(Gear.NEUTRAL, 0.0, 750.0), Gear.FIRST)
        self.assertIs(target_gear(Gear.REVERSE, 3.0, 2000.0), Gear.NEUTRAL)

    def test_one_step_at_a_time(self):
        self.assertIs(next_gear_towards(Gear.FIFTH, Gear.FIRST), Gear.FOURTH)
        self.assertIs(next_gear_towards(Gear.SECOND, Gear.FOURTH), Gear.THIRD)
        self.assertIs(next_gear_towards(Gear.REVERSE, Gear.FIRST), Gear.NEUTRAL)
        self.assertIs(next_gear_towards(Gear.THIRD, Gear.THIRD), Gear.THIRD)


class RandomDriverTests(unittest.TestCase):
    def setUp(self):
        self.rng = np.random.default_rng(42)

    def test_start_pulls_away_in_first(self):
        car = Car()
        RandomDriver(rng=self.rng).start(car)
        self.assertTrue(car.ignition)
        self.assertIs(car.gear, Gear.FIRST)
        self.assertIs(car.hand_brake, HandBrake.DISENGAGED)
        self.assertEqual(car.clutch_position, 0.0)
        self.assertEqual(car.accelerator_position, 0.5)

    def test_brakes_towards_the_station(self):
        car = Car(fuel_level=0.2)
        driver = RandomDriver(rng=self.rng)
        driver.start(car)
        for _ in range(5):
            car.update()
        self.assertGreater(car.speed, 0.0)

        driver.act(car)
        self.assertGreater(car.brake_position, 0.0)
        self.assertEqual(car.accelerator_position, 0.0)
        self.assertFalse(driver.is_refilling)

    def test_refuels_when_stopped(self):
        car = Car(fuel_level=0.1)
        driver = RandomDriver(rng=self.rng)
        driver.start(car)

        driver.act(car)
        self.assertTrue(driver.is_refilling)
        self.assertEqual(driver.stops, 1)
        self.assertIs(car.hand_brake, HandBrake.FULL)
        self.assertIs(car.gear, Gear.NEUTRAL)
        self.assertAlmostEqual(car.fuel_level, 0.101, places=12)

    def test_stop_ends_before_tank_wraps(self):
        car = Car(fuel_level=0.1)
        driver = RandomDriver(rng=self.rng, dwell_ticks=(5000, 5000))
        driver.start(car)
        for _ in range(1200):
            car.update()
            driver.act(car)
            self.assertTrue(0.0 <= car.fuel_level <= 1.0)
        self.assertFalse(driver.is_refilling)
        self.assertGreater(car.fuel_level, 0.99)

    def test_ev_driver_charges_slowly(self):
        ev = ElectricCar(soc=0.1)
        driver = RandomEVDriver(rng=self.rng)
        driver.start(ev)
        driver.act(ev)
        self.assertTrue(driver.is_refilling)
        self.assertAlmostEqual(ev.soc, 0.101, places=12)
        self.assertEqual(ev.soh, 1.0)

    def test_driver_for_variant(self):
        self.assertIsInstance(driver_for(ElectricCar()), RandomEVDriver)
        driver = driver_for(Car())
        self.assertIsInstance(driver, RandomDriver)
        self.assertNotIsInstance(driver, RandomEVDriver)

    def test_reset(self):
        car = Car(fuel_level=0.1)
        driver = RandomDriver(rng=self.rng)
        driver.start(car)
        driver.act(car)
        driver.reset()
        self.assertFalse(driver.is_refilling)
        self.assertEqual(driver.stops, 0)


if __name__ == "__main__":
    unittest.main()

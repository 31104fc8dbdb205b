import unittest

from models.smoothing import SmoothingWindow, exponential_moving_average


class ExponentialMovingAverageTests(unittest.TestCase):
    def test_reference_pair(self):
        self.assertAlmostEqual(exponential_moving_average([15.2, 60.4], 0.7), 46.84, delta=1e-9)

    def test_no_samples_is_zero(self):
        self.assertEqual(exponential_moving_average([], 0.7), 0.0)

    def test_single_sample_passes_through(self):
        self.assertEqual(exponential_moving_average([12.5], 0.5), 12.5)

    def test_fold_is_oldest_first(self):
        # 0 -> 0.5 -> 1.25
        self.assertAlmostEqual(exponential_moving_average([0.0, 1.0, 2.0], 0.5), 1.25, places=12)


class SmoothingWindowTests(unittest.TestCase):
    def test_empty_window_smooths_to_zero(self):
        window = SmoothingWindow()
        self.assertEqual(len(window), 0)
        self.assertEqual(window.smooth(0.7), 0.0)
        self.assertEqual(len(window), 0)

    def test_output_seeds_next_tick(self):
        window = SmoothingWindow(seed=0.0)
        window.push(10.0)
        self.assertAlmostEqual(window.smooth(0.7), 7.0, places=12)
        self.assertEqual(window.values(), (7.0, 10.0))

        window.push(10.0)
        self.assertAlmostEqual(window.smooth(0.7), 9.1, places=12)
        self.assertEqual(len(window), 2)

    def test_first_sample_without_seed(self):
        window = SmoothingWindow()
        window.push(5.0)
        self.assertEqual(window.smooth(0.7), 5.0)
        self.assertEqual(window.values(), (5.0, 5.0))

    def test_push_replaces_latest_only(self):
        window = SmoothingWindow(seed=2.0)
        window.push(4.0)
        window.push(6.0)
        self.assertEqual(window.values(), (2.0, 6.0))

    def test_reset(self):
        window = SmoothingWindow(seed=3.0)
        window.push(9.0)
        window.smooth(0.5)
        window.reset()
        self.assertEqual(window.values(), (0.0, 0.0))
        self.assertEqual(window.smooth(0.5), 0.0)


if __name__ == "__main__":
    unittest.main()

"""Tests for pre-validation of filter inputs."""

import unittest

from imu_ahrs.filters import (
    is_finite_sample,
    is_finite_vector,
    is_valid_9d_sample,
    is_zero_vector,
)

NAN = float("nan")
INF = float("inf")


class TestSanitize(unittest.TestCase):
    """Test cases for the input sanitizing helpers."""

    def test_finite_vector(self) -> None:
        self.assertTrue(is_finite_vector((0.0, -1.0, 2.5)))
        self.assertFalse(is_finite_vector((0.0, NAN, 1.0)))
        self.assertFalse(is_finite_vector((INF, 0.0, 1.0)))

    def test_zero_vector(self) -> None:
        self.assertTrue(is_zero_vector((0.0, -0.0, 0.0)))
        self.assertFalse(is_zero_vector((0.0, 1e-300, 0.0)))

    def test_finite_sample(self) -> None:
        self.assertTrue(is_finite_sample((0.1, 0.0, 0.0), (0.0, 0.0, 9.81)))
        self.assertFalse(is_finite_sample((0.1, NAN, 0.0), (0.0, 0.0, 9.81)))
        self.assertFalse(
            is_finite_sample((0.1, 0.0, 0.0), (0.0, 0.0, 9.81), (INF, 0.0, 0.0))
        )

    def test_valid_9d_sample_rejects_zero_mag(self) -> None:
        gyro = (0.0, 0.0, 0.0)
        accel = (0.0, 0.0, 9.81)

        self.assertTrue(is_valid_9d_sample(gyro, accel, (22.0, 0.0, -43.0)))
        self.assertFalse(is_valid_9d_sample(gyro, accel, (0.0, 0.0, 0.0)))


if __name__ == "__main__":
    unittest.main()

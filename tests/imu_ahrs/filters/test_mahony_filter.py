"""
Unit tests for the Mahony PI complementary filter.

Tests cover:
    - Construction, defaults and reset
    - Unit norm of every returned quaternion
    - Fixed points (sensor readings matching the estimate)
    - Pure gyro integration when the accelerometer reads zero
    - Integral feedback and windup reset when Ki = 0
    - Convergence of the gravity direction from a wrong initial estimate
    - Unguarded zero magnetometer reading on the 9-axis path
"""

import unittest

import numpy as np

from imu_ahrs.coords import euler_to_quat, quat_rotate_inverse
from imu_ahrs.filters import MAHONY_DEFAULT_KI, MAHONY_DEFAULT_KP, MahonyFilter

G = 9.81


def _tilted_accel(roll: float, pitch: float) -> np.ndarray:
    """Accelerometer reading of a body at rest with the given tilt."""
    q = euler_to_quat(roll, pitch, 0.0)
    return quat_rotate_inverse(q, [0.0, 0.0, G])


class TestMahonyConstruction(unittest.TestCase):
    """Test cases for filter construction and state access."""

    def test_gains_are_doubled(self) -> None:
        """Test that gains are stored as 2*Kp and 2*Ki."""
        filt = MahonyFilter(kp=0.5, ki=0.25, sample_freq=200.0)

        self.assertEqual(filt.two_kp, 1.0)
        self.assertEqual(filt.two_ki, 0.5)
        self.assertEqual(filt.sample_freq, 200.0)

    def test_with_defaults(self) -> None:
        """Test the default gain constructor."""
        filt = MahonyFilter.with_defaults(sample_freq=100.0)

        self.assertEqual(filt.two_kp, 2.0 * MAHONY_DEFAULT_KP)
        self.assertEqual(filt.two_ki, 2.0 * MAHONY_DEFAULT_KI)
        np.testing.assert_array_equal(filt.quaternion, [1.0, 0.0, 0.0, 0.0])
        np.testing.assert_array_equal(filt.integral_feedback, np.zeros(3))

    def test_returned_quaternion_is_a_copy(self) -> None:
        """Test that mutating a returned quaternion does not touch the state."""
        filt = MahonyFilter.with_defaults(100.0)
        q = filt.update_6d(0.1, 0.0, 0.0, 0.0, 0.0, G)
        q[:] = 0.0

        self.assertAlmostEqual(float(np.linalg.norm(filt.quaternion)), 1.0, places=12)

    def test_reset(self) -> None:
        """Test that reset restores identity and clears integral feedback."""
        filt = MahonyFilter.with_defaults(100.0)
        accel = _tilted_accel(0.3, -0.2)
        for _ in range(50):
            filt.update_6d(0.2, -0.1, 0.05, *accel)

        filt.reset()

        np.testing.assert_array_equal(filt.quaternion, [1.0, 0.0, 0.0, 0.0])
        np.testing.assert_array_equal(filt.integral_feedback, np.zeros(3))

    def test_reset_to_given_orientation(self) -> None:
        """Test that reset(q) sets a normalized orientation and clears feedback."""
        filt = MahonyFilter.with_defaults(100.0)
        for _ in range(50):
            filt.update_6d(0.2, -0.1, 0.05, *_tilted_accel(0.3, -0.2))
        q0 = euler_to_quat(0.3, -0.2, 0.7)

        filt.reset(2.0 * q0)

        np.testing.assert_allclose(filt.quaternion, q0, atol=1e-15)
        np.testing.assert_array_equal(filt.integral_feedback, np.zeros(3))

    def test_gains_are_read_only(self) -> None:
        filt = MahonyFilter.with_defaults(100.0)
        with self.assertRaises(AttributeError):
            filt.two_kp = 1.0
        with self.assertRaises(AttributeError):
            filt.two_ki = 1.0


class TestMahonyUpdate(unittest.TestCase):
    """Test cases for update_6d / update_9d behavior."""

    def test_unit_norm_after_every_update(self) -> None:
        """Test that every returned quaternion has unit norm."""
        rng = np.random.default_rng(7)
        filt = MahonyFilter.with_defaults(100.0)

        for _ in range(500):
            gyro = rng.normal(0.0, 1.0, 3)
            accel = rng.normal(0.0, 5.0, 3)
            mag = rng.normal(0.0, 40.0, 3)
            q = filt.update_9d(*gyro, *accel, *mag)
            self.assertAlmostEqual(float(np.linalg.norm(q)), 1.0, delta=1e-9)

            q = filt.update_6d(*gyro, *accel)
            self.assertAlmostEqual(float(np.linalg.norm(q)), 1.0, delta=1e-9)

    def test_level_at_rest_is_fixed_point_6d(self) -> None:
        """Test that a level body at rest keeps the identity orientation."""
        filt = MahonyFilter.with_defaults(100.0)
        for _ in range(100):
            q = filt.update_6d(0.0, 0.0, 0.0, 0.0, 0.0, G)

        np.testing.assert_array_equal(q, [1.0, 0.0, 0.0, 0.0])
        np.testing.assert_array_equal(filt.integral_feedback, np.zeros(3))

    def test_level_at_rest_is_fixed_point_9d(self) -> None:
        """Test stationary 9-axis input aligned with the identity estimate."""
        filt = MahonyFilter.with_defaults(100.0)
        for _ in range(100):
            q_prev = filt.quaternion
            q = filt.update_9d(0.0, 0.0, 0.0, 0.0, 0.0, 9.8, 1.0, 0.0, 0.0)

        # Change over the last update is negligible
        self.assertLess(float(np.linalg.norm(q - q_prev)), 1e-6)
        np.testing.assert_allclose(q, [1.0, 0.0, 0.0, 0.0], atol=1e-12)

    def test_inclined_field_is_fixed_point(self) -> None:
        """Test that a field with a vertical component is not corrected."""
        filt = MahonyFilter.with_defaults(100.0)
        for _ in range(100):
            q = filt.update_9d(0.0, 0.0, 0.0, 0.0, 0.0, G, 22.0, 0.0, -43.0)

        np.testing.assert_allclose(q, [1.0, 0.0, 0.0, 0.0], atol=1e-12)

    def test_tilted_and_yawed_is_fixed_point(self) -> None:
        """Test that readings matching a tilted, yawed estimate leave it untouched."""
        q0 = euler_to_quat(0.3, -0.2, 0.7)
        accel = quat_rotate_inverse(q0, [0.0, 0.0, G])
        mag = quat_rotate_inverse(q0, [22.0, 0.0, -43.0])

        filt = MahonyFilter.with_defaults(100.0)
        filt.reset(q0)
        for _ in range(100):
            q6 = filt.update_6d(0.0, 0.0, 0.0, *accel)
        np.testing.assert_allclose(q6, q0, atol=1e-10)

        filt.reset(q0)
        for _ in range(100):
            q9 = filt.update_9d(0.0, 0.0, 0.0, *accel, *mag)
        np.testing.assert_allclose(q9, q0, atol=1e-10)

    def test_zero_accel_integrates_gyro_only(self) -> None:
        """Test that a zero accelerometer skips every correction term."""
        gx, gy, gz = 0.1, -0.2, 0.3
        dt = 0.01
        filt = MahonyFilter(kp=5.0, ki=5.0, sample_freq=100.0)

        q = filt.update_9d(gx, gy, gz, 0.0, 0.0, 0.0, 0.3, 0.1, -0.9)

        expected = np.array([1.0, 0.5 * gx * dt, 0.5 * gy * dt, 0.5 * gz * dt])
        expected /= np.linalg.norm(expected)
        np.testing.assert_allclose(q, expected, atol=1e-15)
        np.testing.assert_array_equal(filt.integral_feedback, np.zeros(3))

    def test_zero_accel_6d_matches_9d(self) -> None:
        """Test that both paths integrate the same rates when accel is zero."""
        filt_6d = MahonyFilter.with_defaults(50.0)
        filt_9d = MahonyFilter.with_defaults(50.0)

        for _ in range(20):
            q6 = filt_6d.update_6d(0.4, 0.1, -0.3, 0.0, 0.0, 0.0)
            q9 = filt_9d.update_9d(0.4, 0.1, -0.3, 0.0, 0.0, 0.0, 1.0, 2.0, 3.0)

        np.testing.assert_array_equal(q6, q9)

    def test_integral_feedback_accumulates(self) -> None:
        """Test that a persistent tilt error builds up integral feedback."""
        filt = MahonyFilter(kp=0.2, ki=0.1, sample_freq=100.0)
        accel = _tilted_accel(0.5, 0.0)

        filt.update_6d(0.0, 0.0, 0.0, *accel)
        first = filt.integral_feedback
        filt.update_6d(0.0, 0.0, 0.0, *accel)
        second = filt.integral_feedback

        self.assertGreater(float(np.linalg.norm(first)), 0.0)
        self.assertGreater(float(np.linalg.norm(second)), float(np.linalg.norm(first)))

    def test_no_windup_with_zero_ki(self) -> None:
        """Test that Ki = 0 keeps the integral accumulator at zero."""
        filt = MahonyFilter(kp=0.5, ki=0.0, sample_freq=100.0)
        accel = _tilted_accel(0.5, -0.4)

        for _ in range(200):
            filt.update_9d(0.01, 0.02, -0.01, *accel, 22.0, 5.0, -43.0)
            np.testing.assert_array_equal(filt.integral_feedback, np.zeros(3))

    def test_converges_to_gravity_direction(self) -> None:
        """Test that the estimated gravity direction converges to the accel."""
        roll, pitch = np.deg2rad(30.0), np.deg2rad(-20.0)
        accel = _tilted_accel(roll, pitch)
        filt = MahonyFilter(kp=1.0, ki=0.0, sample_freq=100.0)

        for _ in range(3000):
            q = filt.update_6d(0.0, 0.0, 0.0, *accel)

        predicted_up = quat_rotate_inverse(q, [0.0, 0.0, 1.0])
        np.testing.assert_allclose(predicted_up, accel / np.linalg.norm(accel), atol=1e-6)

    def test_integral_absorbs_gyro_bias(self) -> None:
        """Test that integral feedback cancels a constant gyro bias."""
        bias = np.array([0.02, -0.01, 0.0])
        filt = MahonyFilter(kp=1.0, ki=0.5, sample_freq=100.0)

        for _ in range(6000):
            filt.update_6d(*bias, 0.0, 0.0, G)

        np.testing.assert_allclose(filt.integral_feedback[:2], -bias[:2], atol=1e-4)

    def test_zero_mag_with_valid_accel_yields_nan(self) -> None:
        """Test that the 9-axis zero magnetometer case is not guarded."""
        filt = MahonyFilter.with_defaults(100.0)

        with np.errstate(all="ignore"):
            q = filt.update_9d(0.0, 0.0, 0.0, 0.0, 0.0, G, 0.0, 0.0, 0.0)

        self.assertTrue(np.all(np.isnan(q)))
        self.assertTrue(np.all(np.isnan(filt.quaternion)))

    def test_zero_sample_freq_yields_nan(self) -> None:
        """Test that a zero sample frequency degrades to nan without raising."""
        filt = MahonyFilter(kp=0.2, ki=0.1, sample_freq=0.0)

        with np.errstate(all="ignore"):
            q = filt.update_6d(0.1, 0.0, 0.0, 0.0, 0.0, G)

        self.assertFalse(np.all(np.isfinite(q)))


if __name__ == "__main__":
    unittest.main()

"""Unit tests for synthetic IMU + magnetometer trace generation."""

import unittest

import numpy as np
import pytest

from imu_ahrs.coords import euler_to_quat, quat_to_euler
from imu_ahrs.sim import (
    EARTH_MAG_FIELD,
    GRAVITY,
    generate_angular_rate_profile,
    generate_imu_from_orientation,
    generate_telemetry_trace,
    integrate_orientation,
)


class TestForwardModel(unittest.TestCase):
    """Test cases for generate_imu_from_orientation."""

    def test_level_reads_gravity_and_field(self) -> None:
        accel, mag = generate_imu_from_orientation(np.array([[1.0, 0.0, 0.0, 0.0]]))

        np.testing.assert_allclose(accel[0], [0.0, 0.0, GRAVITY], atol=1e-12)
        np.testing.assert_allclose(mag[0], EARTH_MAG_FIELD, atol=1e-12)

    def test_roll_moves_gravity_to_y(self) -> None:
        """Test that a 90° roll puts the up axis on body +y."""
        q = euler_to_quat(np.pi / 2, 0.0, 0.0)
        accel, _ = generate_imu_from_orientation(q[np.newaxis, :], g=1.0)

        np.testing.assert_allclose(accel[0], [0.0, 1.0, 0.0], atol=1e-12)

    def test_magnitudes_preserved(self) -> None:
        quats = np.array([euler_to_quat(0.3 * k, -0.2 * k, 0.5 * k) for k in range(10)])
        accel, mag = generate_imu_from_orientation(quats)

        np.testing.assert_allclose(np.linalg.norm(accel, axis=1), GRAVITY, atol=1e-12)
        np.testing.assert_allclose(
            np.linalg.norm(mag, axis=1), np.linalg.norm(EARTH_MAG_FIELD), atol=1e-12
        )


class TestTrajectory(unittest.TestCase):
    """Test cases for angular rate profiles and truth integration."""

    def test_constant_yaw_rate(self) -> None:
        """Test that 1 s at π/2 rad/s about z yields a 90° yaw."""
        omega = np.tile([0.0, 0.0, np.pi / 2], (100, 1))
        quats = integrate_orientation(omega, dt=0.01)

        np.testing.assert_allclose(quat_to_euler(quats[-1]), [0.0, 0.0, np.pi / 2], atol=1e-12)

    def test_profile_shape(self) -> None:
        t = np.linspace(0.0, 10.0, 501)
        omega = generate_angular_rate_profile(t, amplitudes=(1.0, 0.0, 0.5))

        self.assertEqual(omega.shape, (501, 3))
        np.testing.assert_array_equal(omega[:, 1], 0.0)
        self.assertLessEqual(np.max(np.abs(omega[:, 0])), 1.0)

    def test_invalid_inputs(self) -> None:
        with pytest.raises(ValueError, match="dt must be positive"):
            integrate_orientation(np.zeros((3, 3)), dt=0.0)
        with pytest.raises(ValueError, match="omega_b must have shape"):
            integrate_orientation(np.zeros((3, 2)), dt=0.01)


class TestTelemetryTrace(unittest.TestCase):
    """Test cases for generate_telemetry_trace."""

    def test_shapes_and_time_base(self) -> None:
        series, truth = generate_telemetry_trace(duration=2.0, sample_rate_hz=50.0)

        self.assertEqual(len(series), 100)
        self.assertEqual(truth.shape, (100, 4))
        self.assertAlmostEqual(series.t[0], 0.02)
        self.assertAlmostEqual(series.sample_rate_hz, 50.0)
        self.assertEqual(series.meta["source"], "simulated")

    def test_reproducible_with_seed(self) -> None:
        a, _ = generate_telemetry_trace(duration=1.0, seed=5)
        b, _ = generate_telemetry_trace(duration=1.0, seed=5)
        c, _ = generate_telemetry_trace(duration=1.0, seed=6)

        np.testing.assert_array_equal(a.gyro, b.gyro)
        self.assertFalse(np.array_equal(a.gyro, c.gyro))

    def test_noise_free_trace_is_exact(self) -> None:
        series, truth = generate_telemetry_trace(
            duration=1.0, gyro_noise_std=0.0, accel_noise_std=0.0, mag_noise_std=0.0
        )
        accel, mag = generate_imu_from_orientation(truth)

        np.testing.assert_array_equal(series.accel, accel)
        np.testing.assert_array_equal(series.mag, mag)

    def test_gyro_bias_added(self) -> None:
        clean, _ = generate_telemetry_trace(duration=1.0, gyro_noise_std=0.0)
        biased, _ = generate_telemetry_trace(
            duration=1.0, gyro_noise_std=0.0, gyro_bias=(0.01, 0.0, -0.02)
        )

        np.testing.assert_allclose(biased.gyro - clean.gyro, np.tile([0.01, 0.0, -0.02], (100, 1)), atol=1e-15)

    def test_invalid_rate_raises(self) -> None:
        with pytest.raises(ValueError, match="sample_rate_hz must be positive"):
            generate_telemetry_trace(sample_rate_hz=0.0)


if __name__ == "__main__":
    unittest.main()

"""Unit tests for sensor sample and telemetry series containers."""

import unittest

import numpy as np
import pytest

from imu_ahrs.sensors import ImuSample, TelemetryRecord, TelemetrySeries


def _series(n: int, meta=None) -> TelemetrySeries:
    return TelemetrySeries(
        t=np.arange(n) * 0.02,
        accel=np.tile([0.0, 0.0, 9.81], (n, 1)),
        gyro=np.zeros((n, 3)),
        mag=np.tile([22.0, 0.0, -43.0], (n, 1)),
        meta=meta or {},
    )


class TestImuSample(unittest.TestCase):
    """Test suite for ImuSample."""

    def test_six_axis_args(self) -> None:
        sample = ImuSample(gyro=(0.1, 0.2, 0.3), accel=(1.0, 2.0, 3.0))

        self.assertFalse(sample.has_mag)
        self.assertEqual(sample.as_6d_args(), (0.1, 0.2, 0.3, 1.0, 2.0, 3.0))

    def test_nine_axis_args(self) -> None:
        sample = ImuSample(gyro=(0.1, 0.2, 0.3), accel=(1.0, 2.0, 3.0), mag=(4.0, 5.0, 6.0))

        self.assertTrue(sample.has_mag)
        self.assertEqual(len(sample.as_9d_args()), 9)

    def test_nine_axis_without_mag_raises(self) -> None:
        sample = ImuSample(gyro=(0.0, 0.0, 0.0), accel=(0.0, 0.0, 9.81))

        with pytest.raises(ValueError, match="no magnetometer"):
            sample.as_9d_args()


class TestTelemetrySeries(unittest.TestCase):
    """Test suite for TelemetrySeries."""

    def test_indexing_returns_record(self) -> None:
        record = _series(3)[1]

        self.assertIsInstance(record, TelemetryRecord)
        self.assertEqual(record.time, 0.02)
        self.assertEqual(record.accel, (0.0, 0.0, 9.81))
        self.assertIsInstance(record.gyro[0], float)
        self.assertEqual(record.to_sample().mag, (22.0, 0.0, -43.0))

    def test_indexing_accepts_numpy_integers(self) -> None:
        series = _series(3)

        self.assertEqual(series[np.int64(2)].time, 0.04)
        self.assertEqual(series[-1].time, 0.04)

    def test_slicing_raises_type_error(self) -> None:
        series = _series(3)

        with pytest.raises(TypeError, match="must be integers, got slice"):
            series[0:2]
        with pytest.raises(TypeError, match="must be integers"):
            series[0.5]

    def test_iteration_in_time_order(self) -> None:
        times = [record.time for record in _series(4)]

        self.assertEqual(times, sorted(times))
        self.assertEqual(len(times), 4)

    def test_immutability(self) -> None:
        series = _series(2)

        with pytest.raises(Exception):
            series.t = np.zeros(2)

    def test_invalid_t_shape(self) -> None:
        with pytest.raises(ValueError, match="must be 1D array"):
            TelemetrySeries(
                t=np.zeros((3, 1)),
                accel=np.zeros((3, 3)),
                gyro=np.zeros((3, 3)),
                mag=np.zeros((3, 3)),
            )

    def test_invalid_mag_shape(self) -> None:
        with pytest.raises(ValueError, match="mag must have shape"):
            TelemetrySeries(
                t=np.zeros(3),
                accel=np.zeros((3, 3)),
                gyro=np.zeros((3, 3)),
                mag=np.zeros((3, 2)),
            )

    def test_sample_rate_from_timestamps(self) -> None:
        self.assertAlmostEqual(_series(10).sample_rate_hz, 50.0)

    def test_sample_rate_falls_back_to_meta(self) -> None:
        self.assertEqual(_series(1, meta={"sample_rate_hz": 200.0}).sample_rate_hz, 200.0)

    def test_sample_rate_unknown_raises(self) -> None:
        with pytest.raises(ValueError, match="Cannot infer sample rate"):
            _series(1).sample_rate_hz

    def test_duration(self) -> None:
        self.assertAlmostEqual(_series(11).duration, 0.2)
        self.assertEqual(_series(0).duration, 0.0)


if __name__ == "__main__":
    unittest.main()

"""
Batch driver that feeds a telemetry series through one filter.
"""

import logging
from dataclasses import dataclass

import numpy as np

from imu_ahrs.filters.base import OrientationFilter
from imu_ahrs.filters.sanitize import is_finite_sample, is_valid_9d_sample
from imu_ahrs.filters.types import IDENTITY_QUATERNION
from imu_ahrs.sensors.types import TelemetrySeries

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FilterRun:
    """
    Result of running a filter over a series.

    Attributes:
        t: Timestamps, shape (N,).
        quaternions: Orientation after each epoch, shape (N, 4),
                     scalar-first. Skipped epochs repeat the previous
                     orientation.
        n_skipped: Number of epochs not passed to the filter.
    """

    t: np.ndarray
    quaternions: np.ndarray
    n_skipped: int = 0


def run_filter(
    filt: OrientationFilter,
    series: TelemetrySeries,
    use_magnetometer: bool = True,
    skip_invalid: bool = False,
) -> FilterRun:
    """
    Apply a filter to every epoch of a series in time order.

    Args:
        filt: Filter instance. Its state is advanced in place.
        series: Telemetry to fuse.
        use_magnetometer: Call update_9d if True, update_6d otherwise.
        skip_invalid: If True, epochs with non-finite axes (or, on the
                      9-axis path, a zero magnetometer) are not passed to
                      the filter and the previous orientation is repeated.

    Returns:
        FilterRun with one quaternion per epoch.

    Example:
        >>> from imu_ahrs.filters import MadgwickFilter
        >>> series = load_telemetry_csv("telemetry.csv")
        >>> run = run_filter(MadgwickFilter(0.1, 100.0), series)
        >>> run.quaternions.shape == (len(series), 4)
        True
    """
    n = len(series)
    quaternions = np.empty((n, 4), dtype=np.float64)
    q = np.asarray(getattr(filt, "quaternion", IDENTITY_QUATERNION), dtype=np.float64)
    n_skipped = 0

    for i in range(n):
        gyro = series.gyro[i]
        accel = series.accel[i]
        mag = series.mag[i]

        if skip_invalid:
            valid = (
                is_valid_9d_sample(gyro, accel, mag)
                if use_magnetometer
                else is_finite_sample(gyro, accel)
            )
            if not valid:
                n_skipped += 1
                quaternions[i] = q
                continue

        if use_magnetometer:
            q = filt.update_9d(
                float(gyro[0]), float(gyro[1]), float(gyro[2]),
                float(accel[0]), float(accel[1]), float(accel[2]),
                float(mag[0]), float(mag[1]), float(mag[2]),
            )
        else:
            q = filt.update_6d(
                float(gyro[0]), float(gyro[1]), float(gyro[2]),
                float(accel[0]), float(accel[1]), float(accel[2]),
            )
        quaternions[i] = q

    if n_skipped:
        logger.warning("Skipped %d of %d invalid epochs", n_skipped, n)
    logger.debug("Ran %s over %d epochs", type(filt).__name__, n)

    return FilterRun(t=series.t.copy(), quaternions=quaternions, n_skipped=n_skipped)
